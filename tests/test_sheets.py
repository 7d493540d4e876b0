# tests/test_sheets.py

import datetime
import os

import pandas as pd

from core.models import TripRecord
from services.sheets import EXPORT_COLUMNS, SHEET_NAME, build_export_frame, export_filename, write_workbook
from conftest import record


def test_export_filename_embeds_the_date():
    assert export_filename(datetime.date(2026, 10, 17)) == "naylos_trips_2026-10-17.xlsx"


def test_frame_columns_and_translations():
    trips = [
        TripRecord.from_dict(record(tripType="drink", restaurantName=["وردة", "كيمس"],
                                    isMall=True, additionalNotes="VIP", extraService="DJ")),
        TripRecord.from_dict(record(tripNumber=None, tripType="nile")),
    ]
    df = build_export_frame(trips)

    assert list(df.columns) == EXPORT_COLUMNS
    first, second = df.iloc[0], df.iloc[1]
    assert first["Trip type"] == "Drinks"
    assert first["Restaurant"] == "وردة ، كيمس"
    assert first["Mall trip"] == "Yes"
    assert first["Additional notes"] == "VIP"
    assert first["Extra service type"] == "DJ"
    assert second["Trip number"] == 2          # falls back to the row position
    assert second["Restaurant"] == "-"
    assert second["Extra service type"] == "-"
    assert second["Additional notes"] == "-"
    assert second["Mall trip"] == "No"


def test_write_workbook_round_trip(tmp_path):
    trips = [TripRecord.from_dict(record())]
    path = write_workbook(trips, str(tmp_path), day=datetime.date(2026, 10, 17))
    assert os.path.basename(path) == "naylos_trips_2026-10-17.xlsx"

    df = pd.read_excel(path, sheet_name=SHEET_NAME)
    assert len(df) == 1
    assert df.iloc[0]["Total cost"] == 550
    assert df.iloc[0]["Vessel"] == "أباظة"
