# services/sheets.py

from __future__ import annotations
import io, os, datetime as dt
from typing import Iterable, Optional

import pandas as pd

from core.formatting import restaurants_label, trip_type_label, yes_no
from core.models import TripRecord

SHEET_NAME = "Naylos trips"

EXPORT_COLUMNS = [
    "Trip number",
    "Trip date",
    "Trip time",
    "Duration",
    "Attendees",
    "Trip cost",
    "Extra services cost",
    "Extra service type",
    "Total cost",
    "Trip type",
    "Restaurant",
    "Vessel",
    "Trip manager",
    "Mall trip",
    "Additional notes",
    "Registered at",
]


def export_filename(day: Optional[dt.date] = None) -> str:
    day = day or dt.date.today()
    return f"naylos_trips_{day.isoformat()}.xlsx"


def build_export_frame(trips: Iterable[TripRecord]) -> pd.DataFrame:
    """
    One row per trip, fixed column order, enumerated fields translated
    to their display labels.
    """
    rows = [
        [
            t.trip_number or idx,
            t.trip_date,
            t.trip_time,
            t.trip_duration,
            t.num_attendees,
            t.trip_cost,
            t.extra_cost,
            t.extra_service or "-",
            t.total_cost,
            trip_type_label(t.trip_type),
            restaurants_label(t.restaurant_name),
            t.vessel_name,
            t.trip_manager,
            yes_no(t.is_mall),
            t.additional_notes or "-",
            t.created_at,
        ]
        for idx, t in enumerate(trips, start=1)
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def _write(df: pd.DataFrame, target) -> None:
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)


def write_workbook(trips: Iterable[TripRecord], directory: str, day: Optional[dt.date] = None) -> str:
    """
    Write the XLSX into `directory` and return its path.
    """
    os.makedirs(directory, exist_ok=True)
    xlsx_path = os.path.join(directory, export_filename(day))
    _write(build_export_frame(trips), xlsx_path)
    return xlsx_path


def workbook_bytes(trips: Iterable[TripRecord]) -> bytes:
    buf = io.BytesIO()
    _write(build_export_frame(trips), buf)
    return buf.getvalue()
