# tests/conftest.py

import datetime

import pytest

from core.controller import FormController
from core.errors import TransportFailure

TODAY = datetime.date(2026, 10, 17)
NOW = datetime.datetime(2026, 10, 17, 9, 30)


class FakeTripsAPI:
    """Stands in for services.trips_api; records calls, replays canned rows."""

    def __init__(self, rows=None):
        self.rows = list(rows or [])
        self.posted = []
        self.fail_fetch = False
        self.fail_create = False

    def fetch_trips(self):
        if self.fail_fetch:
            raise TransportFailure("trips API 500: boom", 500)
        return list(self.rows)

    def create_trip(self, payload):
        if self.fail_create:
            raise TransportFailure("trips API 400: bad payload", 400)
        self.posted.append(payload)
        record = dict(payload, _id=f"id{len(self.rows) + 1}", tripNumber=len(self.rows) + 1,
                      totalCost=payload["tripCost"] + payload["extraCost"],
                      createdAt="2026-10-17T09:31:00Z")
        self.rows.append(record)
        return record


def record(**overrides):
    row = {
        "_id": "abc",
        "tripNumber": 1,
        "tripDate": "2026-10-17",
        "tripTime": "10:00",
        "tripDuration": "02:30",
        "numAttendees": 6,
        "tripCost": 500,
        "extraCost": 50,
        "extraService": "",
        "totalCost": 550,
        "tripType": "nile",
        "restaurantName": [],
        "vesselName": "أباظة",
        "tripManager": "شركة أباظة",
        "isMall": False,
        "additionalNotes": "",
        "createdAt": "2026-10-17T08:00:00Z",
    }
    row.update(overrides)
    return row


@pytest.fixture
def api():
    return FakeTripsAPI()


@pytest.fixture
def controller(api):
    return FormController(api=api, today=lambda: TODAY, now=lambda: NOW)


@pytest.fixture
def filled(controller):
    """A controller whose draft passes every submit rule."""
    controller.update_field("numAttendees", "4")
    controller.update_field("tripCost", "300")
    controller.set_duration_hours("01")
    controller.set_duration_minutes("30")
    controller.set_trip_type("nile")
    return controller
