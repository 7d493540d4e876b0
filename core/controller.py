# core/controller.py

from __future__ import annotations

import datetime as dt
import math
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from rich.console import Console

from core.errors import EmptyExportFailure, TransportFailure, ValidationFailure
from core.formatting import preview_trip_number
from core.models import (
    DRAFT_WIRE_NAMES,
    RESTAURANT_TRIP_TYPES,
    RESTAURANTS,
    TRIP_TYPES,
    WIRE_TO_ATTR,
    TripDraft,
    TripRecord,
)
from services import sheets, trips_api

console = Console(stderr=True)

REQUIRED_FIELDS = (
    "trip_date",
    "trip_time",
    "trip_duration",
    "num_attendees",
    "trip_type",
    "vessel_name",
    "trip_manager",
)
READ_ONLY_FIELDS = ("vessel_name", "trip_manager")

MSG_REQUIRED = "Please fill in all required fields."
MSG_COST = "Trip cost must be greater than zero."
MSG_RESTAURANT = "Please select at least one restaurant."
MSG_PAST_DATE = "A trip cannot be registered with a past date."


def _blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def _pad(value: Any) -> str:
    if _blank(value):
        return ""
    return str(value).strip().zfill(2)


def _to_number(value: Any):
    """Empty → 0, "3" → 3, "2.5" → 2.5, anything else (nan and inf included) → None."""
    if _blank(value):
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value if math.isfinite(value) else None
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


_TRUE = ("true", "1", "yes", "on")
_FALSE = ("false", "0", "no", "off", "")


def _to_flag(value: Any) -> bool:
    """Booleans as-is; "true"/"false" style strings parsed; anything else is a ValueError."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Not a yes/no value: {value!r}")


@dataclass(frozen=True)
class SubmitOutcome:
    """
    Result of a stored trip. `refresh_error` is set when the trip was saved
    but the list could not be re-fetched afterwards.
    """
    record: Optional[TripRecord]
    refresh_error: Optional[TransportFailure] = None


class FormController:
    """
    Owns the draft trip and the cached list of registered trips.

    Every mutating call returns the new state; the caller re-renders.
    `api` must expose fetch_trips() and create_trip(payload); `today` and
    `now` are the clock used for defaults and the past-date rule.
    """

    def __init__(
        self,
        api=trips_api,
        today: Callable[[], dt.date] = dt.date.today,
        now: Callable[[], dt.datetime] = dt.datetime.now,
    ):
        self._api = api
        self._today = today
        self._now = now
        self.draft = self._fresh_draft()
        self.trips: Tuple[TripRecord, ...] = ()

    # ──────────────────────────────────────────────────────────────────────
    # Draft editing
    # ──────────────────────────────────────────────────────────────────────
    def _fresh_draft(self) -> TripDraft:
        return TripDraft(
            trip_date=self._today().isoformat(),
            trip_time=self._now().strftime("%H:%M"),
        )

    def reset(self) -> TripDraft:
        self.draft = self._fresh_draft()
        return self.draft

    def update_field(self, name: str, value: Any) -> TripDraft:
        attr = WIRE_TO_ATTR.get(name, name)
        if attr not in DRAFT_WIRE_NAMES or attr in READ_ONLY_FIELDS or attr == "restaurant_name":
            raise KeyError(name)

        # fields with side effects go through their own setter
        if attr == "trip_type":
            return self.set_trip_type(value)
        if attr == "is_mall":
            return self.set_is_mall(_to_flag(value))
        if attr == "duration_hours":
            return self.set_duration_hours(value)
        if attr == "duration_minutes":
            return self.set_duration_minutes(value)

        self.draft = self.draft.copy(**{attr: value})
        return self.draft

    def set_trip_type(self, value: str) -> TripDraft:
        if value not in TRIP_TYPES:
            raise ValueError(f"Unknown trip type: {value!r}")
        restaurants = list(self.draft.restaurant_name) if value in RESTAURANT_TRIP_TYPES else []
        self.draft = self.draft.copy(trip_type=value, restaurant_name=restaurants)
        return self.draft

    def toggle_restaurant(self, name: str) -> TripDraft:
        if name not in RESTAURANTS:
            raise ValueError(f"Unknown restaurant: {name!r}")
        current = list(self.draft.restaurant_name)
        if name in current:
            current = [r for r in current if r != name]
        else:
            current.append(name)
        self.draft = self.draft.copy(restaurant_name=current)
        return self.draft

    def set_duration_hours(self, hours: Any) -> TripDraft:
        hh = _pad(hours)
        mm = self.draft.duration_minutes
        self.draft = self.draft.copy(
            duration_hours=hh,
            trip_duration=f"{hh or '00'}:{mm or '00'}",
        )
        return self.draft

    def set_duration_minutes(self, minutes: Any) -> TripDraft:
        mm = _pad(minutes)
        hh = self.draft.duration_hours
        self.draft = self.draft.copy(
            duration_minutes=mm,
            trip_duration=f"{hh or '00'}:{mm or '00'}",
        )
        return self.draft

    def set_is_mall(self, flag: bool) -> TripDraft:
        changes: Dict[str, Any] = {"is_mall": bool(flag)}
        if flag:
            changes["trip_cost"] = ""
        self.draft = self.draft.copy(**changes)
        return self.draft

    def preview_trip_number(self) -> str:
        return preview_trip_number(self.draft.trip_date, self.trips)

    # ──────────────────────────────────────────────────────────────────────
    # Validation & submission
    # ──────────────────────────────────────────────────────────────────────
    def validate(self) -> None:
        d = self.draft

        if any(_blank(getattr(d, f)) for f in REQUIRED_FIELDS):
            raise ValidationFailure("required", MSG_REQUIRED)

        if not d.is_mall:
            cost = _to_number(d.trip_cost)
            if _blank(d.trip_cost) or cost is None or cost <= 0:
                raise ValidationFailure("cost", MSG_COST)

        if d.trip_type in RESTAURANT_TRIP_TYPES and not d.restaurant_name:
            raise ValidationFailure("restaurant", MSG_RESTAURANT)

        try:
            trip_day = dt.date.fromisoformat(str(d.trip_date).strip())
        except ValueError:
            raise ValidationFailure("past_date", MSG_PAST_DATE)
        if trip_day < self._today():
            raise ValidationFailure("past_date", MSG_PAST_DATE)

    def build_payload(self) -> Dict[str, Any]:
        d = self.draft
        payload = {wire: getattr(d, attr) for attr, wire in DRAFT_WIRE_NAMES.items()}
        payload["restaurantName"] = list(d.restaurant_name)
        payload["tripCost"] = _to_number(d.trip_cost)
        payload["extraCost"] = _to_number(d.extra_cost)
        payload["numAttendees"] = _to_number(d.num_attendees)
        payload["tripDuration"] = (
            d.trip_duration or f"{d.duration_hours or '00'}:{d.duration_minutes or '00'}"
        )
        return payload

    def submit(self) -> SubmitOutcome:
        """
        Validate, POST, refresh the list, then reset the draft.
        A ValidationFailure or TransportFailure from the POST leaves the draft as it was.
        Once the POST succeeds the trip is stored: a failed refresh is reported
        on the outcome, never raised.
        """
        self.validate()
        payload = self.build_payload()

        try:
            created = self._api.create_trip(payload)
        except TransportFailure as e:
            console.print(f"[red]Error saving trip:[/] {e.message}")
            raise

        refresh_error = None
        try:
            self.refresh_list()
        except TransportFailure as e:
            refresh_error = e

        self.reset()
        record = TripRecord.from_dict(created) if created else None
        return SubmitOutcome(record=record, refresh_error=refresh_error)

    # ──────────────────────────────────────────────────────────────────────
    # List & export
    # ──────────────────────────────────────────────────────────────────────
    def refresh_list(self) -> Tuple[TripRecord, ...]:
        try:
            rows = self._api.fetch_trips()
        except TransportFailure as e:
            console.print(f"[red]Fetching trips failed:[/] {e.message}")
            raise
        self.trips = tuple(TripRecord.from_dict(r) for r in rows or [])
        return self.trips

    def export_list(self, directory: Optional[str] = None) -> str:
        if not self.trips:
            raise EmptyExportFailure()
        path = sheets.write_workbook(self.trips, directory or os.getcwd(), day=self._today())
        console.print(f"[green]Exported {len(self.trips)} trips →[/] {path}")
        return path

    def export_bytes(self) -> Tuple[str, bytes]:
        """(file name, XLSX content) for a browser download."""
        if not self.trips:
            raise EmptyExportFailure()
        return sheets.export_filename(self._today()), sheets.workbook_bytes(self.trips)
