# core/models.py

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

# ──────────────────────────────────────────────────────────────────────────────
# Static tables
# ──────────────────────────────────────────────────────────────────────────────
RESTAURANTS: Tuple[str, ...] = (
    "دار نورة",
    "وردة",
    "سكند كب",
    "موخيتو",
    "كيمس",
    "انكل زاك",
    "نيليرا/ عشق الخليج",
    "اخري",
)

TRIP_TYPES: Dict[str, str] = {
    "nile": "Nile trip",
    "foodBeverage": "Food & beverage",
    "drink": "Drinks",
}

# Trip types that must name at least one restaurant
RESTAURANT_TRIP_TYPES = ("foodBeverage", "drink")

VESSEL_NAME = "أباظة"
TRIP_MANAGER = "شركة أباظة"

HOUR_OPTIONS: Tuple[str, ...] = tuple(f"{h:02d}" for h in range(0, 25))
MINUTE_OPTIONS: Tuple[str, ...] = tuple(f"{m:02d}" for m in range(1, 61))


def today_iso() -> str:
    return dt.date.today().isoformat()


def now_hhmm() -> str:
    return dt.datetime.now().strftime("%H:%M")


# ──────────────────────────────────────────────────────────────────────────────
# Draft held by the form
# ──────────────────────────────────────────────────────────────────────────────
@dataclass
class TripDraft:
    trip_date: str = field(default_factory=today_iso)
    trip_time: str = field(default_factory=now_hhmm)
    trip_duration: str = ""
    duration_hours: str = ""
    duration_minutes: str = ""
    num_attendees: str = ""
    trip_cost: str = ""
    extra_cost: str = ""
    extra_service: str = ""
    trip_type: str = ""
    restaurant_name: List[str] = field(default_factory=list)
    vessel_name: str = VESSEL_NAME
    trip_manager: str = TRIP_MANAGER
    additional_notes: str = ""
    is_mall: bool = False

    def copy(self, **changes) -> "TripDraft":
        """Return a copy with `changes` applied (the restaurant list is never shared)."""
        changes.setdefault("restaurant_name", list(self.restaurant_name))
        return replace(self, **changes)


# attribute name → wire name
DRAFT_WIRE_NAMES: Dict[str, str] = {
    "trip_date": "tripDate",
    "trip_time": "tripTime",
    "trip_duration": "tripDuration",
    "duration_hours": "durationHours",
    "duration_minutes": "durationMinutes",
    "num_attendees": "numAttendees",
    "trip_cost": "tripCost",
    "extra_cost": "extraCost",
    "extra_service": "extraService",
    "trip_type": "tripType",
    "restaurant_name": "restaurantName",
    "vessel_name": "vesselName",
    "trip_manager": "tripManager",
    "additional_notes": "additionalNotes",
    "is_mall": "isMall",
}
WIRE_TO_ATTR: Dict[str, str] = {v: k for k, v in DRAFT_WIRE_NAMES.items()}


# ──────────────────────────────────────────────────────────────────────────────
# Record returned by the server
# ──────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class TripRecord:
    """
    A persisted trip as the API returns it. tripNumber, totalCost, createdAt
    and the id are assigned server-side and are only ever displayed here.
    """
    id: Optional[str]
    trip_number: Optional[int]
    trip_date: str
    trip_time: str
    trip_duration: str
    num_attendees: Any
    trip_cost: Any
    extra_cost: Any
    extra_service: str
    total_cost: Any
    trip_type: str
    restaurant_name: Tuple[str, ...]
    vessel_name: str
    trip_manager: str
    is_mall: bool
    additional_notes: str
    created_at: str

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "TripRecord":
        ident = row.get("_id", row.get("id"))
        restaurants = row.get("restaurantName") or []
        if isinstance(restaurants, str):
            restaurants = [restaurants]
        return cls(
            id=str(ident) if ident is not None else None,
            trip_number=row.get("tripNumber"),
            trip_date=row.get("tripDate") or "",
            trip_time=row.get("tripTime") or "",
            trip_duration=row.get("tripDuration") or "",
            num_attendees=row.get("numAttendees"),
            trip_cost=row.get("tripCost"),
            extra_cost=row.get("extraCost"),
            extra_service=row.get("extraService") or "",
            total_cost=row.get("totalCost"),
            trip_type=row.get("tripType") or "",
            restaurant_name=tuple(restaurants),
            vessel_name=row.get("vesselName") or "",
            trip_manager=row.get("tripManager") or "",
            is_mall=bool(row.get("isMall", False)),
            additional_notes=row.get("additionalNotes") or "",
            created_at=row.get("createdAt") or "",
        )
