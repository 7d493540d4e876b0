# tests/test_validation.py

import datetime

import pytest

from core.errors import ValidationFailure


@pytest.mark.parametrize(
    "field",
    ["tripDate", "tripTime", "numAttendees"],
)
def test_missing_required_field_blocks_submit(filled, api, field):
    filled.update_field(field, "  ")
    with pytest.raises(ValidationFailure) as exc:
        filled.submit()
    assert exc.value.rule == "required"
    assert api.posted == []


def test_missing_duration_and_type_are_required(controller, api):
    controller.update_field("numAttendees", "2")
    controller.update_field("tripCost", "100")
    with pytest.raises(ValidationFailure) as exc:
        controller.submit()
    assert exc.value.rule == "required"

    controller.set_duration_minutes("10")
    with pytest.raises(ValidationFailure) as exc:
        controller.submit()
    assert exc.value.rule == "required"   # trip type still unset
    assert api.posted == []


@pytest.mark.parametrize("cost", ["", "0", "-5", "abc", "nan", "inf", "-inf"])
def test_cost_must_be_positive_unless_mall(filled, api, cost):
    filled.update_field("tripCost", cost)
    with pytest.raises(ValidationFailure) as exc:
        filled.submit()
    assert exc.value.rule == "cost"
    assert api.posted == []


@pytest.mark.parametrize("cost", ["", "0", "-5", "250"])
def test_mall_trip_never_requires_cost(filled, api, cost):
    filled.set_is_mall(True)
    filled.update_field("tripCost", cost)
    filled.submit()
    assert len(api.posted) == 1


def test_setting_mall_clears_cost(filled):
    draft = filled.set_is_mall(True)
    assert draft.is_mall is True
    assert draft.trip_cost == ""
    draft = filled.set_is_mall(False)
    assert draft.trip_cost == ""


@pytest.mark.parametrize("trip_type", ["foodBeverage", "drink"])
def test_food_and_drink_trips_need_a_restaurant(filled, api, trip_type):
    filled.set_trip_type(trip_type)
    with pytest.raises(ValidationFailure) as exc:
        filled.submit()
    assert exc.value.rule == "restaurant"

    filled.toggle_restaurant("وردة")
    filled.submit()
    assert api.posted[0]["restaurantName"] == ["وردة"]


def test_past_date_rejected_even_when_all_else_valid(filled, api):
    filled.update_field("tripDate", "2026-10-16")
    with pytest.raises(ValidationFailure) as exc:
        filled.submit()
    assert exc.value.rule == "past_date"
    assert api.posted == []


def test_today_and_future_dates_accepted(filled, api):
    filled.update_field("tripDate", "2026-10-17")
    filled.validate()
    filled.update_field("tripDate", "2027-01-01")
    filled.validate()


def test_garbled_date_counts_as_past(filled):
    filled.update_field("tripDate", "17/10/2026")
    with pytest.raises(ValidationFailure) as exc:
        filled.validate()
    assert exc.value.rule == "past_date"


def test_rules_apply_in_order(controller):
    # past date, zero cost, missing fields: the required-fields rule wins
    controller.update_field("tripDate", (datetime.date(2026, 10, 17) - datetime.timedelta(days=3)).isoformat())
    controller.update_field("tripCost", "0")
    with pytest.raises(ValidationFailure) as exc:
        controller.validate()
    assert exc.value.rule == "required"


def test_failed_validation_leaves_draft_untouched(filled):
    filled.update_field("tripCost", "0")
    before = filled.draft.copy()
    with pytest.raises(ValidationFailure):
        filled.submit()
    assert filled.draft == before
