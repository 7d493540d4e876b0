# app.py

import datetime

from dotenv import load_dotenv

load_dotenv()  # ← Must precede any import depending on .env

import streamlit as st

from core.controller import FormController
from core.errors import EmptyExportFailure, TransportFailure, ValidationFailure
from core.formatting import format_duration, restaurants_label, trip_type_label, yes_no
from core.models import HOUR_OPTIONS, MINUTE_OPTIONS, RESTAURANTS, RESTAURANT_TRIP_TYPES, TRIP_TYPES

# ──────────────────────────────────────────────────────────────────────────────
# 0. Streamlit configuration
# ──────────────────────────────────────────────────────────────────────────────
st.set_page_config(page_title="Naylos trip log", page_icon="🚤")

# ──────────────────────────────────────────────────────────────────────────────
# 1. session_state initialisation (default values)
# ──────────────────────────────────────────────────────────────────────────────
defaults = {
    "controller": None,   # FormController: draft + cached trip list
    "form_gen": 0,        # bumped whenever the draft changes behind the widgets
    "notices": [],        # (kind, message) pairs shown once after a rerun
}
for k, v in defaults.items():
    st.session_state.setdefault(k, v)

LOAD_FAILED = "Failed to load trips from the server."

if st.session_state.controller is None:
    st.session_state.controller = FormController()
    try:
        st.session_state.controller.refresh_list()
    except TransportFailure:
        st.session_state.notices.append(("error", LOAD_FAILED))

ctl: FormController = st.session_state.controller
gen = st.session_state.form_gen


def _key(name: str) -> str:
    return f"{name}_{gen}"


def _rebuild_widgets() -> None:
    st.session_state.form_gen += 1


def _show_notices() -> None:
    for kind, msg in st.session_state.notices:
        getattr(st, kind)(msg)
    st.session_state.notices = []


# ──────────────────────────────────────────────────────────────────────────────
# 2. Widget callbacks → controller
# ──────────────────────────────────────────────────────────────────────────────
def _on_text(field: str):
    return lambda: ctl.update_field(field, st.session_state[_key(field)])


def _on_number(field: str):
    def cb():
        v = st.session_state[_key(field)]
        ctl.update_field(field, "" if v is None else str(v))
    return cb


def _on_date():
    v = st.session_state[_key("tripDate")]
    ctl.update_field("tripDate", v.isoformat() if v else "")


def _on_time():
    v = st.session_state[_key("tripTime")]
    ctl.update_field("tripTime", v.strftime("%H:%M") if v else "")


def _on_hours():
    ctl.set_duration_hours(st.session_state[_key("durationHours")])


def _on_minutes():
    ctl.set_duration_minutes(st.session_state[_key("durationMinutes")])


def _on_trip_type():
    ctl.set_trip_type(st.session_state[_key("tripType")])
    _rebuild_widgets()


def _on_restaurant(name: str):
    return lambda: ctl.toggle_restaurant(name)


def _on_mall():
    ctl.set_is_mall(st.session_state[_key("isMall")])
    _rebuild_widgets()


def _on_submit():
    try:
        outcome = ctl.submit()
        st.session_state.notices.append(("success", "Trip registered successfully!"))
        if outcome.refresh_error:
            st.session_state.notices.append(("error", LOAD_FAILED))
    except ValidationFailure as e:
        kind = "warning" if e.rule == "restaurant" else "error"
        st.session_state.notices.append((kind, e.message))
    except TransportFailure:
        st.session_state.notices.append(("error", "An error occurred while saving the trip."))
    _rebuild_widgets()


# ──────────────────────────────────────────────────────────────────────────────
# 3. Header
# ──────────────────────────────────────────────────────────────────────────────
st.title("🚤 Nile trip registration form")
st.caption("Naylos project · Police Officers' Nile Club, Nile St, Dokki, Giza")

_show_notices()

# ──────────────────────────────────────────────────────────────────────────────
# 4. New trip form
# ──────────────────────────────────────────────────────────────────────────────
st.header("📝 Register a new trip")
st.write("Please fill in every required field (*) to register the trip.")

draft = ctl.draft
col1, col2 = st.columns(2)

col1.date_input(
    "📅 Trip date *",
    value=datetime.date.fromisoformat(draft.trip_date) if draft.trip_date else None,
    min_value=datetime.date.today(),
    key=_key("tripDate"),
    on_change=_on_date,
)
col2.text_input("# Trip number", value=ctl.preview_trip_number(), disabled=True)

col1.time_input(
    "⏰ Trip time *",
    value=datetime.datetime.strptime(draft.trip_time, "%H:%M").time() if draft.trip_time else None,
    key=_key("tripTime"),
    on_change=_on_time,
)

with col2:
    st.markdown("⌛ Trip duration *")
    h_col, m_col = st.columns(2)
    hour_choices = [""] + list(HOUR_OPTIONS)
    minute_choices = [""] + list(MINUTE_OPTIONS)
    h_col.selectbox(
        "Hours",
        hour_choices,
        index=hour_choices.index(draft.duration_hours) if draft.duration_hours in hour_choices else 0,
        format_func=lambda v: "Hours" if v == "" else f"{int(v)} h",
        key=_key("durationHours"),
        on_change=_on_hours,
        label_visibility="collapsed",
    )
    m_col.selectbox(
        "Minutes",
        minute_choices,
        index=minute_choices.index(draft.duration_minutes) if draft.duration_minutes in minute_choices else 0,
        format_func=lambda v: "Minutes" if v == "" else f"{int(v)} min",
        key=_key("durationMinutes"),
        on_change=_on_minutes,
        label_visibility="collapsed",
    )

col1.number_input(
    "👥 Number of attendees *",
    min_value=1,
    step=1,
    value=int(draft.num_attendees) if str(draft.num_attendees).isdigit() else None,
    key=_key("numAttendees"),
    on_change=_on_number("numAttendees"),
)
col2.number_input(
    "💰 Trip cost " + ("(not required)" if draft.is_mall else "*"),
    min_value=0.0,
    step=10.0,
    value=float(draft.trip_cost) if draft.trip_cost not in ("", None) else None,
    disabled=draft.is_mall,
    key=_key("tripCost"),
    on_change=_on_number("tripCost"),
)
col1.number_input(
    "💵 Extra services cost",
    min_value=0.0,
    step=10.0,
    value=float(draft.extra_cost) if draft.extra_cost not in ("", None) else None,
    key=_key("extraCost"),
    on_change=_on_number("extraCost"),
)
col2.text_area(
    "🛠️ Extra service type",
    value=draft.extra_service,
    height=68,
    key=_key("extraService"),
    on_change=_on_text("extraService"),
)
col1.text_input("🚤 Vessel name *", value=draft.vessel_name, disabled=True)
col2.text_input("👤 Trip manager *", value=draft.trip_manager, disabled=True)

type_choices = list(TRIP_TYPES)
st.radio(
    "Trip type *",
    type_choices,
    index=type_choices.index(draft.trip_type) if draft.trip_type in type_choices else None,
    format_func=lambda v: TRIP_TYPES[v],
    horizontal=True,
    key=_key("tripType"),
    on_change=_on_trip_type,
)

if draft.trip_type in RESTAURANT_TRIP_TYPES:
    st.markdown("🍽️ **Choose the restaurant ***")
    r_cols = st.columns(2)
    for i, rest in enumerate(RESTAURANTS):
        r_cols[i % 2].checkbox(
            rest,
            value=rest in draft.restaurant_name,
            key=_key(f"rest_{i}"),
            on_change=_on_restaurant(rest),
        )

st.text_area(
    "✏️ Additional notes",
    value=draft.additional_notes,
    key=_key("additionalNotes"),
    on_change=_on_text("additionalNotes"),
)
st.checkbox(
    "Free trip belonging to the mall",
    value=draft.is_mall,
    key=_key("isMall"),
    on_change=_on_mall,
)

st.button("✅ Register trip", use_container_width=True, on_click=_on_submit)

# ──────────────────────────────────────────────────────────────────────────────
# 5. Registered trips + XLSX export
# ──────────────────────────────────────────────────────────────────────────────
if ctl.trips:
    st.markdown("---")
    head, btn = st.columns([3, 1])
    head.header("📋 Registered trips")
    head.caption(f"Number of trips: {len(ctl.trips)}")

    try:
        file_name, data = ctl.export_bytes()
        btn.download_button(
            "⬇️ Export Excel",
            data,
            file_name=file_name,
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
    except EmptyExportFailure as e:
        btn.error(e.message)

    cards = st.columns(2)
    for i, trip in enumerate(ctl.trips):
        with cards[i % 2].container(border=True):
            st.markdown(f"**# Trip number {trip.trip_number if trip.trip_number is not None else '-'}**")
            st.write(f"📅 Date: {trip.trip_date}")
            st.write(f"⏰ Time: {trip.trip_time}")
            st.write(f"⌛ Duration: {format_duration(trip.trip_duration)}")
            st.write(f"👥 Attendees: {trip.num_attendees}")
            st.write(f"🚤 Vessel: {trip.vessel_name}")
            st.write(f"👤 Manager: {trip.trip_manager}")
            st.write(f"🎯 Type: {trip_type_label(trip.trip_type)}")
            if trip.restaurant_name:
                st.write(f"🍽️ Restaurant: {restaurants_label(trip.restaurant_name)}")
            st.write(f"💰 Trip cost: {trip.trip_cost} EGP")
            st.write(f"💵 Extra services cost: {trip.extra_cost} EGP")
            if trip.extra_service:
                st.write(f"🛠️ Extra service: {trip.extra_service}")
            st.markdown(f"**💯 Total cost: {trip.total_cost} EGP**")
            st.write(f"🛒 Mall trip: {yes_no(trip.is_mall)}")
            if trip.additional_notes:
                st.write(f"✏️ Notes: {trip.additional_notes}")
            st.caption(f"📌 Registered: {trip.created_at}")
