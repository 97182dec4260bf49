"""Corporate quote and booking page."""

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from portal.client.base import ApiError  # noqa: E402
from portal.config import get_settings  # noqa: E402
from portal.flow.stage import BookingStage  # noqa: E402
from portal.models.corporate import TripDraft  # noqa: E402
from ui.components import render_booking_flow, require_corporate_session  # noqa: E402
from ui.helpers import get_flow  # noqa: E402

settings = get_settings()
st.set_page_config(page_title=f"Book | {settings.site_name}", page_icon="🏢", layout="wide")

session = require_corporate_session()
flow = get_flow(st.session_state, "corporate_flow", session.context.flow_context())
api = session.api

st.title("Book a journey")

# ?trip=<id> pre-fills from a favourite
trip_id = st.query_params.get("trip")
if trip_id and st.session_state.get("loaded_trip") != trip_id:
    try:
        flow.apply_favourite_trip(api.get_favourite_trip(trip_id))
    except ApiError as e:
        flow.error = e.message
    st.session_state.loaded_trip = trip_id

if flow.stage == BookingStage.quote:
    with st.sidebar:
        st.subheader("Passenger")
        try:
            passengers = api.get_passengers()
        except ApiError as e:
            passengers = []
            st.caption(e.message)
        selected = st.selectbox(
            "Directory",
            [None, *passengers],
            format_func=lambda p: "Someone else" if p is None else p.name,
        )
        flow.select_passenger(selected)
        if selected is None:
            flow.set_manual_passenger_name(st.text_input("Passenger name"))

render_booking_flow(flow)

form = flow.form
if flow.quote is not None and not form.favourite_trip_id and form.pickup_location and form.dropoff_location:
    with st.expander("Save as favourite"):
        label = st.text_input("Trip name")
        if st.button("Save trip") and label.strip():
            try:
                api.save_favourite_trip(
                    TripDraft(
                        label=label.strip(),
                        pickup_location=form.pickup_location,
                        dropoff_location=form.dropoff_location,
                        waypoints=form.waypoints,
                        vehicle_type=flow.selected_vehicle,
                        passengers=form.passengers,
                        luggage=form.luggage,
                    )
                )
                st.success("Trip saved")
            except (ApiError, ValueError) as e:
                st.error(str(e))
