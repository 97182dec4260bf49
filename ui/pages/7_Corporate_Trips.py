"""Favourite trips."""

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from portal.client.base import ApiError  # noqa: E402
from portal.config import get_settings  # noqa: E402
from portal.models.corporate import TripDraft  # noqa: E402
from ui.components import require_corporate_session  # noqa: E402

settings = get_settings()
st.set_page_config(page_title=f"Favourite Trips | {settings.site_name}", page_icon="⭐")

session = require_corporate_session()
api = session.api
st.title("Favourite trips")

try:
    trips = api.get_favourite_trips()
except ApiError as e:
    st.error(e.message)
    st.stop()

if not trips:
    st.info("Save a route from the booking page to book it again in one click.")

for trip in trips:
    with st.container(border=True):
        st.markdown(f"**{trip.label}**")
        st.caption(f"{trip.pickup_location.address} to {trip.dropoff_location.address}")
        st.caption(f"Used {trip.usage_count} times")
        cols = st.columns(3)
        with cols[0]:
            if st.button("Book", key=f"book_{trip.trip_id}", type="primary"):
                st.switch_page("pages/6_Corporate_Quote.py", query_params={"trip": trip.trip_id})
        with cols[1]:
            with st.popover("Rename"):
                label = st.text_input("Name", trip.label, key=f"label_{trip.trip_id}")
                if st.button("Save", key=f"rename_{trip.trip_id}"):
                    try:
                        api.update_favourite_trip(trip.trip_id, TripDraft(label=label))
                    except ApiError as e:
                        st.error(e.message)
                    st.rerun()
        with cols[2]:
            if st.button("Delete", key=f"del_{trip.trip_id}"):
                try:
                    api.delete_favourite_trip(trip.trip_id)
                except ApiError as e:
                    st.error(e.message)
                st.rerun()
