"""Passenger directory."""

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from portal.client.base import ApiError  # noqa: E402
from portal.config import get_settings  # noqa: E402
from portal.models.common import Refreshments  # noqa: E402
from portal.models.corporate import PassengerDraft  # noqa: E402
from ui.components import require_corporate_session  # noqa: E402

settings = get_settings()
st.set_page_config(page_title=f"Passengers | {settings.site_name}", page_icon="👤")

session = require_corporate_session()
api = session.api
st.title("Passengers")

search = st.text_input("Search")
try:
    passengers = api.get_passengers(search or None)
except ApiError as e:
    st.error(e.message)
    passengers = []

for p in passengers:
    with st.expander(p.name + (f" ({p.alias})" if p.alias else "")):
        st.caption(" | ".join(x for x in (p.email, p.phone) if x))
        if p.driver_instructions:
            st.caption(f"Driver: {p.driver_instructions}")
        if st.button("Delete", key=f"del_{p.passenger_id}"):
            try:
                api.delete_passenger(p.passenger_id)
            except ApiError as e:
                st.error(e.message)
            st.rerun()

st.subheader("Add passenger")
with st.form("new_passenger", clear_on_submit=True):
    cols = st.columns([1, 2, 2])
    title = cols[0].selectbox("Title", ["", "Mr", "Mrs", "Ms", "Miss", "Dr"])
    first = cols[1].text_input("First name *")
    last = cols[2].text_input("Last name *")
    alias = st.text_input("Alias (shown on name board)")
    email = st.text_input("Email")
    phone = st.text_input("Phone")
    instructions = st.text_area("Driver instructions")
    still, sparkling, tea, coffee = st.columns(4)
    refreshments = Refreshments(
        still_water=still.checkbox("Still water"),
        sparkling_water=sparkling.checkbox("Sparkling water"),
        tea=tea.checkbox("Tea"),
        coffee=coffee.checkbox("Coffee"),
    )
    if st.form_submit_button("Save passenger", type="primary"):
        try:
            api.create_passenger(
                PassengerDraft(
                    title=title or None,
                    first_name=first,
                    last_name=last,
                    alias=alias or None,
                    email=email or None,
                    phone=phone or None,
                    driver_instructions=instructions or None,
                    refreshments=refreshments,
                )
            )
            st.success("Passenger saved")
        except (ApiError, ValueError) as e:
            st.error(str(e))
