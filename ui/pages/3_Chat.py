"""Chat-assisted booking."""

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from datetime import date, time, timedelta  # noqa: E402

import streamlit as st  # noqa: E402

from portal.chat.widget import ControlKind  # noqa: E402
from portal.config import get_settings  # noqa: E402
from ui.helpers import (  # noqa: E402
    format_contact_answer,
    format_passenger_answer,
    get_chat_widget,
    vehicle_option_label,
)

settings = get_settings()
st.set_page_config(page_title=f"Chat | {settings.site_name}", page_icon="💬")
st.title("Book by chat")

widget = get_chat_widget(st.session_state)
if not widget.is_open and not widget.open():
    st.error(widget.error or "Chat is unavailable right now.")
    st.stop()

for message in widget.messages:
    with st.chat_message(message.role.value):
        st.markdown(message.content)

if widget.error:
    st.warning(widget.error)

control = widget.control
answer: str | None = None

if control is not None:
    if control.kind == ControlKind.vehicle_picker and control.vehicle_options:
        choice = st.radio("Choose a vehicle", control.vehicle_options, format_func=vehicle_option_label)
        if st.button("Select vehicle") and choice is not None:
            answer = choice.label
    elif control.kind == ControlKind.address_picker and control.address_options:
        choice = st.radio("Choose an address", control.address_options)
        if st.button("Use this address") and choice:
            answer = choice
    elif control.kind == ControlKind.date_picker:
        day = st.date_input("Pickup date", min_value=date.today())
        if st.button("Send date") and day:
            answer = day.strftime("%A %d %B %Y")
    elif control.kind == ControlKind.time_picker:
        at = st.time_input("Pickup time", time(9, 0), step=timedelta(minutes=15))
        if st.button("Send time") and at:
            answer = at.strftime("%H:%M")
    elif control.kind == ControlKind.passenger_stepper:
        passengers = st.number_input("Passengers", 1, 16, 2)
        luggage = st.number_input("Bags", 0, 20, 0)
        if st.button("Send"):
            answer = format_passenger_answer(passengers, luggage)
    elif control.kind == ControlKind.extras_picker:
        extras = st.multiselect("Extras", ["Baby seat", "Child seat", "Meet and greet"])
        if st.button("Send extras"):
            answer = ", ".join(extras) if extras else "No extras"
    elif control.kind == ControlKind.contact_form:
        with st.form("chat_contact"):
            name = st.text_input("Name")
            email = st.text_input("Email")
            phone = st.text_input("Phone")
            if st.form_submit_button("Send details") and name and phone:
                answer = format_contact_answer(name, email, phone)
    elif control.kind == ControlKind.confirmation:
        for action in control.actions:
            if st.button(action.label, key=action.id, type=action.variant):
                answer = action.label

if answer is not None:
    widget.submit_control(answer)
    st.rerun()

text = st.chat_input("Type your message...")
if text:
    widget.send(text)
    st.rerun()

if st.button("Start over"):
    widget.reset()
    st.rerun()
