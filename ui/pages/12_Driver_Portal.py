"""Driver portal: sign up, sign in, profile and vehicles."""

import sys
from datetime import time
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from portal.config import get_settings  # noqa: E402
from portal.models.driver import (  # noqa: E402
    DriverProfileUpdate,
    DriverRegistration,
    DriverStatus,
    DriverVehicleType,
)
from ui.helpers import get_driver_session, parse_clock_time  # noqa: E402

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

settings = get_settings()
st.set_page_config(page_title=f"Driver Portal | {settings.site_name}", page_icon="🚗")
st.title("Driver Portal")

session = get_driver_session(st.session_state)


def show_errors() -> None:
    for message in session.errors:
        st.error(message)


# Magic link emails land here with ?token=...
link_token = st.query_params.get("token")
if link_token and not session.context.is_authenticated:
    if session.verify_magic_link(link_token):
        st.query_params.clear()
        st.rerun()

if not session.context.is_authenticated:
    show_errors()
    tab_login, tab_link, tab_register = st.tabs(["Sign in", "Email me a link", "Register"])

    with tab_login:
        with st.form("driver_login"):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            if st.form_submit_button("Sign in", type="primary") and session.login(email, password):
                st.rerun()

    with tab_link:
        with st.form("driver_magic_link"):
            email = st.text_input("Email", key="driver_magic_email")
            if st.form_submit_button("Send link") and session.request_magic_link(email):
                st.success("Check your inbox for a sign-in link.")

    with tab_register:
        with st.form("driver_register"):
            first_name = st.text_input("First name")
            last_name = st.text_input("Last name")
            email = st.text_input("Email", key="driver_register_email")
            phone = st.text_input("Mobile phone", placeholder="07700900123")
            password = st.text_input("Password", type="password", key="driver_register_password")
            confirm = st.text_input("Confirm password", type="password")
            st.caption("At least 8 characters with upper case, lower case and a number.")
            if st.form_submit_button("Create account", type="primary"):
                registration = DriverRegistration(
                    email=email.strip(),
                    password=password,
                    first_name=first_name,
                    last_name=last_name,
                    phone=phone,
                )
                if session.register(registration, confirm):
                    st.rerun()
    st.stop()

profile = session.context.profile
if profile is None:
    st.stop()

with st.sidebar:
    st.caption(f"{profile.name} ({profile.status.value})")
    if st.button("Sign out"):
        session.logout()
        st.rerun()

show_errors()
if profile.needs_onboarding:
    st.info("Your account is awaiting approval. Complete your profile and add a vehicle to get started.")
elif profile.status == DriverStatus.suspended:
    st.warning("Your account is suspended. Please contact the office.")

st.subheader("Profile")
with st.form("driver_profile"):
    cols = st.columns(2)
    first_name = cols[0].text_input("First name", profile.first_name)
    last_name = cols[1].text_input("Last name", profile.last_name)
    phone = st.text_input("Phone", profile.phone)
    working_days = st.multiselect(
        "Working days",
        WEEKDAYS,
        default=[d for d in profile.working_days if d in WEEKDAYS],
        format_func=str.title,
    )
    cols = st.columns(2)
    start = cols[0].time_input("Start", parse_clock_time(profile.working_hours_start, time(7, 0)))
    end = cols[1].time_input("End", parse_clock_time(profile.working_hours_end, time(19, 0)))
    if st.form_submit_button("Save profile", type="primary"):
        update = DriverProfileUpdate(
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            working_days=working_days,
            working_hours_start=start.strftime("%H:%M"),
            working_hours_end=end.strftime("%H:%M"),
        )
        if session.update_profile(update):
            st.success("Profile updated")

if profile.license_categories:
    verified = "verified" if profile.license_verified else "not yet verified"
    st.caption(f"Licence categories: {', '.join(profile.license_categories)} ({verified})")

st.subheader("Vehicles")
for vehicle in session.context.vehicles:
    with st.container(border=True):
        cols = st.columns([3, 1])
        make = vehicle.make or "Unknown make"
        colour = vehicle.colour or "Unknown colour"
        cols[0].markdown(f"**{vehicle.vrn}** - {make} ({colour})")
        cols[0].caption(
            f"{vehicle.compliance_status.label} | MOT {vehicle.mot_status or 'unknown'}"
            f" | Tax {vehicle.tax_status or 'unknown'}"
        )
        if cols[1].button("Remove", key=f"rm_{vehicle.vrn}"):
            session.remove_vehicle(vehicle.vrn)
            st.rerun()

with st.form("add_vehicle", clear_on_submit=True):
    vrn = st.text_input("Registration number")
    vehicle_type = st.selectbox(
        "Vehicle type", list(DriverVehicleType), format_func=lambda v: v.value.title()
    )
    st.caption("We check MOT and tax status automatically.")
    if st.form_submit_button("Add vehicle") and session.add_vehicle(vrn, vehicle_type):
        st.rerun()
