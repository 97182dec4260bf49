"""Streamlit renderers for the booking flow stages.

Public, shared-link and corporate pages all render the same components; the
flow's context decides which corporate extras appear.
"""

from datetime import date, time, timedelta

import streamlit as st

from portal.config import get_settings
from portal.flow.booking_flow import BookingFlow
from portal.flow.session import CorporateSession
from portal.flow.stage import BookingStage
from portal.models.booking import ContactDetails, PaymentDetails
from portal.models.common import Extras, JourneyType, Location
from portal.models.quote import PricingOption
from portal.views.formatting import journey_type_label, payment_terms_label
from portal.views.summaries import comparison_rows, confirmation_view, quote_summary
from ui.helpers import combine_date_time, get_corporate_session, resolve_location, search_locations


def location_input(flow: BookingFlow, label: str, key: str, is_dropoff: bool) -> Location | None:
    """Search box plus result picker; returns the chosen location."""
    query = st.text_input(label, key=f"{key}_query")
    predictions = search_locations(flow.quotes, query, is_dropoff) if query else []
    if not predictions:
        return None
    choice = st.selectbox(
        f"{label} results",
        predictions,
        format_func=lambda p: p.description,
        key=f"{key}_choice",
        label_visibility="collapsed",
    )
    return resolve_location(flow.quotes, choice) if choice else None


def render_journey_form(flow: BookingFlow) -> None:
    settings = get_settings()
    form = flow.form

    form.journey_type = st.radio(
        "Journey type",
        list(JourneyType),
        index=list(JourneyType).index(form.journey_type),
        format_func=journey_type_label,
        horizontal=True,
    )

    pickup = location_input(flow, "Pickup *", "pickup", is_dropoff=False)
    if pickup is not None:
        form.pickup_location = pickup

    if form.is_hourly:
        form.duration_hours = st.slider(
            "Duration (hours)", settings.hourly_min_hours, settings.hourly_max_hours, form.duration_hours
        )
        form.return_to_pickup = st.checkbox("Return to pickup", value=form.return_to_pickup)

    if not form.is_hourly or not form.return_to_pickup:
        dropoff = location_input(flow, "Dropoff *", "dropoff", is_dropoff=True)
        if dropoff is not None:
            form.dropoff_location = dropoff

    col_date, col_time = st.columns(2)
    with col_date:
        pickup_day = st.date_input("Pickup date *", value=None, min_value=date.today())
    with col_time:
        pickup_at = st.time_input("Pickup time *", value=time(9, 0), step=timedelta(minutes=15))
    form.pickup_date = combine_date_time(pickup_day, pickup_at)

    if form.journey_type == JourneyType.round_trip:
        col_rdate, col_rtime = st.columns(2)
        with col_rdate:
            return_day = st.date_input("Return date *", value=None, min_value=pickup_day or date.today())
        with col_rtime:
            return_at = st.time_input("Return time *", value=time(17, 0), step=timedelta(minutes=15))
        form.return_date = combine_date_time(return_day, return_at)

    col_pax, col_bags = st.columns(2)
    with col_pax:
        form.passengers = st.number_input("Passengers", 1, 16, form.passengers)
    with col_bags:
        form.luggage = st.number_input("Luggage", 0, 20, form.luggage)

    with st.expander("Extras"):
        form.extras = Extras(
            baby_seats=st.number_input("Baby seats", 0, 4, form.extras.baby_seats),
            child_seats=st.number_input("Child seats", 0, 4, form.extras.child_seats),
        )

    if st.button("Get Prices", type="primary", disabled=not form.can_proceed(), use_container_width=True):
        with st.spinner("Getting quotes..."):
            flow.request_quotes()
        st.rerun()


def render_comparison(flow: BookingFlow) -> None:
    multi = flow.multi_quote
    if multi is None:
        return

    if multi.is_zone_pricing and multi.zone_name:
        st.caption(f"Fixed zone price: {multi.zone_name} to {multi.destination_name}")

    rows = comparison_rows(multi, flow.form.passengers)
    if not rows:
        st.warning("No vehicles can carry this many passengers.")
        return

    is_round_trip = flow.form.journey_type == JourneyType.round_trip
    for row in rows:
        with st.container(border=True):
            st.markdown(f"**{row.name}** - up to {row.capacity} passengers")
            if row.description:
                st.caption(row.description)
            if row.corporate_discount:
                st.caption(f"~~{row.price_before_discount}~~ Corporate discount {row.corporate_discount}")

            cols = st.columns(2)
            with cols[0]:
                if st.button(f"One way {row.one_way_price}", key=f"ow_{row.vehicle_id}"):
                    option = PricingOption.hourly if flow.form.is_hourly else PricingOption.one_way
                    flow.select_vehicle(row.vehicle_id, option)
                    st.rerun()
            if is_round_trip and row.return_price:
                with cols[1]:
                    label = f"Return {row.return_price}"
                    if row.return_savings:
                        label += f" (save {row.return_savings})"
                    if st.button(label, key=f"rt_{row.vehicle_id}", type="primary"):
                        flow.select_vehicle(row.vehicle_id, PricingOption.return_)
                        st.rerun()


def render_quote_summary(flow: BookingFlow) -> None:
    if flow.quote is None:
        return
    summary = quote_summary(flow.quote)
    with st.container(border=True):
        st.markdown(f"### {summary.vehicle} - {summary.total}")
        st.markdown(f"**{summary.pickup}** to **{summary.dropoff}**")
        for stop in summary.stops:
            st.caption(f"via {stop}")
        st.markdown(f"{summary.journey_type}, {summary.pickup_time}")
        if summary.return_time:
            st.markdown(f"Return: {summary.return_time}")
        if summary.duration:
            st.markdown(f"Duration: {summary.duration}")
        if summary.distance and summary.drive_time:
            st.caption(f"{summary.distance}, {summary.drive_time}")
        if summary.return_savings:
            st.success(f"You save {summary.return_savings} with a return booking")

    transport = flow.form.transport
    with st.expander("Flight / train details"):
        flow.form.transport = transport.model_copy(
            update={
                "flight_number": st.text_input("Flight number", transport.flight_number),
                "train_number": st.text_input("Train number", transport.train_number),
                "special_requests": st.text_area("Special requests", transport.special_requests),
            }
        )

    col_back, col_confirm = st.columns(2)
    with col_back:
        if flow.multi_quote is not None and st.button("Change vehicle"):
            flow.clear_selection()
            st.rerun()
        if st.button("New quote"):
            flow.new_quote()
            st.rerun()
    with col_confirm:
        if st.button("Confirm booking", type="primary", disabled=not flow.quote_token):
            flow.confirm_booking()
            st.rerun()


def render_contact(flow: BookingFlow) -> None:
    contact = flow.contact or ContactDetails()
    with st.form("contact_form"):
        st.subheader("Contact details")
        name = st.text_input("Name *", contact.name)
        email = st.text_input("Email *", contact.email)
        phone = st.text_input("Phone *", contact.phone)
        if flow.context.is_corporate:
            st.caption(f"Payment: {payment_terms_label(flow.context.payment_terms)}")
        submitted = st.form_submit_button("Continue", type="primary")

    for field, message in flow.contact_errors.items():
        st.caption(f":red[{field.title()}: {message}]")

    if st.button("Back"):
        flow.back()
        st.rerun()
    if submitted:
        with st.spinner("Submitting..."):
            flow.submit_contact(ContactDetails(name=name, email=email, phone=phone))
        st.rerun()


def render_payment(flow: BookingFlow) -> None:
    with st.form("payment_form"):
        st.subheader("Payment")
        st.caption("Card details are collected securely by our payment provider.")
        cardholder = st.text_input("Cardholder name *")
        submitted = st.form_submit_button("Pay and book", type="primary")

    if st.button("Back"):
        flow.back()
        st.rerun()
    if submitted and cardholder.strip():
        with st.spinner("Booking..."):
            flow.submit_payment(PaymentDetails(cardholder_name=cardholder.strip()))
        st.rerun()


def render_confirmation(flow: BookingFlow) -> None:
    if flow.booking is None or flow.quote is None or flow.contact is None:
        return
    view = confirmation_view(
        flow.booking,
        flow.quote,
        flow.contact,
        flow.context,
        passenger_name=flow.passenger_name,
        special_requests=flow.form.transport.special_requests,
    )
    st.success(f"Booking {view.booking_id} received ({view.status})")
    st.markdown(f"**{view.summary.pickup}** to **{view.summary.dropoff}**, {view.summary.pickup_time}")
    st.markdown(f"Vehicle: {view.summary.vehicle}  \nTotal: {view.total}  \nPayment: {view.payment}")
    st.markdown(f"Contact: {view.customer_name}, {view.customer_email}, {view.customer_phone}")
    if view.is_corporate:
        st.markdown(f"Passenger: {view.passenger_name}  \nBooked by: {view.booked_by}")
        if view.company_name:
            st.caption(view.company_name)
    if view.special_requests:
        st.caption(f"Special requests: {view.special_requests}")
    if st.button("New quote", type="primary"):
        flow.new_quote()
        st.rerun()


def render_booking_flow(flow: BookingFlow) -> None:
    """Render the active stage with the flow's inline error."""
    if flow.error:
        st.error(flow.error)

    if flow.stage == BookingStage.quote:
        if flow.quote is not None:
            render_quote_summary(flow)
        else:
            render_journey_form(flow)
            render_comparison(flow)
    elif flow.stage == BookingStage.contact:
        render_quote_summary_compact(flow)
        render_contact(flow)
    elif flow.stage == BookingStage.payment:
        render_quote_summary_compact(flow)
        render_payment(flow)
    else:
        render_confirmation(flow)


def render_quote_summary_compact(flow: BookingFlow) -> None:
    if flow.quote is not None:
        summary = quote_summary(flow.quote)
        st.caption(f"{summary.vehicle}: {summary.pickup} to {summary.dropoff} - {summary.total}")


def require_corporate_session() -> CorporateSession:
    """Stop the page unless a corporate user is signed in."""
    session = get_corporate_session(st.session_state)
    if not session.context.is_authenticated:
        st.warning("Please sign in to the corporate portal.")
        st.page_link("pages/5_Corporate_Login.py", label="Sign in")
        st.stop()
    with st.sidebar:
        user = session.context.user
        if user is not None:
            st.caption(f"{user.name} ({user.role.value})")
            if session.context.company:
                st.caption(session.context.company.company_name)
        if st.button("Sign out"):
            session.logout()
            st.rerun()
    return session
