"""Manage booking: /Manage_Booking?booking=<id>&token=<token>."""

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from portal.config import get_settings  # noqa: E402
from portal.models.booking import AmendmentRequest, BookingUpdate  # noqa: E402
from portal.views.formatting import format_datetime  # noqa: E402
from ui.helpers import UK_TZ, combine_date_time, get_manager  # noqa: E402

settings = get_settings()
st.set_page_config(page_title=f"Your Booking | {settings.site_name}", page_icon="🚐")
st.title("Your Booking")

manager = get_manager(st.session_state)
booking_id = st.query_params.get("booking", "")
token = st.query_params.get("token", "")

if manager.booking is None or manager.booking.booking_id != booking_id:
    if not booking_id or not token:
        st.error("This booking link is incomplete. Please check the link in your email.")
        st.stop()
    manager.load(booking_id, token)

if manager.error:
    st.error(manager.error)

booking = manager.booking
if booking is None:
    st.stop()

st.subheader(f"Booking {booking.booking_id}")
st.markdown(f"Status: **{booking.status.value.title()}**")
if booking.pickup_location and booking.dropoff_location:
    st.markdown(f"**{booking.pickup_location.address}** to **{booking.dropoff_location.address}**")
if booking.pickup_time:
    st.markdown(format_datetime(booking.pickup_time.astimezone(UK_TZ)))
if booking.pricing:
    st.markdown(f"Total: {booking.pricing.display_total}")

if not booking.is_cancellable:
    st.stop()

tab_edit, tab_cancel = st.tabs(["Edit", "Cancel"])

with tab_edit:
    with st.form("edit_form"):
        flight = st.text_input("Flight number", booking.flight_number or "")
        train = st.text_input("Train number", booking.train_number or "")
        requests = st.text_area("Special requests", booking.special_requests or "")
        passengers = st.number_input("Passengers", 1, 16, booking.passengers or 1)
        luggage = st.number_input("Luggage", 0, 20, booking.luggage or 0)
        local_pickup = booking.pickup_time.astimezone(UK_TZ) if booking.pickup_time else None
        new_day = st.date_input("Pickup date", local_pickup.date() if local_pickup else None)
        new_time = st.time_input("Pickup time", local_pickup.time() if local_pickup else None)
        submitted = st.form_submit_button("Save changes", type="primary")

    if submitted:
        update = BookingUpdate(flight_number=flight, train_number=train, special_requests=requests)
        amendment = None
        pickup_time = combine_date_time(new_day, new_time)
        if booking.pickup_location and booking.dropoff_location and booking.vehicle_type and pickup_time:
            amendment = AmendmentRequest(
                pickup_location=booking.pickup_location,
                dropoff_location=booking.dropoff_location,
                pickup_time=pickup_time,
                return_journey=booking.return_journey,
                return_pickup_time=booking.return_pickup_time,
                vehicle_type=booking.vehicle_type,
                passengers=passengers,
                luggage=luggage,
            )
        manager.submit_edit(update, amendment)
        st.rerun()

    if manager.amendment is not None:
        diff = manager.amendment.price_difference
        st.info(
            f"New price {manager.amendment.amended.display_price} "
            f"({'+' if diff.is_increase else '-'}{diff.display_amount})"
        )
        col_ok, col_no = st.columns(2)
        with col_ok:
            if st.button("Confirm change", type="primary"):
                manager.confirm_amendment()
                st.rerun()
        with col_no:
            if st.button("Keep original"):
                manager.discard_amendment()
                st.rerun()

with tab_cancel:
    if manager.preview is None:
        if st.button("Check cancellation"):
            manager.cancel_preview()
            st.rerun()
    else:
        preview = manager.preview
        if preview.is_free_cancel:
            st.success(f"Free cancellation - full refund of {preview.display_refund_amount}")
        else:
            st.warning(
                f"Cancellation fee {preview.display_cancellation_fee} "
                f"({preview.cancellation_fee_percent:g}%). Refund: {preview.display_refund_amount}"
            )
        if st.button("Cancel booking", type="primary"):
            manager.cancel()
            st.rerun()
