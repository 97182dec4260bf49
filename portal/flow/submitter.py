"""Booking submission."""

import logging
from typing import Any

from portal.client.base import ApiError
from portal.client.bookings import BookingApi
from portal.flow.errors import PreconditionFailedError, ValidationFailedError
from portal.models.booking import (
    Booking,
    ContactDetails,
    CorporateBookingDetails,
    PaymentOutcome,
    TransportDetails,
    validate_contact,
)
from portal.models.quote import Quote
from portal.utils.metrics import PrometheusApiMetrics

logger = logging.getLogger(__name__)

# Journey fields echoed from the quote into the booking body
_QUOTE_ECHO_FIELDS = (
    "pickupLocation",
    "dropoffLocation",
    "waypoints",
    "pickupTime",
    "passengers",
    "luggage",
    "vehicleType",
    "pricing",
    "journey",
    "returnJourney",
    "returnPickupTime",
    "durationHours",
    "extras",
)


def build_booking_payload(
    quote: Quote,
    token: str,
    contact: ContactDetails,
    payment: PaymentOutcome,
    transport: TransportDetails | None = None,
    corporate: CorporateBookingDetails | None = None,
    corp_account_id: str | None = None,
) -> dict[str, Any]:
    """Assemble the booking request body."""
    echo = quote.to_api()
    transport = transport or TransportDetails()

    payload: dict[str, Any] = {
        "quoteId": quote.quote_id,
        "magicToken": token,
        "customerName": contact.name.strip(),
        "customerEmail": contact.email.strip(),
        "customerPhone": contact.phone.strip(),
        **{key: echo[key] for key in _QUOTE_ECHO_FIELDS if key in echo},
        "journeyType": quote.journey_type.api_value,
        "paymentMethod": payment.method.value,
        "paymentStatus": payment.status,
        "specialRequests": transport.special_requests,
    }

    if payment.reference:
        payload["paymentReference"] = payment.reference

    for key, value in transport.to_api().items():
        if key != "specialRequests" and value:
            payload[key] = value

    if corporate is not None:
        payload["corporateAccountId"] = corp_account_id
        payload["passengerName"] = corporate.passenger_name
        payload["bookedBy"] = corporate.booked_by
        payload["passengerRefreshments"] = corporate.refreshments.to_api()
        if corporate.passenger_id:
            payload["passengerId"] = corporate.passenger_id
        if corporate.passenger_alias:
            payload["passengerAlias"] = corporate.passenger_alias
        if corporate.driver_instructions:
            payload["passengerDriverInstructions"] = corporate.driver_instructions

    return payload


class BookingSubmitter:
    """Creates the booking with a single request. Never retries."""

    def __init__(self, bookings: BookingApi) -> None:
        self.bookings = bookings
        self._metrics = PrometheusApiMetrics()

    def submit(
        self,
        quote: Quote | None,
        token: str | None,
        contact: ContactDetails,
        payment: PaymentOutcome,
        *,
        account_id: str | None,
        transport: TransportDetails | None = None,
        corporate: CorporateBookingDetails | None = None,
    ) -> Booking:
        """Submit the booking.

        Args:
            quote: Selected quote
            token: Short-lived authorization token issued when the quote was saved
            contact: Lead passenger contact
            payment: Card outcome or invoice marker
            account_id: Corporate account id (corporate flows) or tenant id
            transport: Flight/train numbers and special requests
            corporate: Corporate-only booking fields

        Returns:
            Server snapshot of the created booking

        Raises:
            PreconditionFailedError: Quote, token or account id missing (no request sent)
            ValidationFailedError: Contact details invalid (no request sent)
            ApiError: Booking endpoint failed
        """
        if quote is None:
            raise PreconditionFailedError("No quote selected")
        if not token:
            raise PreconditionFailedError("Quote could not be saved. Please try again.")
        if not account_id:
            raise PreconditionFailedError("Account details are missing. Please sign in again.")

        errors = validate_contact(contact)
        if errors:
            raise ValidationFailedError("Please check your contact details", errors)

        corp_account_id = account_id if corporate is not None else None
        payload = build_booking_payload(
            quote, token, contact, payment, transport, corporate, corp_account_id
        )
        method = payment.method.value

        try:
            booking = self.bookings.create_booking(payload)
        except ApiError:
            self._metrics.inc_booking("failure", method)
            raise

        if booking.payment_method is None:
            booking = booking.model_copy(update={"payment_method": payment.method})

        self._metrics.inc_booking("success", method)
        logger.info(f"Booking {booking.booking_id} created ({method}, {booking.status.value})")
        return booking
