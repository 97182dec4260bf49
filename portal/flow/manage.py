"""Manage an existing booking through its access token."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from portal.client.base import ApiError
from portal.client.bookings import BookingApi
from portal.models.booking import (
    AmendmentQuote,
    AmendmentRequest,
    Booking,
    BookingUpdate,
    CancellationPreview,
)

logger = logging.getLogger(__name__)


def journey_changed(booking: Booking, amendment: AmendmentRequest) -> bool:
    """Whether the amendment touches anything that affects the price."""
    current = (
        booking.pickup_location.address if booking.pickup_location else "",
        booking.dropoff_location.address if booking.dropoff_location else "",
        booking.pickup_time,
        booking.vehicle_type,
        booking.passengers,
        booking.luggage or 0,
        booking.return_journey,
        booking.return_pickup_time if booking.return_journey else None,
    )
    requested = (
        amendment.pickup_location.address,
        amendment.dropoff_location.address,
        amendment.pickup_time,
        amendment.vehicle_type,
        amendment.passengers,
        amendment.luggage,
        amendment.return_journey,
        amendment.return_pickup_time if amendment.return_journey else None,
    )
    return current != requested


class BookingManager:
    """Retrieve, edit, amend and cancel one booking.

    Holds only the last fetched snapshot. Handlers return ``True`` on success
    and otherwise leave the message in ``error``.
    """

    def __init__(
        self,
        bookings: BookingApi,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.bookings = bookings
        self.clock = clock
        self.booking: Booking | None = None
        self.token: str | None = None
        self.preview: CancellationPreview | None = None
        self.amendment: AmendmentQuote | None = None
        self.error: str | None = None

    def _fail(self, message: str) -> bool:
        self.error = message
        return False

    def _require(self) -> tuple[str, str] | None:
        if self.booking is None or not self.token:
            self.error = "Booking not loaded"
            return None
        return self.booking.booking_id, self.token

    def load(self, booking_id: str, token: str) -> bool:
        self.error = None
        if not token:
            return self._fail("A booking link token is required")
        try:
            self.booking = self.bookings.get_booking(booking_id, token)
        except ApiError as e:
            return self._fail(e.message)
        self.token = token
        return True

    def refresh(self) -> bool:
        ids = self._require()
        if ids is None:
            return False
        return self.load(*ids)

    def cancel_preview(self) -> bool:
        self.error = None
        ids = self._require()
        if ids is None:
            return False
        if self.booking is not None and not self.booking.is_cancellable:
            return self._fail("This booking can no longer be cancelled")
        try:
            self.preview = self.bookings.get_cancel_preview(*ids)
        except ApiError as e:
            return self._fail(e.message)
        return True

    def cancel(self) -> bool:
        """Cancel the booking and refetch the snapshot."""
        self.error = None
        ids = self._require()
        if ids is None:
            return False
        try:
            self.bookings.cancel_booking(*ids)
        except ApiError as e:
            return self._fail(e.message)
        logger.info(f"Booking {ids[0]} cancelled")
        self.preview = None
        return self.refresh()

    def submit_edit(self, update: BookingUpdate, amendment: AmendmentRequest | None = None) -> bool:
        """Apply edits.

        Non-journey edits are saved directly. When the journey itself changed,
        a re-priced amendment is requested instead and nothing is saved until
        ``confirm_amendment``.
        """
        self.error = None
        ids = self._require()
        if ids is None:
            return False
        assert self.booking is not None

        if amendment is not None and journey_changed(self.booking, amendment):
            try:
                self.amendment = self.bookings.request_amendment(*ids, amendment)
            except ApiError as e:
                return self._fail(e.message)
            return True

        try:
            self.bookings.update_booking(*ids, update)
        except ApiError as e:
            return self._fail(e.message)
        return self.refresh()

    def confirm_amendment(self) -> bool:
        self.error = None
        ids = self._require()
        if ids is None:
            return False
        if self.amendment is None:
            return self._fail("No amendment to confirm")
        if self.clock() >= self.amendment.expires_at:
            self.amendment = None
            return self._fail("This price has expired. Please request the change again.")
        try:
            self.bookings.confirm_amendment(*ids)
        except ApiError as e:
            return self._fail(e.message)
        self.amendment = None
        return self.refresh()

    def discard_amendment(self) -> None:
        self.amendment = None
