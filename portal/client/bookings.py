"""Booking endpoints - create, retrieve, update, cancel, amend."""

from typing import Any

from portal.client import endpoints
from portal.client.base import ApiError, PortalApiClient, parse_response
from portal.models.booking import (
    AmendmentQuote,
    AmendmentRequest,
    Booking,
    BookingUpdate,
    CancellationPreview,
)


def _unwrap_booking(data: dict[str, Any], fallback_error: str) -> Booking:
    booking = data.get("booking")
    if not isinstance(booking, dict):
        raise ApiError(fallback_error)
    return parse_response(Booking, booking, fallback_error)


class BookingApi:
    """Booking API consumer. Bookings are server-owned; the client holds snapshots."""

    def __init__(self, client: PortalApiClient) -> None:
        self.client = client

    def create_booking(self, payload: dict[str, Any]) -> Booking:
        """Submit a booking (single request, never retried)."""
        data = self.client.request(
            "POST",
            endpoints.BOOKINGS,
            name="bookings.create",
            fallback_error="Failed to create booking",
            json=payload,
        )
        return _unwrap_booking(data, "Failed to create booking")

    def get_booking(self, booking_id: str, token: str) -> Booking:
        data = self.client.request(
            "GET",
            f"{endpoints.BOOKINGS}/{booking_id}",
            name="bookings.retrieve",
            fallback_error="Failed to load booking",
            params={"token": token},
        )
        return _unwrap_booking(data, "Failed to load booking")

    def update_booking(self, booking_id: str, token: str, update: BookingUpdate) -> None:
        """Apply non-journey edits (transport numbers, special requests)."""
        self.client.request(
            "PUT",
            f"{endpoints.BOOKINGS}/{booking_id}",
            name="bookings.update",
            fallback_error="Failed to update booking",
            params={"token": token},
            json=update.model_dump(mode="json", by_alias=True),
        )

    def get_cancel_preview(self, booking_id: str, token: str) -> CancellationPreview:
        data = self.client.request(
            "GET",
            f"{endpoints.BOOKINGS}/{booking_id}/cancel-preview",
            name="bookings.cancel_preview",
            fallback_error="Failed to load cancellation details",
            params={"token": token},
        )
        return parse_response(
            CancellationPreview, data.get("preview", data), "Failed to load cancellation details"
        )

    def cancel_booking(self, booking_id: str, token: str) -> None:
        self.client.request(
            "DELETE",
            f"{endpoints.BOOKINGS}/{booking_id}",
            name="bookings.cancel",
            fallback_error="Failed to cancel booking",
            params={"token": token},
        )

    def request_amendment(
        self, booking_id: str, token: str, amendment: AmendmentRequest
    ) -> AmendmentQuote:
        """Re-price a journey change; nothing changes until confirmed."""
        data = self.client.request(
            "POST",
            f"{endpoints.BOOKINGS}/{booking_id}/amend",
            name="bookings.amend",
            fallback_error="Failed to get quote",
            params={"token": token},
            json=amendment.to_api(),
        )
        return parse_response(AmendmentQuote, data, "Failed to get quote")

    def confirm_amendment(self, booking_id: str, token: str) -> None:
        self.client.request(
            "POST",
            f"{endpoints.BOOKINGS}/{booking_id}/amend/confirm",
            name="bookings.amend_confirm",
            fallback_error="Failed to confirm amendment",
            params={"token": token},
        )
