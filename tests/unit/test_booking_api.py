"""Unit tests for the quote and booking endpoint wrappers."""

from typing import Any, Callable

import pytest

from portal.client.base import ApiError, PortalApiClient
from portal.client.bookings import BookingApi
from portal.client.quotes import QuoteApi
from portal.models.booking import BookingStatus, BookingUpdate
from portal.models.quote import Quote


def test_get_booking_unwraps_snapshot(
    api_stub: Any, api_client: PortalApiClient, make_booking: Callable[..., dict[str, Any]]
) -> None:
    api_stub.json("GET", "/v2/bookings/DTC-1001", {"booking": make_booking(status="confirmed")})

    booking = BookingApi(api_client).get_booking("DTC-1001", "bk-tok")

    assert booking.status == BookingStatus.confirmed
    assert booking.pricing is not None
    assert booking.pricing.display_total == "£185.00"


def test_malformed_booking_is_rejected(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("GET", "/v2/bookings/DTC-1001", {"booking": {"status": "pending"}})

    with pytest.raises(ApiError, match="Failed to load booking"):
        BookingApi(api_client).get_booking("DTC-1001", "bk-tok")


def test_update_sends_token_and_all_fields(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("PUT", "/v2/bookings/DTC-1001", {"success": True})

    BookingApi(api_client).update_booking("DTC-1001", "bk-tok", BookingUpdate(train_number="1A23"))

    request = api_stub.calls_to("PUT", "/v2/bookings/DTC-1001")[0]
    assert request.url.params["token"] == "bk-tok"
    body = api_stub.body("PUT", "/v2/bookings/DTC-1001")
    assert body["trainNumber"] == "1A23"
    assert body["flightNumber"] == ""


def test_vehicle_types_sorted(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json(
        "GET",
        "/v2/vehicle-types",
        {
            "vehicleTypes": [
                {"vehicleTypeId": "minibus", "name": "Minibus", "capacity": 16},
                {"vehicleTypeId": "mpv", "name": "People Carrier", "capacity": 6, "sortOrder": 2},
                {"vehicleTypeId": "standard", "name": "Standard Saloon", "capacity": 3, "sortOrder": 1},
            ]
        },
    )

    vehicles = QuoteApi(api_client).list_vehicle_types()

    assert [v.vehicle_type_id for v in vehicles] == ["standard", "mpv", "minibus"]


def test_short_location_query_is_not_sent(api_stub: Any, api_client: PortalApiClient) -> None:
    assert QuoteApi(api_client).search_locations(" b ") == []
    assert api_stub.calls == []


def test_location_search(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json(
        "GET",
        "/v2/locations",
        {"predictions": [{"description": "Bournemouth Pier", "placeId": "pier"}]},
    )

    [prediction] = QuoteApi(api_client).search_locations("bournemouth pier")

    assert prediction.place_id == "pier"
    assert api_stub.calls[0].url.params["input"] == "bournemouth pier"


def test_save_quote_requires_token(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("POST", "/v2/quotes/save", {"quoteId": "Q-1"})
    quote = Quote.model_validate(
        {
            "quoteId": "Q-1",
            "expiresAt": "2026-03-03T09:00:00Z",
            "pricing": {
                "transferPrice": 18500,
                "displayTransferPrice": "£185.00",
                "totalPrice": 18500,
                "displayTotal": "£185.00",
            },
            "vehicleType": "standard",
            "pickupLocation": {"address": "Heathrow Terminal 5"},
            "dropoffLocation": {"address": "Bournemouth"},
            "pickupTime": "2026-03-04T09:00:00Z",
            "passengers": 2,
        }
    )

    with pytest.raises(ApiError, match="Failed to save quote"):
        QuoteApi(api_client).save_quote(quote)
