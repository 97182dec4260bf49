"""Shared pytest fixtures for all test suites.

Every remote call goes through ``httpx.MockTransport``; no test touches the
network.
"""

import json
from collections.abc import Callable, Generator
from datetime import datetime, timezone
from typing import Any

import httpx
import pytest

from portal.client.base import PortalApiClient
from portal.config import Settings

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
PICKUP = "2026-03-04T09:00:00Z"

Handler = Callable[[httpx.Request], httpx.Response]


class ApiStub:
    """Routes (method, path) to canned responses and records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], httpx.Response | Handler] = {}
        self.calls: list[httpx.Request] = []

    def add(self, method: str, path: str, response: httpx.Response | Handler) -> None:
        self.routes[(method, path)] = response

    def json(self, method: str, path: str, body: Any, status: int = 200) -> None:
        self.add(method, path, httpx.Response(status, json=body))

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": f"no stub for {request.method} {request.url.path}"})
        return route(request) if callable(route) else route

    def calls_to(self, method: str, path: str) -> list[httpx.Request]:
        return [c for c in self.calls if c.method == method and c.url.path == path]

    def body(self, method: str, path: str, index: int = -1) -> Any:
        return json.loads(self.calls_to(method, path)[index].content)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url="https://api.test", tenant_id="TENANT#001")


@pytest.fixture
def api_stub() -> ApiStub:
    return ApiStub()


@pytest.fixture
def api_client(api_stub: ApiStub, settings: Settings) -> Generator[PortalApiClient, None, None]:
    """API client wired to the stub transport."""
    http = httpx.Client(transport=httpx.MockTransport(api_stub.handle))
    client = PortalApiClient(settings, http_client=http)
    yield client
    http.close()


def _price(pence: int) -> dict[str, Any]:
    display = f"£{pence // 100}.{pence % 100:02d}"
    return {
        "transferPrice": pence,
        "displayTransferPrice": display,
        "totalPrice": pence,
        "displayTotalPrice": display,
        "fees": {"airportDrop": 0, "vat": 0, "vatRate": 0},
    }


def _return_price(one_way: int) -> dict[str, Any]:
    original = one_way * 2
    discounted = original * 9 // 10
    return {
        **_price(discounted),
        "discount": {
            "percentage": 10,
            "savings": original - discounted,
            "displaySavings": f"£{(original - discounted) // 100}.{(original - discounted) % 100:02d}",
        },
        "originalTransferPrice": original,
        "displayOriginalPrice": f"£{original // 100}.{original % 100:02d}",
    }


@pytest.fixture
def multi_quote_payload() -> dict[str, Any]:
    """Compare-mode response for Heathrow T5 to Bournemouth, 2 passengers."""
    return {
        "compareMode": True,
        "journeyType": "one-way",
        "journey": {
            "distance": {"meters": 160000, "miles": "99.4", "text": "99.4 miles"},
            "duration": {"seconds": 6600, "minutes": 110, "text": "1 hr 50 mins"},
        },
        "vehicles": {
            "executive": {
                "name": "Executive Saloon",
                "capacity": 3,
                "features": ["Leather seats"],
                "oneWay": _price(29500),
                "return": _return_price(29500),
            },
            "standard": {
                "name": "Standard Saloon",
                "capacity": 3,
                "luggageCapacity": 3,
                "oneWay": _price(18500),
                "return": _return_price(18500),
            },
            "mpv": {
                "name": "People Carrier",
                "capacity": 6,
                "oneWay": _price(24500),
                "return": _return_price(24500),
            },
            "minibus": {
                "name": "Minibus",
                "capacity": 1,
                "oneWay": _price(9900),
            },
        },
        "pickupLocation": {
            "address": "Heathrow Terminal 5",
            "placeId": "place-lhr-t5",
            "locationType": "airport",
        },
        "dropoffLocation": {"address": "Bournemouth", "placeId": "place-bournemouth"},
        "pickupTime": PICKUP,
        "passengers": 2,
        "luggage": 2,
        "createdAt": "2026-03-02T09:00:00Z",
    }


@pytest.fixture
def make_booking() -> Callable[..., dict[str, Any]]:
    """Factory for booking snapshots as the server returns them."""

    def _make(booking_id: str = "DTC-1001", status: str = "pending", **overrides: Any) -> dict[str, Any]:
        booking = {
            "bookingId": booking_id,
            "status": status,
            "customer": {"name": "Jane Smith", "email": "jane@example.com", "phone": "07700 900123"},
            "pickupTime": PICKUP,
            "pickupLocation": {"address": "Heathrow Terminal 5", "placeId": "place-lhr-t5"},
            "dropoffLocation": {"address": "Bournemouth", "placeId": "place-bournemouth"},
            "vehicleType": "standard",
            "journeyType": "one-way",
            "passengers": 2,
            "luggage": 2,
            "pricing": {"currency": "GBP", "totalPrice": 18500, "displayTotal": "£185.00"},
        }
        booking.update(overrides)
        return booking

    return _make


@pytest.fixture
def corporate_user_payload() -> dict[str, Any]:
    return {
        "userId": "user-1",
        "email": "booker@acme.example",
        "name": "Alex Booker",
        "role": "booker",
        "companyName": "ACME Corp",
        "corpAccountId": "corp-42",
    }


@pytest.fixture
def now() -> datetime:
    return NOW
