"""Tests for driver portal sign-up, sign-in and account upkeep."""

from typing import Any

import httpx
import pytest

from portal.client.base import PortalApiClient
from portal.client.driver import DriverApi
from portal.flow.driver_session import DriverSession
from portal.flow.session import InMemoryTokenStore
from portal.models.driver import DriverProfileUpdate, DriverRegistration, DriverVehicleType

PROFILE = {
    "driverId": "drv-1",
    "email": "sam@example.com",
    "phone": "07700900123",
    "firstName": "Sam",
    "lastName": "Driver",
    "status": "active",
}
VEHICLE = {"vrn": "AB12CDE", "make": "SKODA", "complianceStatus": "compliant"}
AUTH_OK = {
    "success": True,
    "sessionToken": "drv-new",
    "driver": {
        "driverId": "drv-1",
        "email": "sam@example.com",
        "firstName": "Sam",
        "lastName": "Driver",
        "status": "active",
    },
}


def _session(api_client: PortalApiClient, token: str | None = None) -> DriverSession:
    return DriverSession(DriverApi(api_client), InMemoryTokenStore(token))


@pytest.fixture
def account_stub(api_stub: Any) -> Any:
    api_stub.json("GET", "/v2/driver/profile", {"success": True, "profile": PROFILE})
    api_stub.json("GET", "/v2/driver/vehicles", {"success": True, "vehicles": [VEHICLE]})
    return api_stub


def _registration(**overrides: str) -> DriverRegistration:
    data = {
        "email": "sam@example.com",
        "password": "Secret123",
        "first_name": "Sam",
        "last_name": "Driver",
        "phone": "07700 900123",
    }
    data.update(overrides)
    return DriverRegistration(**data)


def test_no_stored_token_is_anonymous(api_stub: Any, api_client: PortalApiClient) -> None:
    context = _session(api_client).initialize()

    assert not context.is_authenticated
    assert api_stub.calls == []


def test_valid_stored_token_loads_account(account_stub: Any, api_client: PortalApiClient) -> None:
    account_stub.json("GET", "/v2/driver/auth/session", {"success": True, "driver": PROFILE})
    session = _session(api_client, "drv-1-sess")

    context = session.initialize()

    assert context.is_authenticated
    assert context.profile is not None
    assert context.profile.name == "Sam Driver"
    assert [v.vrn for v in context.vehicles] == ["AB12CDE"]
    profile_call = account_stub.calls_to("GET", "/v2/driver/profile")[0]
    assert profile_call.headers["Authorization"] == "Bearer drv-1-sess"


def test_rejected_token_is_cleared(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("GET", "/v2/driver/auth/session", {"error": "Session expired"}, status=401)
    session = _session(api_client, "drv-old")

    context = session.initialize()

    assert not context.is_authenticated
    assert session.store.get() is None
    assert api_client.auth_token is None


def test_register_validates_before_sending(api_stub: Any, api_client: PortalApiClient) -> None:
    session = _session(api_client)

    assert not session.register(_registration(phone="01202 123456", password="secret"), "secret1")

    assert session.errors == [
        "Valid UK mobile phone number is required (e.g., 07700900123)",
        "Password must be at least 8 characters",
        "Password must contain at least one uppercase letter",
        "Password must contain at least one number",
        "Passwords do not match",
    ]
    assert api_stub.calls == []


def test_register_signs_in(account_stub: Any, api_client: PortalApiClient) -> None:
    account_stub.json("POST", "/v2/driver/auth/register", AUTH_OK)
    session = _session(api_client)

    assert session.register(_registration(), "Secret123")

    assert session.store.get() == "drv-new"
    assert session.context.is_authenticated
    assert session.errors == []


def test_register_reports_server_field_errors(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json(
        "POST", "/v2/driver/auth/register", {"success": False, "message": ["Email already registered"]}
    )
    session = _session(api_client)

    assert not session.register(_registration(), "Secret123")

    assert session.errors == ["Email already registered"]
    assert session.store.get() is None


def test_failed_login_keeps_server_message(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("POST", "/v2/driver/auth/login", {"error": "Invalid email or password"}, status=401)
    session = _session(api_client)

    assert not session.login("sam@example.com", "wrong")

    assert session.error == "Invalid email or password"
    assert not session.context.is_authenticated


def test_magic_link_sign_in(account_stub: Any, api_client: PortalApiClient) -> None:
    account_stub.json("POST", "/v2/driver/auth/verify", AUTH_OK)
    session = _session(api_client)

    assert session.verify_magic_link("link-tok")

    assert account_stub.body("POST", "/v2/driver/auth/verify") == {"token": "link-tok"}
    assert session.context.is_authenticated


def test_vehicle_upkeep(account_stub: Any, api_client: PortalApiClient) -> None:
    account_stub.json("POST", "/v2/driver/auth/login", AUTH_OK)
    account_stub.json(
        "POST",
        "/v2/driver/vehicles",
        {"success": True, "vehicle": {"vrn": "XY70ZZZ", "complianceStatus": "pending_verification"}},
    )
    account_stub.json("DELETE", "/v2/driver/vehicles/AB12CDE", {"success": True})
    session = _session(api_client)
    session.login("sam@example.com", "Secret123")

    assert session.add_vehicle("xy70 zzz", DriverVehicleType.standard)
    assert session.remove_vehicle("AB12CDE")
    assert not session.add_vehicle("  ", DriverVehicleType.standard)

    assert [v.vrn for v in session.context.vehicles] == ["XY70ZZZ"]
    assert session.error == "Please enter a registration number"


def test_profile_update_without_profile_in_reply_reloads(
    account_stub: Any, api_client: PortalApiClient
) -> None:
    account_stub.json("POST", "/v2/driver/auth/login", AUTH_OK)
    account_stub.json("PUT", "/v2/driver/profile", {"success": True, "message": "Profile updated"})
    session = _session(api_client)
    session.login("sam@example.com", "Secret123")

    assert session.update_profile(DriverProfileUpdate(first_name="Samuel"))

    assert len(account_stub.calls_to("GET", "/v2/driver/profile")) == 2


def test_logout_clears_even_when_server_fails(account_stub: Any, api_client: PortalApiClient) -> None:
    account_stub.json("POST", "/v2/driver/auth/login", AUTH_OK)
    account_stub.add("POST", "/v2/driver/auth/logout", httpx.Response(500))
    session = _session(api_client)
    session.login("sam@example.com", "Secret123")

    session.logout()

    assert session.store.get() is None
    assert api_client.auth_token is None
    assert not session.context.is_authenticated
    assert len(account_stub.calls_to("POST", "/v2/driver/auth/logout")) == 1
