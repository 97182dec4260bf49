"""Unit tests for the driver portal endpoint wrappers."""

from typing import Any

import httpx
import pytest

from portal.client.base import ApiError, PortalApiClient
from portal.client.driver import DriverApi
from portal.models.driver import (
    ComplianceStatus,
    DriverProfileUpdate,
    DriverRegistration,
    DriverStatus,
    DriverVehicleType,
)

PROFILE = {
    "driverId": "drv-1",
    "email": "sam@example.com",
    "phone": "07700900123",
    "firstName": "Sam",
    "lastName": "Driver",
    "status": "onboarding",
    "workingDays": ["monday", "friday"],
    "workingHoursStart": "07:00",
    "workingHoursEnd": "19:00",
    "licenseCategories": ["B", "D1"],
    "licenseVerified": False,
}


@pytest.fixture
def driver(api_client: PortalApiClient) -> DriverApi:
    api_client.set_auth_token("drv-sess")
    return DriverApi(api_client)


def test_register_posts_camel_case_body(api_stub: Any, driver: DriverApi) -> None:
    api_stub.json(
        "POST",
        "/v2/driver/auth/register",
        {
            "success": True,
            "sessionToken": "drv-new",
            "driver": {
                "driverId": "drv-1",
                "email": "sam@example.com",
                "firstName": "Sam",
                "lastName": "Driver",
                "status": "pending",
            },
        },
    )

    result = driver.register(
        DriverRegistration(
            email="sam@example.com",
            password="Secret123",
            first_name="Sam",
            last_name="Driver",
            phone="07700900123",
        )
    )

    assert result.success
    assert result.session_token == "drv-new"
    assert result.driver is not None
    assert result.driver.name == "Sam Driver"
    assert api_stub.body("POST", "/v2/driver/auth/register") == {
        "email": "sam@example.com",
        "password": "Secret123",
        "firstName": "Sam",
        "lastName": "Driver",
        "phone": "07700900123",
    }
    assert "Authorization" not in api_stub.calls[0].headers


def test_register_field_errors_list(api_stub: Any, driver: DriverApi) -> None:
    api_stub.json(
        "POST",
        "/v2/driver/auth/register",
        {"success": False, "message": ["Email already registered", "Phone already registered"]},
    )

    result = driver.register(
        DriverRegistration(
            email="sam@example.com",
            password="Secret123",
            first_name="Sam",
            last_name="Driver",
            phone="07700900123",
        )
    )

    assert not result.success
    assert result.error_messages == ["Email already registered", "Phone already registered"]


def test_session_valid(api_stub: Any, driver: DriverApi) -> None:
    api_stub.json("GET", "/v2/driver/auth/session", {"success": True, "driver": PROFILE})

    status = driver.verify_session()

    assert status.valid
    assert status.driver is not None
    assert status.driver.status == DriverStatus.onboarding
    assert status.driver.needs_onboarding
    assert api_stub.calls[0].headers["Authorization"] == "Bearer drv-sess"


def test_session_error_response_reads_invalid(api_stub: Any, driver: DriverApi) -> None:
    api_stub.json("GET", "/v2/driver/auth/session", {"error": "Session expired"}, status=401)

    assert not driver.verify_session().valid


def test_session_network_error_raises(settings: Any) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    offline = DriverApi(
        PortalApiClient(settings, http_client=httpx.Client(transport=httpx.MockTransport(refuse)))
    )

    with pytest.raises(ApiError, match="Session check failed"):
        offline.verify_session()


def test_profile_update_sends_only_set_fields(api_stub: Any, driver: DriverApi) -> None:
    api_stub.json(
        "PUT",
        "/v2/driver/profile",
        {"success": True, "message": "Profile updated", "profile": {**PROFILE, "phone": "07700900999"}},
    )

    profile = driver.update_profile(DriverProfileUpdate(phone="07700900999", working_days=["monday"]))

    assert api_stub.body("PUT", "/v2/driver/profile") == {
        "phone": "07700900999",
        "workingDays": ["monday"],
    }
    assert profile is not None
    assert profile.phone == "07700900999"


def test_add_vehicle_normalizes_registration(api_stub: Any, driver: DriverApi) -> None:
    api_stub.json(
        "POST",
        "/v2/driver/vehicles",
        {
            "success": True,
            "vehicle": {
                "vrn": "AB12CDE",
                "make": "MERCEDES-BENZ",
                "colour": "BLACK",
                "vehicleType": "executive",
                "taxStatus": "Taxed",
                "motStatus": "Valid",
                "complianceStatus": "compliant",
            },
        },
    )

    vehicle = driver.add_vehicle("ab12 cde", DriverVehicleType.executive)

    assert api_stub.body("POST", "/v2/driver/vehicles") == {
        "vrn": "AB12CDE",
        "vehicleType": "executive",
    }
    assert vehicle.compliance_status == ComplianceStatus.compliant


def test_add_vehicle_requires_registration(api_stub: Any, driver: DriverApi) -> None:
    with pytest.raises(ValueError):
        driver.add_vehicle("   ")

    assert api_stub.calls == []


def test_remove_vehicle_path(api_stub: Any, driver: DriverApi) -> None:
    api_stub.json("DELETE", "/v2/driver/vehicles/AB12CDE", {"success": True})

    driver.remove_vehicle("ab12 cde")

    assert len(api_stub.calls_to("DELETE", "/v2/driver/vehicles/AB12CDE")) == 1


def test_vehicles_list(api_stub: Any, driver: DriverApi) -> None:
    api_stub.json(
        "GET",
        "/v2/driver/vehicles",
        {"success": True, "vehicles": [{"vrn": "AB12CDE", "complianceStatus": "expiring_soon"}]},
    )

    [vehicle] = driver.get_vehicles()

    assert vehicle.compliance_status.label == "Expiring soon"
    assert vehicle.vehicle_type == DriverVehicleType.standard
