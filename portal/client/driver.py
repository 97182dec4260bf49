"""Driver portal endpoints.

Sign-up and sign-in are open; profile and vehicle calls carry the driver's
session bearer token.
"""

from typing import Any

from portal.client import endpoints
from portal.client.base import ApiError, PortalApiClient, parse_response
from portal.models.driver import (
    DriverAuthResult,
    DriverProfile,
    DriverProfileUpdate,
    DriverRegistration,
    DriverSessionStatus,
    DriverVehicle,
    DriverVehicleType,
    normalize_vrn,
)


class DriverApi:
    """Driver portal API consumer."""

    def __init__(self, client: PortalApiClient) -> None:
        self.client = client

    # --- Authentication ---

    def _auth_post(self, path: str, name: str, body: dict[str, Any]) -> DriverAuthResult:
        data = self.client.request(
            "POST", path, name=name, fallback_error="Authentication failed", json=body
        )
        return parse_response(DriverAuthResult, data, "Authentication failed")

    def register(self, registration: DriverRegistration) -> DriverAuthResult:
        return self._auth_post(endpoints.DRIVER_REGISTER, "driver.register", registration.to_api())

    def login(self, email: str, password: str) -> DriverAuthResult:
        return self._auth_post(
            endpoints.DRIVER_LOGIN, "driver.login", {"email": email, "password": password}
        )

    def request_magic_link(self, email: str) -> DriverAuthResult:
        return self._auth_post(endpoints.DRIVER_MAGIC_LINK, "driver.magic_link", {"email": email})

    def verify_magic_link(self, token: str) -> DriverAuthResult:
        return self._auth_post(endpoints.DRIVER_VERIFY, "driver.verify", {"token": token})

    def verify_session(self) -> DriverSessionStatus:
        """Check the current bearer token; any error response reads as invalid."""
        try:
            data = self.client.request(
                "GET",
                endpoints.DRIVER_SESSION,
                name="driver.session",
                fallback_error="Session check failed",
                authenticated=True,
            )
        except ApiError as e:
            if e.status_code is not None:
                return DriverSessionStatus(valid=False)
            raise
        return DriverSessionStatus(
            valid=bool(data.get("success")),
            driver=parse_response(DriverProfile, data["driver"], "Session check failed")
            if data.get("driver")
            else None,
        )

    def logout(self) -> None:
        self.client.request(
            "POST",
            endpoints.DRIVER_LOGOUT,
            name="driver.logout",
            fallback_error="Logout failed",
            authenticated=True,
        )

    # --- Profile ---

    def get_profile(self) -> DriverProfile:
        data = self.client.request(
            "GET",
            endpoints.DRIVER_PROFILE,
            name="driver.profile.get",
            fallback_error="Failed to load profile",
            authenticated=True,
        )
        return parse_response(DriverProfile, data.get("profile"), "Failed to load profile")

    def update_profile(self, update: DriverProfileUpdate) -> DriverProfile | None:
        data = self.client.request(
            "PUT",
            endpoints.DRIVER_PROFILE,
            name="driver.profile.update",
            fallback_error="Failed to update profile",
            json=update.to_api(),
            authenticated=True,
        )
        profile = data.get("profile")
        return parse_response(DriverProfile, profile, "Failed to update profile") if profile else None

    # --- Vehicles ---

    def get_vehicles(self) -> list[DriverVehicle]:
        data = self.client.request(
            "GET",
            endpoints.DRIVER_VEHICLES,
            name="driver.vehicles.list",
            fallback_error="Failed to load vehicles",
            authenticated=True,
        )
        return [
            parse_response(DriverVehicle, v, "Failed to load vehicles")
            for v in data.get("vehicles", [])
        ]

    def add_vehicle(
        self, vrn: str, vehicle_type: DriverVehicleType = DriverVehicleType.standard
    ) -> DriverVehicle:
        """Register a vehicle; the server runs the MOT and tax checks."""
        vrn = normalize_vrn(vrn)
        if not vrn:
            raise ValueError("registration number is required")

        data = self.client.request(
            "POST",
            endpoints.DRIVER_VEHICLES,
            name="driver.vehicles.add",
            fallback_error="Failed to add vehicle",
            json={"vrn": vrn, "vehicleType": vehicle_type.value},
            authenticated=True,
        )
        return parse_response(DriverVehicle, data.get("vehicle"), "Failed to add vehicle")

    def remove_vehicle(self, vrn: str) -> None:
        self.client.request(
            "DELETE",
            f"{endpoints.DRIVER_VEHICLES}/{normalize_vrn(vrn)}",
            name="driver.vehicles.remove",
            fallback_error="Failed to remove vehicle",
            authenticated=True,
        )
