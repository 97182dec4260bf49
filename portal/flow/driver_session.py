"""Driver portal session.

Same lifecycle as ``CorporateSession``: load the stored token, verify it, then
keep the profile and vehicles in one ``DriverContext`` for the page.
"""

import logging
from dataclasses import dataclass, field

from portal.client.base import ApiError
from portal.client.driver import DriverApi
from portal.flow.session import TokenStore
from portal.models.driver import (
    DriverAuthResult,
    DriverProfile,
    DriverProfileUpdate,
    DriverRegistration,
    DriverVehicle,
    DriverVehicleType,
    validate_registration,
)

logger = logging.getLogger(__name__)


@dataclass
class DriverContext:
    token: str | None = None
    profile: DriverProfile | None = None
    vehicles: list[DriverVehicle] = field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.profile is not None


class DriverSession:
    """Sign-up, sign-in and account upkeep for one driver."""

    def __init__(self, api: DriverApi, store: TokenStore) -> None:
        self.api = api
        self.store = store
        self.context = DriverContext()
        self.errors: list[str] = []

    @property
    def error(self) -> str | None:
        return self.errors[0] if self.errors else None

    def _fail(self, *messages: str) -> bool:
        self.errors = list(messages)
        return False

    def initialize(self) -> DriverContext:
        token = self.store.get()
        if not token:
            self.context = DriverContext()
            return self.context

        self.api.client.set_auth_token(token)
        try:
            status = self.api.verify_session()
        except ApiError as e:
            self.errors = [e.message]
            self.context = DriverContext()
            return self.context

        if not status.valid:
            logger.info("Stored driver session is no longer valid")
            self._clear()
            return self.context

        self.context = DriverContext(token=token, profile=status.driver)
        self.refresh()
        return self.context

    def refresh(self) -> bool:
        """Reload profile and vehicles for the signed-in driver."""
        try:
            self.context.profile = self.api.get_profile()
            self.context.vehicles = self.api.get_vehicles()
        except ApiError as e:
            logger.warning(f"Failed to load driver account: {e.message}")
            return self._fail(e.message)
        self.errors = []
        return True

    def _adopt(self, result: DriverAuthResult, fallback: str) -> bool:
        if not result.success or not result.session_token:
            return self._fail(*(result.error_messages or [fallback]))

        self.store.set(result.session_token)
        self.api.client.set_auth_token(result.session_token)
        self.context = DriverContext(token=result.session_token)
        self.errors = []
        return self.refresh()

    def register(self, registration: DriverRegistration, confirm_password: str) -> bool:
        """Validate locally, then create the account and sign in."""
        errors = validate_registration(registration, confirm_password)
        if errors:
            return self._fail(*errors)
        try:
            return self._adopt(self.api.register(registration), "Registration failed")
        except ApiError as e:
            return self._fail(e.message)

    def login(self, email: str, password: str) -> bool:
        try:
            return self._adopt(self.api.login(email, password), "Invalid email or password")
        except ApiError as e:
            return self._fail(e.message)

    def verify_magic_link(self, token: str) -> bool:
        try:
            return self._adopt(self.api.verify_magic_link(token), "Invalid or expired login link")
        except ApiError as e:
            return self._fail(e.message)

    def request_magic_link(self, email: str) -> bool:
        try:
            result = self.api.request_magic_link(email)
        except ApiError as e:
            return self._fail(e.message)
        if not result.success:
            return self._fail(*(result.error_messages or ["Failed to send login link"]))
        self.errors = []
        return True

    def update_profile(self, update: DriverProfileUpdate) -> bool:
        try:
            profile = self.api.update_profile(update)
        except ApiError as e:
            return self._fail(e.message)
        if profile is None:
            return self.refresh()
        self.context.profile = profile
        self.errors = []
        return True

    def add_vehicle(self, vrn: str, vehicle_type: DriverVehicleType) -> bool:
        try:
            vehicle = self.api.add_vehicle(vrn, vehicle_type)
        except ValueError:
            return self._fail("Please enter a registration number")
        except ApiError as e:
            return self._fail(e.message)
        self.context.vehicles = [v for v in self.context.vehicles if v.vrn != vehicle.vrn] + [vehicle]
        self.errors = []
        return True

    def remove_vehicle(self, vrn: str) -> bool:
        try:
            self.api.remove_vehicle(vrn)
        except ApiError as e:
            return self._fail(e.message)
        self.context.vehicles = [v for v in self.context.vehicles if v.vrn != vrn]
        self.errors = []
        return True

    def logout(self) -> None:
        if self.store.get():
            try:
                self.api.logout()
            except ApiError as e:
                logger.warning(f"Server logout failed: {e.message}")
        self._clear()

    def _clear(self) -> None:
        self.store.clear()
        self.api.client.clear_auth_token()
        self.context = DriverContext()
