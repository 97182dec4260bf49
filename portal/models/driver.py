"""Driver portal models - accounts, profiles, and registered vehicles."""

import re
from datetime import datetime
from enum import Enum

from pydantic import Field

from portal.models.common import ApiModel

UK_MOBILE_PATTERN = re.compile(r"^(\+44|0)7\d{9}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_MIN_LENGTH = 8


class DriverStatus(str, Enum):
    pending = "pending"
    onboarding = "onboarding"
    active = "active"
    suspended = "suspended"
    inactive = "inactive"


class DriverVehicleType(str, Enum):
    standard = "standard"
    executive = "executive"
    minibus = "minibus"


class ComplianceStatus(str, Enum):
    """MOT and tax check outcome for a registered vehicle."""

    pending_verification = "pending_verification"
    compliant = "compliant"
    expiring_soon = "expiring_soon"
    expired = "expired"
    blocked = "blocked"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


class DriverSummary(ApiModel):
    """Driver identity returned by the auth endpoints."""

    driver_id: str
    email: str
    first_name: str
    last_name: str
    status: DriverStatus = DriverStatus.pending

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class DriverProfile(ApiModel):
    driver_id: str
    email: str
    phone: str = ""
    first_name: str
    last_name: str
    status: DriverStatus = DriverStatus.pending
    working_days: list[str] = Field(default_factory=list)
    working_hours_start: str | None = None
    working_hours_end: str | None = None
    license_categories: list[str] = Field(default_factory=list)
    license_expiry_date: str | None = None
    license_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def needs_onboarding(self) -> bool:
        return self.status in (DriverStatus.pending, DriverStatus.onboarding)


class DriverVehicle(ApiModel):
    vrn: str
    make: str | None = None
    colour: str | None = None
    vehicle_type: DriverVehicleType = DriverVehicleType.standard
    passenger_capacity: int | None = None
    tax_status: str = ""
    tax_due_date: str | None = None
    mot_status: str = ""
    mot_expiry_date: str | None = None
    compliance_status: ComplianceStatus = ComplianceStatus.pending_verification
    last_api_check: datetime | None = None
    created_at: datetime | None = None


class DriverAuthResult(ApiModel):
    """Response of the driver register/login/verify endpoints.

    Registration may return ``message`` as a list of field errors.
    """

    success: bool = False
    message: str | list[str] | None = None
    error: str | None = None
    driver: DriverSummary | None = None
    session_token: str | None = None

    @property
    def error_messages(self) -> list[str]:
        if self.error:
            return [self.error]
        if isinstance(self.message, list):
            return self.message
        return [self.message] if self.message else []


class DriverSessionStatus(ApiModel):
    valid: bool = False
    driver: DriverProfile | None = None


class DriverRegistration(ApiModel):
    email: str
    password: str
    first_name: str
    last_name: str
    phone: str


class DriverProfileUpdate(ApiModel):
    """Editable profile fields; unset fields are left unchanged."""

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    working_days: list[str] | None = None
    working_hours_start: str | None = None
    working_hours_end: str | None = None


def normalize_vrn(vrn: str) -> str:
    """Registration number as the vehicle checks expect it: upper case, no spaces."""
    return re.sub(r"\s", "", vrn).upper()


def validate_registration(registration: DriverRegistration, confirm_password: str) -> list[str]:
    """Check a sign-up form before it is sent.

    Returns:
        Error messages in form order (empty when valid)
    """
    errors = []
    if not EMAIL_PATTERN.match(registration.email):
        errors.append("Valid email is required")
    if not registration.first_name.strip():
        errors.append("First name is required")
    if not registration.last_name.strip():
        errors.append("Last name is required")
    if not UK_MOBILE_PATTERN.match(re.sub(r"[\s-]", "", registration.phone)):
        errors.append("Valid UK mobile phone number is required (e.g., 07700900123)")

    password = registration.password
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        errors.append("Password must contain at least one number")
    if password != confirm_password:
        errors.append("Passwords do not match")
    return errors
