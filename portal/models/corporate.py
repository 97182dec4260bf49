"""Corporate portal models - accounts, directory records, and preferences."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from portal.models.common import ApiModel, Location, Refreshments, Waypoint


class PaymentTerms(str, Enum):
    """Corporate account payment terms."""

    immediate = "immediate"
    net7 = "net7"
    net14 = "net14"
    net30 = "net30"

    @property
    def requires_payment(self) -> bool:
        """Only immediate-terms accounts pay by card at booking time."""
        return self is PaymentTerms.immediate

    @property
    def label(self) -> str:
        if self is PaymentTerms.immediate:
            return "Immediate"
        return f"Net {self.value[3:]}"


class CorporateRole(str, Enum):
    admin = "admin"
    booker = "booker"


class CorporateUser(ApiModel):
    """Logged-in corporate portal user."""

    user_id: str
    email: str
    name: str
    role: CorporateRole = CorporateRole.booker
    company_name: str = ""
    corp_account_id: str
    notifications: dict[str, bool] = Field(default_factory=dict)


class Company(ApiModel):
    """Corporate account summary."""

    corp_account_id: str | None = None
    company_name: str
    payment_terms: PaymentTerms = PaymentTerms.immediate
    discount_percentage: float = 0
    status: str = "active"


class AuthResult(ApiModel):
    """Response of the login/verify/set-password endpoints."""

    success: bool = False
    token: str | None = None
    user: CorporateUser | None = None
    expires_in: int | None = None
    message: str | None = None
    error: str | None = None
    needs_password: bool = False


class SessionStatus(ApiModel):
    valid: bool = False
    user: CorporateUser | None = None


class DashboardStats(ApiModel):
    team_members: int = 0
    total_bookings: int = 0
    total_spend: int = 0
    pending_approvals: int = 0


class RecentBooking(ApiModel):
    id: str
    date: str
    passenger_name: str
    booked_by: str
    pickup: str
    dropoff: str
    status: str


class Dashboard(ApiModel):
    company: Company | None = None
    stats: DashboardStats = Field(default_factory=DashboardStats)
    recent_bookings: list[RecentBooking] = Field(default_factory=list)


class TeamMember(ApiModel):
    user_id: str
    email: str
    name: str
    role: CorporateRole
    requires_approval: bool = False
    status: str
    last_login: datetime | None = None
    created_at: datetime | None = None


class TeamMemberUpdate(ApiModel):
    """Admin edit of a team member; unset fields are left unchanged."""

    name: str | None = None
    role: CorporateRole | None = None
    status: str | None = None
    requires_approval: bool | None = None


class InviteNote(ApiModel):
    note: str = ""
    expires_in: str | None = None


class InviteResult(ApiModel):
    """Outcome of adding a member or resending their invite."""

    success: bool = False
    message: str | None = None
    user: TeamMember | None = None
    magic_link: str | None = None
    instructions: InviteNote | None = None


class CompanyUpdate(ApiModel):
    company_name: str | None = None


class FavouriteTrip(ApiModel):
    """Saved route for quick re-booking."""

    trip_id: str
    label: str
    pickup_location: Location
    dropoff_location: Location
    waypoints: list[Waypoint] = Field(default_factory=list)
    vehicle_type: str | None = None
    passengers: int | None = None
    luggage: int | None = None
    created_at: datetime | None = None
    last_used_at: datetime | None = None
    usage_count: int = 0


class TripDraft(ApiModel):
    """Body for creating or updating a favourite trip (all fields optional on update)."""

    label: str | None = None
    pickup_location: Location | None = None
    dropoff_location: Location | None = None
    waypoints: list[Waypoint] | None = None
    vehicle_type: str | None = None
    passengers: int | None = Field(None, ge=1)
    luggage: int | None = Field(None, ge=0)


class Passenger(ApiModel):
    """Passenger directory record."""

    passenger_id: str
    display_name: str = ""
    first_name: str = ""
    last_name: str = ""
    title: str | None = None
    alias: str | None = None
    contact_name: str | None = None
    is_representative: bool | None = None
    email: str | None = None
    phone: str | None = None
    driver_instructions: str | None = None
    refreshments: Refreshments | None = None

    @property
    def name(self) -> str:
        return self.display_name or f"{self.first_name} {self.last_name}".strip()


class PassengerDraft(ApiModel):
    """Body for creating or updating a passenger."""

    first_name: str | None = None
    last_name: str | None = None
    title: str | None = None
    alias: str | None = None
    contact_name: str | None = None
    is_representative: bool | None = None
    email: str | None = None
    phone: str | None = None
    driver_instructions: str | None = None
    refreshments: Refreshments | None = None


class NameBoardFormat(str, Enum):
    """How the driver's name board reads."""

    title_initial_surname = "title-initial-surname"
    firstname_lastname = "firstname-lastname"
    company_only = "company-only"
    passenger_alias = "passenger-alias"
    title_initial_surname_company = "title-initial-surname-company"
    custom = "custom"


class AccountPreferences(ApiModel):
    """Corporate account preferences."""

    name_board_format: NameBoardFormat = NameBoardFormat.title_initial_surname
    name_board_custom_text: str | None = None
    logo_url: str | None = None
    logo_key: str | None = Field(None, alias="logoS3Key")
    default_refreshments: Refreshments | None = None
    default_driver_instructions: str | None = None


class LogoUploadTarget(ApiModel):
    """Pre-signed upload URL for the company logo."""

    upload_url: str
    logo_key: str


class LogoConfirmation(ApiModel):
    logo_url: str
    logo_key: str
