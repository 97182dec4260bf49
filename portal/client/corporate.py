"""Corporate portal endpoints.

Every call except the auth entry points carries the session bearer token.
"""

from typing import Any

from portal.client import endpoints
from portal.client.base import ApiError, PortalApiClient, parse_response
from portal.models.corporate import (
    AccountPreferences,
    AuthResult,
    Company,
    CompanyUpdate,
    CorporateRole,
    CorporateUser,
    Dashboard,
    FavouriteTrip,
    InviteResult,
    LogoConfirmation,
    LogoUploadTarget,
    Passenger,
    PassengerDraft,
    SessionStatus,
    TeamMember,
    TeamMemberUpdate,
    TripDraft,
)

LOGO_CONTENT_TYPES = ("image/png", "image/jpeg", "image/svg+xml")


class CorporateApi:
    """Corporate portal API consumer."""

    def __init__(self, client: PortalApiClient) -> None:
        self.client = client

    # --- Authentication ---

    def _auth_post(self, path: str, name: str, body: dict[str, Any]) -> AuthResult:
        data = self.client.request(
            "POST", path, name=name, fallback_error="Authentication failed", json=body
        )
        return parse_response(AuthResult, data, "Authentication failed")

    def request_magic_link(self, email: str) -> AuthResult:
        return self._auth_post(endpoints.CORPORATE_MAGIC_LINK, "corporate.magic_link", {"email": email})

    def verify_magic_link(self, token: str) -> AuthResult:
        return self._auth_post(endpoints.CORPORATE_VERIFY, "corporate.verify", {"token": token})

    def password_login(self, email: str, password: str) -> AuthResult:
        return self._auth_post(
            endpoints.CORPORATE_LOGIN, "corporate.login", {"email": email, "password": password}
        )

    def set_password(self, token: str, password: str, confirm_password: str) -> AuthResult:
        return self._auth_post(
            endpoints.CORPORATE_SET_PASSWORD,
            "corporate.set_password",
            {"token": token, "password": password, "confirmPassword": confirm_password},
        )

    def forgot_password(self, email: str) -> AuthResult:
        return self._auth_post(
            endpoints.CORPORATE_FORGOT_PASSWORD, "corporate.forgot_password", {"email": email}
        )

    def verify_session(self) -> SessionStatus:
        """Check the current bearer token; an unauthorized session reads as invalid."""
        try:
            data = self.client.request(
                "GET",
                endpoints.CORPORATE_SESSION,
                name="corporate.session",
                fallback_error="Session check failed",
                authenticated=True,
            )
        except ApiError as e:
            if e.status_code in (401, 403):
                return SessionStatus(valid=False)
            raise
        return parse_response(SessionStatus, data, "Session check failed")

    def logout(self) -> None:
        self.client.request(
            "POST",
            endpoints.CORPORATE_LOGOUT,
            name="corporate.logout",
            fallback_error="Logout failed",
            authenticated=True,
        )

    # --- Account ---

    def get_profile(self) -> CorporateUser:
        data = self.client.request(
            "GET",
            endpoints.CORPORATE_ME,
            name="corporate.me",
            fallback_error="Failed to load profile",
            authenticated=True,
        )
        return parse_response(CorporateUser, data.get("user", data), "Failed to load profile")

    def get_company(self) -> Company:
        data = self.client.request(
            "GET",
            endpoints.CORPORATE_COMPANY,
            name="corporate.company",
            fallback_error="Failed to load company",
            authenticated=True,
        )
        return parse_response(Company, data.get("company", data), "Failed to load company")

    def update_notifications(self, notifications: dict[str, bool]) -> None:
        self.client.request(
            "PUT",
            endpoints.CORPORATE_NOTIFICATIONS,
            name="corporate.notifications.update",
            fallback_error="Failed to save notification settings",
            json=notifications,
            authenticated=True,
        )

    def update_company(self, update: CompanyUpdate) -> None:
        """Admin only."""
        self.client.request(
            "PUT",
            endpoints.CORPORATE_COMPANY,
            name="corporate.company.update",
            fallback_error="Failed to update company",
            json=update.to_api(),
            authenticated=True,
        )

    def get_dashboard(self) -> Dashboard:
        data = self.client.request(
            "GET",
            endpoints.CORPORATE_DASHBOARD,
            name="corporate.dashboard",
            fallback_error="Failed to load dashboard",
            authenticated=True,
        )
        return parse_response(Dashboard, data, "Failed to load dashboard")

    # --- Team (admin only) ---

    def get_team_members(self) -> list[TeamMember]:
        data = self.client.request(
            "GET",
            endpoints.CORPORATE_USERS,
            name="corporate.team.list",
            fallback_error="Failed to load team",
            authenticated=True,
        )
        return [parse_response(TeamMember, u, "Failed to load team") for u in data.get("users", [])]

    def add_team_member(
        self, email: str, name: str, role: CorporateRole, requires_approval: bool = False
    ) -> InviteResult:
        """Invite a new member; the result carries their sign-in link."""
        data = self.client.request(
            "POST",
            endpoints.CORPORATE_USERS,
            name="corporate.team.add",
            fallback_error="Failed to add team member",
            json={
                "email": email,
                "name": name,
                "role": role.value,
                # Approval only applies to bookers
                "requiresApproval": requires_approval and role == CorporateRole.booker,
            },
            authenticated=True,
        )
        return parse_response(InviteResult, data, "Failed to add team member")

    def update_team_member(self, user_id: str, update: TeamMemberUpdate) -> None:
        self.client.request(
            "PUT",
            f"{endpoints.CORPORATE_USERS}/{user_id}",
            name="corporate.team.update",
            fallback_error="Failed to update team member",
            json=update.to_api(),
            authenticated=True,
        )

    def resend_invite(self, user_id: str) -> InviteResult:
        data = self.client.request(
            "POST",
            f"{endpoints.CORPORATE_USERS}/{user_id}/resend-invite",
            name="corporate.team.resend_invite",
            fallback_error="Failed to resend invite",
            authenticated=True,
        )
        return parse_response(InviteResult, data, "Failed to resend invite")


    def remove_team_member(self, user_id: str) -> None:
        self.client.request(
            "DELETE",
            f"{endpoints.CORPORATE_USERS}/{user_id}",
            name="corporate.team.remove",
            fallback_error="Failed to remove team member",
            authenticated=True,
        )

    # --- Favourite trips ---

    def get_favourite_trips(self) -> list[FavouriteTrip]:
        data = self.client.request(
            "GET",
            endpoints.CORPORATE_TRIPS,
            name="corporate.trips.list",
            fallback_error="Failed to load trips",
            authenticated=True,
        )
        return [parse_response(FavouriteTrip, t, "Failed to load trips") for t in data.get("trips", [])]

    def get_favourite_trip(self, trip_id: str) -> FavouriteTrip:
        data = self.client.request(
            "GET",
            f"{endpoints.CORPORATE_TRIPS}/{trip_id}",
            name="corporate.trips.get",
            fallback_error="Failed to load trip",
            authenticated=True,
        )
        return parse_response(FavouriteTrip, data.get("trip", data), "Failed to load trip")

    def save_favourite_trip(self, draft: TripDraft) -> FavouriteTrip:
        if not draft.label or draft.pickup_location is None or draft.dropoff_location is None:
            raise ValueError("label, pickup and dropoff are required to save a trip")

        data = self.client.request(
            "POST",
            endpoints.CORPORATE_TRIPS,
            name="corporate.trips.create",
            fallback_error="Failed to save trip",
            json=draft.to_api(),
            authenticated=True,
        )
        return parse_response(FavouriteTrip, data.get("trip"), "Failed to save trip")

    def update_favourite_trip(self, trip_id: str, draft: TripDraft) -> FavouriteTrip:
        data = self.client.request(
            "PUT",
            f"{endpoints.CORPORATE_TRIPS}/{trip_id}",
            name="corporate.trips.update",
            fallback_error="Failed to update trip",
            json=draft.to_api(),
            authenticated=True,
        )
        return parse_response(FavouriteTrip, data.get("trip"), "Failed to update trip")

    def delete_favourite_trip(self, trip_id: str) -> None:
        self.client.request(
            "DELETE",
            f"{endpoints.CORPORATE_TRIPS}/{trip_id}",
            name="corporate.trips.delete",
            fallback_error="Failed to delete trip",
            authenticated=True,
        )

    def mark_trip_used(self, trip_id: str) -> None:
        """Bump last-used time and usage count after a booking from a favourite."""
        self.client.request(
            "PUT",
            f"{endpoints.CORPORATE_TRIPS}/{trip_id}/used",
            name="corporate.trips.used",
            fallback_error="Failed to update trip",
            authenticated=True,
        )

    # --- Passenger directory ---

    def get_passengers(self, search: str | None = None) -> list[Passenger]:
        data = self.client.request(
            "GET",
            endpoints.CORPORATE_PASSENGERS,
            name="corporate.passengers.list",
            fallback_error="Failed to load passengers",
            params={"search": search} if search else None,
            authenticated=True,
        )
        return [
            parse_response(Passenger, p, "Failed to load passengers")
            for p in data.get("passengers", [])
        ]

    def get_passenger(self, passenger_id: str) -> Passenger:
        data = self.client.request(
            "GET",
            f"{endpoints.CORPORATE_PASSENGERS}/{passenger_id}",
            name="corporate.passengers.get",
            fallback_error="Failed to load passenger",
            authenticated=True,
        )
        return parse_response(Passenger, data.get("passenger", data), "Failed to load passenger")

    def create_passenger(self, draft: PassengerDraft) -> Passenger:
        if not (draft.first_name or "").strip() or not (draft.last_name or "").strip():
            raise ValueError("first and last name are required")

        data = self.client.request(
            "POST",
            endpoints.CORPORATE_PASSENGERS,
            name="corporate.passengers.create",
            fallback_error="Failed to save passenger",
            json=draft.to_api(),
            authenticated=True,
        )
        return parse_response(Passenger, data.get("passenger"), "Failed to save passenger")

    def update_passenger(self, passenger_id: str, draft: PassengerDraft) -> Passenger:
        data = self.client.request(
            "PUT",
            f"{endpoints.CORPORATE_PASSENGERS}/{passenger_id}",
            name="corporate.passengers.update",
            fallback_error="Failed to update passenger",
            json=draft.to_api(),
            authenticated=True,
        )
        return parse_response(Passenger, data.get("passenger"), "Failed to update passenger")

    def delete_passenger(self, passenger_id: str) -> None:
        self.client.request(
            "DELETE",
            f"{endpoints.CORPORATE_PASSENGERS}/{passenger_id}",
            name="corporate.passengers.delete",
            fallback_error="Failed to delete passenger",
            authenticated=True,
        )

    # --- Preferences ---

    def get_preferences(self) -> AccountPreferences:
        data = self.client.request(
            "GET",
            endpoints.CORPORATE_PREFERENCES,
            name="corporate.preferences.get",
            fallback_error="Failed to load preferences",
            authenticated=True,
        )
        return parse_response(
            AccountPreferences, data.get("preferences", {}), "Failed to load preferences"
        )

    def update_preferences(self, preferences: AccountPreferences) -> None:
        body = preferences.to_api()
        # Logo fields are owned by the upload endpoints
        body.pop("logoUrl", None)
        body.pop("logoS3Key", None)
        self.client.request(
            "PUT",
            endpoints.CORPORATE_PREFERENCES,
            name="corporate.preferences.update",
            fallback_error="Failed to save preferences",
            json=body,
            authenticated=True,
        )

    def get_logo_upload_url(self, content_type: str, file_size: int) -> LogoUploadTarget:
        data = self.client.request(
            "POST",
            f"{endpoints.CORPORATE_LOGO}/upload-url",
            name="corporate.logo.upload_url",
            fallback_error="Failed to prepare logo upload",
            json={"contentType": content_type, "fileSize": file_size},
            authenticated=True,
        )
        return parse_response(LogoUploadTarget, data, "Failed to prepare logo upload")

    def confirm_logo_upload(self, logo_key: str) -> LogoConfirmation:
        data = self.client.request(
            "POST",
            f"{endpoints.CORPORATE_LOGO}/confirm",
            name="corporate.logo.confirm",
            fallback_error="Failed to upload logo",
            json={"logoKey": logo_key},
            authenticated=True,
        )
        return parse_response(LogoConfirmation, data, "Failed to upload logo")

    def upload_logo(self, content: bytes, content_type: str) -> LogoConfirmation:
        """Upload a company logo: pre-signed URL, direct PUT, then confirm.

        Raises:
            ValueError: Unsupported type or file larger than the configured limit
            ApiError: Any step of the upload fails
        """
        if content_type not in LOGO_CONTENT_TYPES:
            raise ValueError("Logo must be a PNG, JPEG or SVG image")
        max_bytes = self.client.settings.logo_max_bytes
        if len(content) > max_bytes:
            raise ValueError(f"Logo must be at most {max_bytes // (1024 * 1024)}MB")

        target = self.get_logo_upload_url(content_type, len(content))
        self.client.put_external(target.upload_url, content, content_type, name="corporate.logo.put")
        return self.confirm_logo_upload(target.logo_key)

    def delete_logo(self) -> None:
        self.client.request(
            "DELETE",
            endpoints.CORPORATE_LOGO,
            name="corporate.logo.delete",
            fallback_error="Failed to delete logo",
            authenticated=True,
        )
