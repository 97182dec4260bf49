"""Journey form state - the inputs of one quote flow, page lifetime only."""

from dataclasses import dataclass, field, fields
from datetime import datetime

from pydantic import ValidationError

from portal.config import get_settings
from portal.flow.errors import ValidationFailedError
from portal.models.booking import TransportDetails
from portal.models.common import Extras, JourneyType, Location, Waypoint
from portal.models.corporate import FavouriteTrip
from portal.models.journey import JourneyRequest


def _has_address(location: Location | None) -> bool:
    return location is not None and location.has_address


@dataclass
class JourneyForm:
    """Mutable journey inputs with the quote page defaults."""

    pickup_location: Location | None = None
    dropoff_location: Location | None = None
    waypoints: list[Waypoint] = field(default_factory=list)
    pickup_date: datetime | None = None
    return_date: datetime | None = None
    passengers: int = field(default_factory=lambda: get_settings().default_passengers)
    luggage: int = 0
    journey_type: JourneyType = JourneyType.one_way
    duration_hours: int = 4
    return_to_pickup: bool = True
    extras: Extras = field(default_factory=Extras)
    transport: TransportDetails = field(default_factory=TransportDetails)
    favourite_trip_id: str | None = None

    @property
    def is_hourly(self) -> bool:
        return self.journey_type == JourneyType.hourly

    def missing_fields(self) -> list[str]:
        """Names of the inputs that block a quote request."""
        settings = get_settings()
        missing = []

        if not _has_address(self.pickup_location):
            missing.append("pickup_location")
        if self.pickup_date is None:
            missing.append("pickup_date")

        if self.is_hourly:
            if not settings.hourly_min_hours <= self.duration_hours <= settings.hourly_max_hours:
                missing.append("duration_hours")
            if not self.return_to_pickup and not _has_address(self.dropoff_location):
                missing.append("dropoff_location")
        else:
            if not _has_address(self.dropoff_location):
                missing.append("dropoff_location")
            if self.journey_type == JourneyType.round_trip and self.return_date is None:
                missing.append("return_date")

        return missing

    def can_proceed(self) -> bool:
        return not self.missing_fields()

    def to_request(self, corp_account_id: str | None = None) -> JourneyRequest:
        """Build the validated journey request.

        Raises:
            ValidationFailedError: Required inputs missing or inconsistent
        """
        missing = self.missing_fields()
        if missing:
            raise ValidationFailedError("Please complete all required fields", missing)

        try:
            return JourneyRequest(
                pickup_location=self.pickup_location,
                dropoff_location=self.dropoff_location,
                waypoints=self.waypoints,
                pickup_time=self.pickup_date,
                return_pickup_time=self.return_date
                if self.journey_type == JourneyType.round_trip
                else None,
                passengers=self.passengers,
                luggage=self.luggage,
                journey_type=self.journey_type,
                duration_hours=self.duration_hours if self.is_hourly else None,
                return_to_pickup=self.return_to_pickup,
                extras=self.extras,
                corp_account_id=corp_account_id,
            )
        except ValidationError as e:
            invalid = [".".join(str(p) for p in err["loc"]) or "journey" for err in e.errors()]
            raise ValidationFailedError("Please check the journey details", invalid) from e

    def apply_favourite_trip(self, trip: FavouriteTrip) -> None:
        """Pre-fill locations and party size from a saved route."""
        self.pickup_location = trip.pickup_location
        self.dropoff_location = trip.dropoff_location
        self.waypoints = list(trip.waypoints)
        self.journey_type = JourneyType.one_way
        if trip.passengers:
            self.passengers = trip.passengers
        if trip.luggage is not None:
            self.luggage = trip.luggage
        self.favourite_trip_id = trip.trip_id

    def reset(self) -> None:
        """Restore every input to its default."""
        defaults = JourneyForm()
        for f in fields(self):
            setattr(self, f.name, getattr(defaults, f.name))


def can_proceed(form: JourneyForm) -> bool:
    """Whether the form holds enough to request a quote."""
    return form.can_proceed()
