"""Journey request models - what the customer wants priced."""

from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from portal.models.common import ApiModel, Extras, JourneyType, Location, Waypoint


class JourneyRequest(ApiModel):
    """Validated journey sent to the pricing API."""

    pickup_location: Location
    dropoff_location: Location | None = None
    waypoints: list[Waypoint] = Field(default_factory=list)
    pickup_time: datetime
    return_pickup_time: datetime | None = None
    passengers: int = Field(..., ge=1)
    luggage: int = Field(0, ge=0)
    journey_type: JourneyType = JourneyType.one_way
    duration_hours: int | None = Field(None, ge=1)
    return_to_pickup: bool = True
    extras: Extras | None = None
    vehicle_type: str | None = None
    corp_account_id: str | None = None

    @model_validator(mode="after")
    def validate_locations(self) -> "JourneyRequest":
        """Pickup is always required; dropoff unless an hourly hire returns to pickup."""
        if not self.pickup_location.has_address:
            raise ValueError("pickup address is required")

        needs_dropoff = self.journey_type != JourneyType.hourly or not self.return_to_pickup
        if needs_dropoff and (self.dropoff_location is None or not self.dropoff_location.has_address):
            raise ValueError(f"dropoff address is required for {self.journey_type.value} journeys")

        if self.journey_type == JourneyType.hourly and self.duration_hours is None:
            raise ValueError("duration_hours is required for hourly journeys")

        if self.return_pickup_time is not None and self.return_pickup_time <= self.pickup_time:
            raise ValueError("return pickup must be after the outbound pickup")
        return self

    @property
    def is_round_trip(self) -> bool:
        return self.journey_type == JourneyType.round_trip

    def to_api(self, compare_mode: bool = False) -> dict[str, Any]:
        """Build the quote request body.

        Incomplete waypoints are dropped, empty extras omitted, and the dropoff
        omitted for hourly hires that return to the pickup point.
        """
        is_hourly = self.journey_type == JourneyType.hourly

        body: dict[str, Any] = {
            "pickupLocation": self.pickup_location.to_api(),
            "pickupTime": self.pickup_time.isoformat(),
            "passengers": self.passengers,
            "luggage": self.luggage,
            "journeyType": self.journey_type.api_value,
        }

        if self.dropoff_location is not None and not (is_hourly and self.return_to_pickup):
            body["dropoffLocation"] = self.dropoff_location.to_api()

        waypoints = [w.to_api() for w in self.waypoints if w.is_complete]
        if waypoints:
            body["waypoints"] = waypoints

        if is_hourly:
            body["durationHours"] = self.duration_hours

        if self.is_round_trip:
            body["returnJourney"] = True
            if self.return_pickup_time is not None:
                body["returnPickupTime"] = self.return_pickup_time.isoformat()

        if self.extras is not None and not self.extras.is_empty:
            body["extras"] = self.extras.to_api()

        if self.vehicle_type:
            body["vehicleType"] = self.vehicle_type

        if self.corp_account_id:
            body["corpAccountId"] = self.corp_account_id

        if compare_mode:
            body["compareMode"] = True

        return body
