"""Common types and enums shared across all models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model for remote API payloads (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_api(self) -> dict[str, Any]:
        """Serialize to the JSON body shape the remote API expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class JourneyType(str, Enum):
    """Journey type."""

    one_way = "one-way"
    round_trip = "round-trip"
    hourly = "hourly"

    @classmethod
    def _missing_(cls, value: object) -> "JourneyType | None":
        # The pricing API spells hourly hire "by-the-hour"
        if value == "by-the-hour":
            return cls.hourly
        return None

    @property
    def api_value(self) -> str:
        """Value sent to the pricing API."""
        return "by-the-hour" if self is JourneyType.hourly else self.value


class LocationType(str, Enum):
    """Location classification from the places service."""

    airport = "airport"
    train_station = "train_station"
    standard = "standard"


class Location(ApiModel):
    """Pickup/dropoff location."""

    address: str = ""
    place_id: str | None = None
    location_type: LocationType | None = None
    lat: float | None = Field(None, ge=-90, le=90)
    lng: float | None = Field(None, ge=-180, le=180)
    postcode: str | None = None

    @property
    def has_address(self) -> bool:
        return bool(self.address.strip())


class Waypoint(Location):
    """Intermediate stop with optional wait time."""

    wait_time: int | None = Field(None, ge=0, description="Wait time in minutes")

    @property
    def is_complete(self) -> bool:
        """Both address and place id are required before a stop is sent for pricing."""
        return self.has_address and bool((self.place_id or "").strip())


class Extras(ApiModel):
    """Optional extras."""

    baby_seats: int = Field(0, ge=0)
    child_seats: int = Field(0, ge=0)

    @property
    def is_empty(self) -> bool:
        return self.baby_seats == 0 and self.child_seats == 0


class Refreshments(ApiModel):
    """Passenger refreshment preferences."""

    still_water: bool = False
    sparkling_water: bool = False
    tea: bool = False
    coffee: bool = False
    other: str = ""
