"""Quote models - server-priced journeys, displayed but never recomputed."""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import ConfigDict, Field

from portal.models.common import ApiModel, Extras, JourneyType, Location, Waypoint


class PricingOption(str, Enum):
    """Which price block of a compared vehicle the customer picked."""

    one_way = "one-way"
    return_ = "return"
    hourly = "hourly"


def default_pricing_option(journey_type: JourneyType) -> PricingOption:
    """Round trips default to return pricing; hourly reads the one-way block as its rate."""
    if journey_type == JourneyType.round_trip:
        return PricingOption.return_
    if journey_type == JourneyType.hourly:
        return PricingOption.hourly
    return PricingOption.one_way


class Distance(ApiModel):
    meters: int
    miles: str
    text: str


class Duration(ApiModel):
    seconds: int
    minutes: int
    text: str


class JourneyMetrics(ApiModel):
    """Route distance and duration."""

    distance: Distance | None = None
    duration: Duration | None = None


class VehicleFees(ApiModel):
    """Itemized fees (pence)."""

    airport_drop: int = 0
    vat: int = 0
    vat_rate: float = 0


class ReturnDiscount(ApiModel):
    percentage: float
    savings: int
    display_savings: str


class OneWayPricing(ApiModel):
    """Pre-calculated one-way pricing (pence plus display strings)."""

    transfer_price: int
    display_transfer_price: str
    total_price: int
    display_total_price: str
    fees: VehicleFees = Field(default_factory=VehicleFees)

    # Present only when a corporate discount was applied
    transfer_price_before_discount: int | None = None
    display_transfer_price_before_discount: str | None = None
    corporate_discount_amount: int | None = None
    display_corporate_discount: str | None = None

    @property
    def has_corporate_discount(self) -> bool:
        return bool(self.corporate_discount_amount)


class ReturnPricing(OneWayPricing):
    """Return pricing with the round-trip discount."""

    discount: ReturnDiscount | None = None
    original_transfer_price: int | None = None
    display_original_price: str | None = None


class VehiclePricing(ApiModel):
    """One row of a multi-vehicle comparison."""

    name: str
    description: str = ""
    capacity: int
    luggage_capacity: int | None = None
    features: list[str] = Field(default_factory=list)
    image_url: str = ""
    one_way: OneWayPricing
    return_pricing: ReturnPricing | None = Field(None, alias="return")

    def pricing_for(self, option: PricingOption) -> OneWayPricing:
        """Return the price block for the chosen option."""
        if option == PricingOption.return_:
            if self.return_pricing is None:
                raise ValueError(f"{self.name} has no return pricing")
            return self.return_pricing
        return self.one_way


class SurgeRule(ApiModel):
    name: str
    multiplier: float


class SurgeModifier(ApiModel):
    active: bool = False
    multiplier: float = 1.0
    rules: list[SurgeRule] = Field(default_factory=list)


class CorporateDiscountModifier(ApiModel):
    active: bool = False
    percentage: float = 0
    account_name: str | None = None


class VatModifier(ApiModel):
    active: bool = False
    rate: float = 0
    vat_number: str | None = None


class AirportFeeModifier(ApiModel):
    active: bool = False
    amount: int = 0
    airport: str | None = None
    code: str | None = None


class PricingModifiers(ApiModel):
    """Journey-level modifiers applied by the pricing engine."""

    surge: SurgeModifier = Field(default_factory=SurgeModifier)
    corporate_discount: CorporateDiscountModifier = Field(default_factory=CorporateDiscountModifier)
    vat: VatModifier = Field(default_factory=VatModifier)
    airport_fee: AirportFeeModifier = Field(default_factory=AirportFeeModifier)


class MultiVehicleQuote(ApiModel):
    """Compare-mode quote response: one priced option per vehicle class."""

    compare_mode: bool = True
    journey_type: JourneyType = JourneyType.one_way
    journey: JourneyMetrics = Field(default_factory=JourneyMetrics)
    vehicles: dict[str, VehiclePricing] = Field(default_factory=dict)
    pickup_location: Location
    dropoff_location: Location | None = None
    waypoints: list[Waypoint] = Field(default_factory=list)
    total_wait_time: int | None = None
    pickup_time: datetime
    return_journey: bool = False
    return_pickup_time: datetime | None = None
    duration_hours: int | None = None
    passengers: int
    luggage: int = 0
    extras: Extras | None = None
    created_at: datetime | None = None
    expires_at: datetime | None = None
    modifiers: PricingModifiers = Field(default_factory=PricingModifiers)

    quote_id: str | None = None
    status: Literal["valid", "expired"] | None = None

    # Zone pricing
    is_zone_pricing: bool = False
    zone_name: str | None = None
    destination_name: str | None = None

    # Service area
    out_of_service_area: bool = False
    out_of_service_area_message: str | None = None

    def vehicles_for(self, passengers: int) -> list[tuple[str, VehiclePricing]]:
        """Vehicles that can carry the party, cheapest one-way first."""
        suitable = [(vid, v) for vid, v in self.vehicles.items() if v.capacity >= passengers]
        return sorted(suitable, key=lambda item: item[1].one_way.total_price)


class QuotePricing(ApiModel):
    """Pricing of the single selected vehicle."""

    currency: Literal["GBP"] = "GBP"
    transfer_price: int
    display_transfer_price: str
    total_price: int
    display_total: str
    fees: VehicleFees = Field(default_factory=VehicleFees)
    discount: ReturnDiscount | None = None


class VehicleDetails(ApiModel):
    name: str
    description: str = ""
    image_url: str = ""
    capacity: int
    features: list[str] = Field(default_factory=list)


class Quote(ApiModel):
    """A priced journey for one vehicle. Immutable once returned."""

    model_config = ConfigDict(frozen=True)

    quote_id: str
    status: Literal["valid", "expired"] = "valid"
    expires_at: datetime
    journey: JourneyMetrics = Field(default_factory=JourneyMetrics)
    pricing: QuotePricing
    vehicle_type: str
    vehicle_details: VehicleDetails | None = None
    pickup_location: Location
    dropoff_location: Location
    waypoints: list[Waypoint] = Field(default_factory=list)
    pickup_time: datetime
    passengers: int
    luggage: int = 0
    return_journey: bool = False
    return_pickup_time: datetime | None = None
    journey_type: JourneyType = JourneyType.one_way
    duration_hours: int | None = None
    extras: Extras | None = None
    created_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.status == "expired" or now >= self.expires_at


class SavedQuote(ApiModel):
    """Result of saving a quote: id plus short-lived booking authorization token."""

    quote_id: str
    token: str


class VehicleType(ApiModel):
    """Vehicle class from the catalog endpoint."""

    vehicle_type_id: str
    name: str
    description: str = ""
    capacity: int
    features: list[str] = Field(default_factory=list)
    image_url: str = ""
    sort_order: int | None = None
    icon_type: str | None = None


class ZonePrices(ApiModel):
    """Fixed zone prices (pence)."""

    outbound: int
    return_price: int = Field(..., alias="return")


class ZonePricingRoute(ApiModel):
    zone_id: str
    zone_name: str
    destination_id: str
    destination_name: str
    route_name: str
    prices: dict[str, ZonePrices] = Field(default_factory=dict)
