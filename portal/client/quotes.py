"""Quote, catalog and location endpoints."""

from portal.client import endpoints
from portal.client.base import ApiError, PortalApiClient, parse_response
from portal.locations import Prediction
from portal.models.common import Location
from portal.models.journey import JourneyRequest
from portal.models.quote import MultiVehicleQuote, Quote, SavedQuote, VehicleType, ZonePricingRoute


class QuoteApi:
    """Pricing API consumer. Prices are computed server-side only."""

    def __init__(self, client: PortalApiClient) -> None:
        self.client = client

    def calculate_multi_vehicle_quote(self, request: JourneyRequest) -> MultiVehicleQuote:
        """Price the journey for every vehicle class (compare mode)."""
        data = self.client.request(
            "POST",
            endpoints.QUOTES,
            name="quotes.compare",
            fallback_error="Failed to calculate quotes",
            json=request.to_api(compare_mode=True),
        )
        return parse_response(MultiVehicleQuote, data, "Failed to calculate quotes")

    def calculate_quote(self, request: JourneyRequest) -> Quote:
        """Price the journey for the single vehicle named in the request."""
        if not request.vehicle_type:
            raise ValueError("vehicle_type is required for a single-vehicle quote")

        data = self.client.request(
            "POST",
            endpoints.QUOTES,
            name="quotes.calculate",
            fallback_error="Failed to calculate quote",
            json=request.to_api(),
        )
        return parse_response(Quote, data, "Failed to calculate quote")

    def save_quote(self, quote: Quote) -> SavedQuote:
        """Persist a selected quote and obtain its short-lived booking token."""
        data = self.client.request(
            "POST",
            endpoints.QUOTES_SAVE,
            name="quotes.save",
            fallback_error="Failed to save quote",
            json=quote.to_api(),
        )
        return parse_response(SavedQuote, data, "Failed to save quote")

    def get_quote_by_token(self, quote_id: str, token: str) -> Quote:
        """Retrieve a shared quote link."""
        data = self.client.request(
            "GET",
            f"{endpoints.QUOTES}/{quote_id}",
            name="quotes.retrieve",
            fallback_error="Failed to load quote",
            params={"token": token},
        )
        return parse_response(Quote, data.get("quote", data), "Failed to load quote")

    def list_vehicle_types(self) -> list[VehicleType]:
        data = self.client.request(
            "GET",
            endpoints.VEHICLE_TYPES,
            name="vehicle_types.list",
            fallback_error="Failed to load vehicle types",
        )
        vehicles = [
            parse_response(VehicleType, v, "Failed to load vehicle types")
            for v in data.get("vehicleTypes", [])
        ]
        return sorted(vehicles, key=lambda v: (v.sort_order is None, v.sort_order or 0, v.name))

    def get_zone_pricing(self) -> list[ZonePricingRoute]:
        data = self.client.request(
            "GET",
            endpoints.ZONE_PRICING,
            name="zone_pricing.list",
            fallback_error="Failed to load zone pricing",
        )
        return [
            parse_response(ZonePricingRoute, r, "Failed to load zone pricing")
            for r in data.get("routes", [])
        ]

    def search_locations(self, query: str) -> list[Prediction]:
        """Autocomplete addresses (queries shorter than 2 characters return nothing)."""
        if len(query.strip()) < 2:
            return []

        data = self.client.request(
            "GET",
            endpoints.LOCATIONS,
            name="locations.search",
            fallback_error="Failed to search locations",
            params={"input": query.strip()},
        )
        return [
            parse_response(Prediction, p, "Failed to search locations")
            for p in data.get("predictions", [])
        ]

    def get_place_details(self, place_id: str) -> Location:
        data = self.client.request(
            "GET",
            endpoints.LOCATIONS_PLACE_DETAILS,
            name="locations.place_details",
            fallback_error="Failed to load place details",
            params={"placeId": place_id},
        )
        location = data.get("location", data)
        if not isinstance(location, dict):
            raise ApiError("Failed to load place details")
        return parse_response(Location, location, "Failed to load place details")
