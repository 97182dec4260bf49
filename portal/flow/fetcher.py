"""Quote fetching and selection."""

import logging
from datetime import datetime, timedelta

from portal.client.quotes import QuoteApi
from portal.config import get_settings
from portal.flow.errors import BookingFlowError
from portal.models.journey import JourneyRequest
from portal.models.quote import MultiVehicleQuote, PricingOption, Quote, QuotePricing, VehicleDetails

logger = logging.getLogger(__name__)

OUT_OF_SERVICE_MESSAGE = "Sorry, this journey is outside our service area."


class QuoteFetcher:
    """Requests priced quotes for a validated journey. No side effects beyond the call."""

    def __init__(self, quotes: QuoteApi) -> None:
        self.quotes = quotes

    def fetch(self, request: JourneyRequest) -> MultiVehicleQuote:
        """Price every vehicle class for the journey.

        Raises:
            ApiError: Network failure, error response, or malformed payload
            BookingFlowError: Journey is outside the service area
        """
        multi = self.quotes.calculate_multi_vehicle_quote(request)
        if multi.out_of_service_area:
            logger.info(f"Out-of-service-area quote for {request.pickup_location.address}")
            raise BookingFlowError(multi.out_of_service_area_message or OUT_OF_SERVICE_MESSAGE)
        return multi

    def fetch_single(self, request: JourneyRequest) -> Quote:
        """Price the journey for the vehicle named in the request."""
        return self.quotes.calculate_quote(request)


def build_quote(
    multi: MultiVehicleQuote,
    vehicle_id: str,
    option: PricingOption,
    now: datetime,
) -> Quote:
    """Turn one comparison row into a single-vehicle quote.

    The server's quote id and expiry are kept when present; otherwise the
    quote gets a synthetic ``quote-<ms>`` id and the default expiry window.

    Raises:
        BookingFlowError: Unknown vehicle or no price for the chosen option
    """
    vehicle = multi.vehicles.get(vehicle_id)
    if vehicle is None:
        raise BookingFlowError(f"Vehicle {vehicle_id} is not available for this journey")

    try:
        block = vehicle.pricing_for(option)
    except ValueError as e:
        raise BookingFlowError(str(e)) from e

    is_return = option == PricingOption.return_
    discount = vehicle.return_pricing.discount if is_return and vehicle.return_pricing else None
    expiry_hours = get_settings().quote_default_expiry_hours

    return Quote(
        quote_id=multi.quote_id or f"quote-{int(now.timestamp() * 1000)}",
        status=multi.status or "valid",
        expires_at=multi.expires_at or now + timedelta(hours=expiry_hours),
        journey=multi.journey,
        pricing=QuotePricing(
            transfer_price=block.transfer_price,
            display_transfer_price=block.display_transfer_price,
            total_price=block.total_price,
            display_total=block.display_total_price,
            fees=block.fees,
            discount=discount,
        ),
        vehicle_type=vehicle_id,
        vehicle_details=VehicleDetails(
            name=vehicle.name,
            description=vehicle.description,
            image_url=vehicle.image_url,
            capacity=vehicle.capacity,
            features=vehicle.features,
        ),
        pickup_location=multi.pickup_location,
        dropoff_location=multi.dropoff_location or multi.pickup_location,
        waypoints=multi.waypoints,
        pickup_time=multi.pickup_time,
        passengers=multi.passengers,
        luggage=multi.luggage,
        return_journey=is_return,
        return_pickup_time=multi.return_pickup_time if is_return else None,
        journey_type=multi.journey_type,
        duration_hours=multi.duration_hours,
        extras=multi.extras,
        created_at=multi.created_at,
    )
