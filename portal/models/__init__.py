"""Models package - re-exports for convenience."""

from portal.models.booking import (
    AmendmentQuote,
    AmendmentRequest,
    Booking,
    BookingStatus,
    BookingUpdate,
    CancellationPreview,
    ContactDetails,
    CorporateBookingDetails,
    PaymentDetails,
    PaymentMethod,
    PaymentOutcome,
    TransportDetails,
    validate_contact,
)
from portal.models.chat import ChatIntent, ChatMessage, ChatReply, ChatRole, ChatSession, ChatSlot
from portal.models.common import Extras, JourneyType, Location, LocationType, Refreshments, Waypoint
from portal.models.corporate import (
    AccountPreferences,
    AuthResult,
    Company,
    CorporateUser,
    FavouriteTrip,
    NameBoardFormat,
    Passenger,
    PaymentTerms,
)
from portal.models.driver import DriverProfile, DriverStatus, DriverSummary, DriverVehicle
from portal.models.journey import JourneyRequest
from portal.models.quote import (
    MultiVehicleQuote,
    PricingOption,
    Quote,
    SavedQuote,
    VehiclePricing,
    VehicleType,
    ZonePricingRoute,
    default_pricing_option,
)

__all__ = [
    # Common
    "JourneyType",
    "LocationType",
    "Location",
    "Waypoint",
    "Extras",
    "Refreshments",
    # Journey
    "JourneyRequest",
    # Quote
    "MultiVehicleQuote",
    "VehiclePricing",
    "PricingOption",
    "default_pricing_option",
    "Quote",
    "SavedQuote",
    "VehicleType",
    "ZonePricingRoute",
    # Booking
    "Booking",
    "BookingStatus",
    "BookingUpdate",
    "AmendmentRequest",
    "AmendmentQuote",
    "CancellationPreview",
    "ContactDetails",
    "validate_contact",
    "CorporateBookingDetails",
    "PaymentDetails",
    "PaymentMethod",
    "PaymentOutcome",
    "TransportDetails",
    # Corporate
    "AccountPreferences",
    "AuthResult",
    "Company",
    "CorporateUser",
    "FavouriteTrip",
    "NameBoardFormat",
    "Passenger",
    "PaymentTerms",
    # Driver
    "DriverProfile",
    "DriverStatus",
    "DriverSummary",
    "DriverVehicle",
    # Chat
    "ChatIntent",
    "ChatMessage",
    "ChatReply",
    "ChatRole",
    "ChatSession",
    "ChatSlot",
]
