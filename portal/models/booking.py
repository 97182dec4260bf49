"""Booking models - contact, payment outcome, and server booking snapshots."""

import re
from datetime import datetime
from enum import Enum

from pydantic import Field

from portal.models.common import ApiModel, JourneyType, Location, Refreshments, Waypoint

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\d\s+\-()]{10,}$")


class BookingStatus(str, Enum):
    """Server-side booking status."""

    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


class PaymentMethod(str, Enum):
    card = "card"
    invoice = "invoice"


class ContactDetails(ApiModel):
    """Lead passenger contact, collected once per flow."""

    name: str = ""
    email: str = ""
    phone: str = ""


def validate_contact(contact: ContactDetails) -> dict[str, str]:
    """Validate contact details.

    Returns:
        Mapping of field name to error message (empty when valid)
    """
    errors: dict[str, str] = {}

    name = contact.name.strip()
    if not name:
        errors["name"] = "Name is required"
    elif len(name) < 2:
        errors["name"] = "Name must be at least 2 characters"

    email = contact.email.strip()
    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.match(email):
        errors["email"] = "Please enter a valid email"

    phone = contact.phone.strip()
    if not phone:
        errors["phone"] = "Phone is required"
    elif not PHONE_PATTERN.match(re.sub(r"\s", "", phone)):
        errors["phone"] = "Please enter a valid phone number"

    return errors


class PaymentDetails(ApiModel):
    """Card payment details from the payment form.

    The card itself is tokenized by the payment processor; only the opaque
    token reaches this client.
    """

    cardholder_name: str
    payment_token: str | None = None


class PaymentOutcome(ApiModel):
    """How the booking will be paid."""

    method: PaymentMethod
    status: str = "pending"
    reference: str | None = None

    @classmethod
    def invoice(cls) -> "PaymentOutcome":
        return cls(method=PaymentMethod.invoice)

    @classmethod
    def card(cls, details: PaymentDetails) -> "PaymentOutcome":
        return cls(method=PaymentMethod.card, reference=details.payment_token)


class TransportDetails(ApiModel):
    """Flight/train numbers and free-text requests."""

    flight_number: str = ""
    train_number: str = ""
    return_flight_number: str = ""
    return_train_number: str = ""
    special_requests: str = ""


class CorporateBookingDetails(ApiModel):
    """Corporate-only booking fields."""

    passenger_name: str
    passenger_id: str | None = None
    passenger_alias: str | None = None
    booked_by: str
    driver_instructions: str | None = None
    refreshments: Refreshments = Field(default_factory=Refreshments)


class BookingFees(ApiModel):
    airport_drop: int | None = None
    vat: int | None = None
    vat_rate: float | None = None


class BookingPricing(ApiModel):
    currency: str = "GBP"
    total_price: int
    display_total: str
    transfer_price: int | None = None
    display_transfer_price: str | None = None
    fees: BookingFees | None = None


class Booking(ApiModel):
    """Last fetched snapshot of a server-owned booking."""

    booking_id: str
    status: BookingStatus = BookingStatus.pending
    customer: ContactDetails | None = None
    pickup_time: datetime | None = None
    pickup_location: Location | None = None
    dropoff_location: Location | None = None
    waypoints: list[Waypoint] = Field(default_factory=list)
    vehicle_type: str | None = None
    journey_type: JourneyType | None = None
    passengers: int | None = None
    luggage: int | None = None
    return_journey: bool = False
    return_pickup_time: datetime | None = None
    flight_number: str | None = None
    train_number: str | None = None
    return_flight_number: str | None = None
    return_train_number: str | None = None
    special_requests: str | None = None
    duration_hours: int | None = None
    pricing: BookingPricing | None = None
    payment_method: PaymentMethod | None = None
    created_at: datetime | None = None
    quote_id: str | None = None

    @property
    def is_cancellable(self) -> bool:
        return self.status in (BookingStatus.pending, BookingStatus.confirmed)


class CancellationPreview(ApiModel):
    """Cancellation fee/refund preview."""

    booking_id: str
    original_amount: int
    display_original_amount: str
    cancellation_fee: int
    display_cancellation_fee: str
    refund_amount: int
    display_refund_amount: str
    is_free_cancel: bool
    free_cancellation_hours: int
    cancellation_fee_percent: float
    hours_until_pickup: float


class BookingUpdate(TransportDetails):
    """Non-journey edits applied directly without re-pricing."""


class AmendmentRequest(ApiModel):
    """Journey edits that require a new price."""

    pickup_location: Location
    dropoff_location: Location
    pickup_time: datetime
    return_journey: bool = False
    return_pickup_time: datetime | None = None
    vehicle_type: str
    passengers: int = Field(..., ge=1)
    luggage: int = Field(0, ge=0)


class PriceDisplay(ApiModel):
    price: int
    display_price: str


class PriceDifference(ApiModel):
    amount: int
    display_amount: str
    is_increase: bool


class AmendmentQuote(ApiModel):
    """Re-priced amendment awaiting confirmation."""

    amendment_id: str
    original: PriceDisplay
    amended: PriceDisplay
    price_difference: PriceDifference
    expires_at: datetime
