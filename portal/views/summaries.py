"""View models for the quote, comparison, confirmation and zone pricing screens.

Everything here is a pure function of already-fetched server data; prices are
shown exactly as the server formatted them.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from portal.flow.session import FlowContext
from portal.models.booking import Booking, ContactDetails, PaymentMethod
from portal.models.corporate import CorporateRole, Dashboard, TeamMember
from portal.models.quote import MultiVehicleQuote, Quote, VehicleType, ZonePricingRoute
from portal.views.formatting import (
    format_date,
    format_datetime,
    format_duration_hours,
    format_price,
    journey_type_label,
    payment_terms_label,
)


class ComparisonRow(BaseModel):
    """One vehicle card of the comparison grid."""

    vehicle_id: str
    name: str
    description: str = ""
    capacity: int
    luggage_capacity: int | None = None
    features: list[str] = Field(default_factory=list)
    image_url: str = ""
    one_way_price: str
    return_price: str | None = None
    return_original_price: str | None = None
    return_savings: str | None = None
    price_before_discount: str | None = None
    corporate_discount: str | None = None


def comparison_rows(multi: MultiVehicleQuote, passengers: int) -> list[ComparisonRow]:
    """Rows for vehicles that fit the party, cheapest first."""
    rows = []
    for vehicle_id, vehicle in multi.vehicles_for(passengers):
        one_way = vehicle.one_way
        ret = vehicle.return_pricing
        rows.append(
            ComparisonRow(
                vehicle_id=vehicle_id,
                name=vehicle.name,
                description=vehicle.description,
                capacity=vehicle.capacity,
                luggage_capacity=vehicle.luggage_capacity,
                features=vehicle.features,
                image_url=vehicle.image_url,
                one_way_price=one_way.display_total_price,
                return_price=ret.display_total_price if ret else None,
                return_original_price=ret.display_original_price if ret else None,
                return_savings=ret.discount.display_savings if ret and ret.discount else None,
                price_before_discount=one_way.display_transfer_price_before_discount
                if one_way.has_corporate_discount
                else None,
                corporate_discount=one_way.display_corporate_discount
                if one_way.has_corporate_discount
                else None,
            )
        )
    return rows


class QuoteSummary(BaseModel):
    quote_id: str
    journey_type: str
    pickup: str
    dropoff: str
    stops: list[str] = Field(default_factory=list)
    pickup_time: str
    return_time: str | None = None
    duration: str | None = None
    vehicle: str
    passengers: int
    luggage: int
    distance: str | None = None
    drive_time: str | None = None
    total: str
    return_savings: str | None = None
    expires_at: datetime


def quote_summary(quote: Quote) -> QuoteSummary:
    journey = quote.journey
    return QuoteSummary(
        quote_id=quote.quote_id,
        journey_type=journey_type_label(quote.journey_type),
        pickup=quote.pickup_location.address,
        dropoff=quote.dropoff_location.address,
        stops=[w.address for w in quote.waypoints if w.has_address],
        pickup_time=format_datetime(quote.pickup_time),
        return_time=format_datetime(quote.return_pickup_time)
        if quote.return_journey and quote.return_pickup_time
        else None,
        duration=format_duration_hours(quote.duration_hours) if quote.duration_hours else None,
        vehicle=quote.vehicle_details.name if quote.vehicle_details else quote.vehicle_type,
        passengers=quote.passengers,
        luggage=quote.luggage,
        distance=journey.distance.text if journey.distance else None,
        drive_time=journey.duration.text if journey.duration else None,
        total=quote.pricing.display_total,
        return_savings=quote.pricing.discount.display_savings if quote.pricing.discount else None,
        expires_at=quote.expires_at,
    )


class ConfirmationView(BaseModel):
    """Receipt shown after booking, for public and corporate flows alike."""

    booking_id: str
    status: str
    is_corporate: bool
    customer_name: str
    customer_email: str
    customer_phone: str
    summary: QuoteSummary
    total: str
    payment: str
    special_requests: str = ""

    # Corporate only
    passenger_name: str | None = None
    booked_by: str | None = None
    company_name: str | None = None


def confirmation_view(
    booking: Booking,
    quote: Quote,
    contact: ContactDetails,
    context: FlowContext,
    passenger_name: str | None = None,
    special_requests: str = "",
) -> ConfirmationView:
    total = booking.pricing.display_total if booking.pricing else quote.pricing.display_total
    if booking.payment_method == PaymentMethod.invoice:
        payment = payment_terms_label(context.payment_terms)
    else:
        payment = "Pay by card"

    return ConfirmationView(
        booking_id=booking.booking_id,
        status=booking.status.value,
        is_corporate=context.is_corporate,
        customer_name=contact.name,
        customer_email=contact.email,
        customer_phone=contact.phone,
        summary=quote_summary(quote),
        total=total,
        payment=payment,
        special_requests=special_requests,
        passenger_name=passenger_name if context.is_corporate else None,
        booked_by=context.user.email if context.is_corporate and context.user else None,
        company_name=context.company_name if context.is_corporate else None,
    )


class ZonePriceRow(BaseModel):
    zone_name: str
    destination_name: str
    route_name: str
    vehicle: str
    outbound: str
    return_price: str


def zone_pricing_rows(
    routes: list[ZonePricingRoute], vehicle_types: list[VehicleType]
) -> dict[str, list[ZonePriceRow]]:
    """Zone price table grouped by origin zone, vehicles in catalog order."""
    grouped: dict[str, list[ZonePriceRow]] = {}
    for route in routes:
        rows = grouped.setdefault(route.zone_name, [])
        for vehicle in vehicle_types:
            prices = route.prices.get(vehicle.vehicle_type_id)
            if prices is None:
                continue
            rows.append(
                ZonePriceRow(
                    zone_name=route.zone_name,
                    destination_name=route.destination_name,
                    route_name=route.route_name,
                    vehicle=vehicle.name,
                    outbound=format_price(prices.outbound),
                    return_price=format_price(prices.return_price),
                )
            )
    return grouped


class DashboardView(BaseModel):
    company_name: str = ""
    discount: str | None = None
    total_bookings: int
    total_spend: str
    team_members: int
    pending_approvals: int


def dashboard_view(dashboard: Dashboard) -> DashboardView:
    company = dashboard.company
    stats = dashboard.stats
    return DashboardView(
        company_name=company.company_name if company else "",
        discount=f"{company.discount_percentage:g}%" if company and company.discount_percentage else None,
        total_bookings=stats.total_bookings,
        total_spend=format_price(stats.total_spend),
        team_members=stats.team_members,
        pending_approvals=stats.pending_approvals,
    )


class TeamRow(BaseModel):
    user_id: str
    name: str
    email: str
    role: CorporateRole
    status: str
    last_login: str = "Never"
    is_self: bool = False
    can_resend_invite: bool = False
    requires_approval: bool = False


def team_rows(members: list[TeamMember], current_user_id: str) -> list[TeamRow]:
    """Team table: admins first, then by name. Nobody can edit or remove themselves."""
    ordered = sorted(members, key=lambda m: (m.role != CorporateRole.admin, m.name.lower()))
    return [
        TeamRow(
            user_id=m.user_id,
            name=m.name,
            email=m.email,
            role=m.role,
            status=m.status,
            last_login=format_date(m.last_login) if m.last_login else "Never",
            is_self=m.user_id == current_user_id,
            can_resend_invite=m.status == "pending",
            requires_approval=m.requires_approval,
        )
        for m in ordered
    ]
