"""Display formatting for prices, dates and labels."""

from datetime import datetime

from portal.models.common import JourneyType
from portal.models.corporate import PaymentTerms

_JOURNEY_TYPE_LABELS = {
    JourneyType.one_way: "One Way",
    JourneyType.round_trip: "Return",
    JourneyType.hourly: "By the Hour",
}


def format_price(pence: int) -> str:
    """Format minor units as pounds, e.g. 1234 -> "£12.34"."""
    sign = "-" if pence < 0 else ""
    pounds, rem = divmod(abs(pence), 100)
    return f"{sign}£{pounds:,}.{rem:02d}"


def format_time_12h(value: datetime) -> str:
    """e.g. "9:05 AM"."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_date(value: datetime) -> str:
    """e.g. "Mon 5 Jan 2026"."""
    return f"{value:%a} {value.day} {value:%b %Y}"


def format_datetime(value: datetime) -> str:
    return f"{format_date(value)}, {format_time_12h(value)}"


def format_duration_hours(hours: int) -> str:
    return f"{hours} hour" if hours == 1 else f"{hours} hours"


def journey_type_label(journey_type: JourneyType) -> str:
    return _JOURNEY_TYPE_LABELS[journey_type]


def payment_terms_label(terms: PaymentTerms) -> str:
    if terms.requires_payment:
        return "Pay by card"
    return f"Invoice ({terms.label})"
