"""Unified quote-to-booking flow for the public, shared-link and corporate pages.

Every interaction handler returns ``True`` on success. On failure it stores a
user-facing message in ``flow.error`` and leaves the stage unchanged.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from portal.client.base import ApiError
from portal.client.bookings import BookingApi
from portal.client.corporate import CorporateApi
from portal.client.quotes import QuoteApi
from portal.flow.errors import BookingFlowError, ValidationFailedError
from portal.flow.fetcher import QuoteFetcher, build_quote
from portal.flow.form import JourneyForm
from portal.flow.session import FlowContext
from portal.flow.stage import BookingStage, BookingStageController
from portal.flow.submitter import BookingSubmitter
from portal.models.booking import (
    Booking,
    ContactDetails,
    CorporateBookingDetails,
    PaymentDetails,
    PaymentOutcome,
    validate_contact,
)
from portal.models.common import Refreshments
from portal.models.corporate import FavouriteTrip, Passenger
from portal.models.quote import MultiVehicleQuote, PricingOption, Quote, default_pricing_option

logger = logging.getLogger(__name__)

QUOTE_SAVE_FAILED = "Quote could not be saved. Please try again."
QUOTE_EXPIRED = "This quote has expired. Please request a new quote."
QUOTE_LOCKED = "Go back to the quote to change your journey or vehicle."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookingFlow:
    """State for one quote flow instance, parameterised by a ``FlowContext``."""

    def __init__(
        self,
        context: FlowContext,
        quotes: QuoteApi,
        bookings: BookingApi,
        corporate: CorporateApi | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.context = context
        self.quotes = quotes
        self.corporate = corporate
        self.fetcher = QuoteFetcher(quotes)
        self.submitter = BookingSubmitter(bookings)
        self.clock = clock

        self.form = JourneyForm()
        self.stages = BookingStageController()
        self._clear_state()

    def _clear_state(self) -> None:
        self.multi_quote: MultiVehicleQuote | None = None
        self.quote: Quote | None = None
        self.quote_token: str | None = None
        self.selected_vehicle: str | None = None
        self.pricing_option: PricingOption | None = None
        self.contact: ContactDetails | None = self.profile_contact()
        self._prefill: ContactDetails | None = None
        self.contact_errors: dict[str, str] = {}
        self.selected_passenger: Passenger | None = None
        self.manual_passenger_name = ""
        self.driver_instructions = ""
        self.refreshments = Refreshments()
        self.booking: Booking | None = None
        self.error: str | None = None

    @property
    def stage(self) -> BookingStage:
        return self.stages.stage

    def _fail(self, message: str) -> bool:
        self.error = message
        return False

    # --- Quote stage ---

    def request_quotes(self) -> bool:
        """Validate the form and fetch the vehicle comparison."""
        self.error = None
        if self.stage != BookingStage.quote:
            return self._fail(QUOTE_LOCKED)
        corp_account_id = self.context.account_id if self.context.is_corporate else None
        try:
            request = self.form.to_request(corp_account_id)
            multi = self.fetcher.fetch(request)
        except (ApiError, BookingFlowError) as e:
            return self._fail(e.message)

        self.multi_quote = multi
        self.quote = None
        self.quote_token = None
        self.selected_vehicle = None
        self.pricing_option = None
        return True

    def select_vehicle(self, vehicle_id: str, option: PricingOption | None = None) -> bool:
        """Pick a compared vehicle and save the quote to obtain the booking token.

        A failed save keeps the quote on screen but leaves the token empty, so
        booking is refused until the customer selects again.
        """
        self.error = None
        if self.stage != BookingStage.quote:
            return self._fail(QUOTE_LOCKED)
        if self.multi_quote is None:
            return self._fail("Please request a quote first")

        option = option or default_pricing_option(self.form.journey_type)
        try:
            quote = build_quote(self.multi_quote, vehicle_id, option, self.clock())
        except BookingFlowError as e:
            return self._fail(e.message)

        self.selected_vehicle = vehicle_id
        self.pricing_option = option

        try:
            saved = self.quotes.save_quote(quote)
        except ApiError as e:
            logger.warning(f"Failed to save quote {quote.quote_id}: {e.message}")
            self.quote = quote
            self.quote_token = None
            return self._fail(QUOTE_SAVE_FAILED)

        self.quote = quote.model_copy(update={"quote_id": saved.quote_id})
        self.quote_token = saved.token
        return True

    def clear_selection(self) -> bool:
        """Return to the comparison, keeping the fetched prices."""
        if self.stage != BookingStage.quote:
            return self._fail("Cannot change vehicle at this stage")
        self.quote = None
        self.quote_token = None
        self.selected_vehicle = None
        self.pricing_option = None
        self.error = None
        return True

    def load_shared_quote(self, quote_id: str, token: str) -> bool:
        """Open a quote from a share link; the link token authorizes booking."""
        self.error = None
        try:
            quote = self.quotes.get_quote_by_token(quote_id, token)
        except ApiError as e:
            return self._fail(e.message)

        self.quote = quote
        self.selected_vehicle = quote.vehicle_type
        if quote.is_expired(self.clock()):
            self.quote_token = None
            return self._fail(QUOTE_EXPIRED)

        self.quote_token = token
        return True

    def apply_favourite_trip(self, trip: FavouriteTrip) -> bool:
        if self.stage != BookingStage.quote:
            return self._fail("Finish or start a new quote before loading a trip")
        self.form.apply_favourite_trip(trip)
        self.multi_quote = None
        self.quote = None
        self.quote_token = None
        return True

    # --- Corporate passenger ---

    def select_passenger(self, passenger: Passenger | None) -> None:
        """Choose a directory passenger; their preferences become the booking defaults."""
        self.selected_passenger = passenger
        if passenger is not None:
            self.refreshments = passenger.refreshments or Refreshments()
            self.driver_instructions = passenger.driver_instructions or ""
        else:
            self.refreshments = Refreshments()
            self.driver_instructions = ""

    def set_manual_passenger_name(self, name: str) -> None:
        self.manual_passenger_name = name.strip()

    @property
    def passenger_name(self) -> str:
        if self.selected_passenger is not None:
            return self.selected_passenger.name
        if self.manual_passenger_name:
            return self.manual_passenger_name
        return self.contact.name if self.contact else ""

    # --- Contact ---

    def profile_contact(self) -> ContactDetails | None:
        """Contact derived from the logged-in user, if any."""
        user = self.context.user
        if user is None:
            return None
        return ContactDetails(name=user.name, email=user.email)

    def prefilled_contact(self) -> ContactDetails:
        """Selected passenger, then manual passenger name, then the user profile."""
        user = self.context.user
        passenger = self.selected_passenger
        return ContactDetails(
            name=(passenger.name if passenger else "")
            or self.manual_passenger_name
            or (user.name if user else ""),
            email=(passenger.email if passenger else None) or (user.email if user else ""),
            phone=(passenger.phone if passenger else None) or "",
        )

    def confirm_booking(self) -> bool:
        """quote -> contact."""
        self.error = None
        try:
            self.stages.confirm_booking(self.quote is not None)
        except BookingFlowError as e:
            return self._fail(e.message)

        # Prefill only while the contact is still one we derived ourselves
        if self.context.is_corporate and self.contact in (None, self.profile_contact(), self._prefill):
            self.contact = self._prefill = self.prefilled_contact()
        return True

    def submit_contact(self, contact: ContactDetails) -> bool:
        """Store contact; invoice accounts are booked immediately."""
        self.error = None
        if self.stage != BookingStage.contact:
            return self._fail("Please confirm a quote first")

        self.contact = contact
        self.contact_errors = validate_contact(contact)
        if self.contact_errors:
            return self._fail("Please check your contact details")

        self.stages.after_contact(self.context.payment_terms)
        if self.context.payment_terms.requires_payment:
            return True
        return self._submit(PaymentOutcome.invoice())

    def submit_payment(self, details: PaymentDetails) -> bool:
        self.error = None
        if self.stage != BookingStage.payment:
            return self._fail("Payment is not required at this stage")
        return self._submit(PaymentOutcome.card(details))

    def _corporate_details(self) -> CorporateBookingDetails | None:
        if not self.context.is_corporate:
            return None
        passenger = self.selected_passenger
        user = self.context.user
        return CorporateBookingDetails(
            passenger_name=self.passenger_name,
            passenger_id=passenger.passenger_id if passenger else None,
            passenger_alias=passenger.alias if passenger else None,
            booked_by=user.email if user else "",
            driver_instructions=self.driver_instructions or None,
            refreshments=self.refreshments,
        )

    def _submit(self, payment: PaymentOutcome) -> bool:
        try:
            self.booking = self.submitter.submit(
                self.quote,
                self.quote_token,
                self.contact or ContactDetails(),
                payment,
                account_id=self.context.account_id,
                transport=self.form.transport,
                corporate=self._corporate_details(),
            )
        except ValidationFailedError as e:
            if isinstance(e.fields, dict):
                self.contact_errors = e.fields
            return self._fail(e.message)
        except (ApiError, BookingFlowError) as e:
            return self._fail(e.message)

        self.contact_errors = {}
        self.stages.complete(self.context.payment_terms)
        self._mark_favourite_used()
        return True

    def _mark_favourite_used(self) -> None:
        trip_id = self.form.favourite_trip_id
        if not trip_id or self.corporate is None:
            return
        try:
            self.corporate.mark_trip_used(trip_id)
        except ApiError as e:
            logger.warning(f"Failed to mark trip {trip_id} used: {e.message}")

    # --- Navigation ---

    def back(self) -> bool:
        self.error = None
        try:
            self.stages.back()
        except BookingFlowError as e:
            return self._fail(e.message)
        return True

    def new_quote(self) -> None:
        """Reset stage, form and every selection; profile contact is re-derived."""
        self.form.reset()
        self.stages.reset()
        self._clear_state()
