"""Booking stage controller.

Stages advance quote -> contact -> payment -> confirmation. Accounts on
invoice terms go from contact straight to confirmation once the booking is
submitted. Back navigation is allowed from contact and payment only.
"""

from enum import Enum

from portal.flow.errors import StageTransitionError
from portal.models.corporate import PaymentTerms


class BookingStage(str, Enum):
    quote = "quote"
    contact = "contact"
    payment = "payment"
    confirmation = "confirmation"


_BACK = {
    BookingStage.contact: BookingStage.quote,
    BookingStage.payment: BookingStage.contact,
}


class BookingStageController:
    """Forward-only stage machine with one account-driven bypass."""

    def __init__(self) -> None:
        self.stage = BookingStage.quote
        self.history: list[BookingStage] = [BookingStage.quote]

    def _move(self, expected: tuple[BookingStage, ...], target: BookingStage) -> BookingStage:
        if self.stage not in expected:
            raise StageTransitionError(f"Cannot move from {self.stage.value} to {target.value}")
        self.stage = target
        self.history.append(target)
        return target

    def confirm_booking(self, has_quote: bool) -> BookingStage:
        """quote -> contact; a quote must exist."""
        if not has_quote:
            raise StageTransitionError("Select a vehicle before confirming")
        return self._move((BookingStage.quote,), BookingStage.contact)

    def after_contact(self, payment_terms: PaymentTerms) -> BookingStage:
        """contact -> payment for immediate terms; invoice accounts stay until submitted."""
        if self.stage != BookingStage.contact:
            raise StageTransitionError(f"Cannot submit contact details from {self.stage.value}")
        if payment_terms.requires_payment:
            return self._move((BookingStage.contact,), BookingStage.payment)
        return self.stage

    def complete(self, payment_terms: PaymentTerms) -> BookingStage:
        """Booking created: payment -> confirmation, or contact -> confirmation on invoice terms."""
        allowed = (BookingStage.payment,) if payment_terms.requires_payment else (BookingStage.contact,)
        return self._move(allowed, BookingStage.confirmation)

    def back(self) -> BookingStage:
        target = _BACK.get(self.stage)
        if target is None:
            raise StageTransitionError(f"Cannot go back from {self.stage.value}")
        self.stage = target
        self.history.append(target)
        return target

    def reset(self) -> None:
        self.stage = BookingStage.quote
        self.history = [BookingStage.quote]
