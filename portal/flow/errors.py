"""Booking flow exceptions.

Handlers in the flow catch these (and ``ApiError``) and keep the message in
view state; they never reach the page.
"""


class BookingFlowError(Exception):
    """Base class for client-side booking flow failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailedError(BookingFlowError):
    """Required inputs are missing or invalid; no request was sent."""

    def __init__(self, message: str, fields: list[str] | dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class PreconditionFailedError(BookingFlowError):
    """Session token or account identifier missing; no request was sent."""


class StageTransitionError(BookingFlowError):
    """Requested stage change is not allowed from the current stage."""
