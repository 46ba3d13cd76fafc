"""Domain errors raised by the venue and booking services.

The HTTP layer maps these to status codes in app/api/errors.py.
"""

from datetime import date
from enum import Enum


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    VENUE_NOT_FOUND = "VENUE_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    VENUE_UNAVAILABLE = "VENUE_UNAVAILABLE"
    DOUBLE_BOOKING = "DOUBLE_BOOKING"
    INVALID_REQUEST = "INVALID_REQUEST"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode = ErrorCode.NOT_FOUND

    def __init__(self, message: str, code: ErrorCode = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    code = ErrorCode.NOT_FOUND


class VenueNotFoundError(NotFoundError):
    code = ErrorCode.VENUE_NOT_FOUND

    def __init__(self, venue_id: str) -> None:
        super().__init__("Venue not found")
        self.venue_id = venue_id


class BookingNotFoundError(NotFoundError):
    code = ErrorCode.BOOKING_NOT_FOUND

    def __init__(self, booking_id: str) -> None:
        super().__init__("Booking not found")
        self.booking_id = booking_id


class VenueUnavailableError(DomainError):
    """Raised when the venue is retired or the date is on its blocked calendar."""

    code = ErrorCode.VENUE_UNAVAILABLE

    def __init__(self, venue_id: str, booking_date: date) -> None:
        super().__init__("Venue is not available on the selected date")
        self.venue_id = venue_id
        self.booking_date = booking_date


class DoubleBookingError(DomainError):
    """Raised when a confirmed booking already holds the venue on that date."""

    code = ErrorCode.DOUBLE_BOOKING

    def __init__(self, venue_id: str, booking_date: date) -> None:
        super().__init__("Venue is already booked on this date")
        self.venue_id = venue_id
        self.booking_date = booking_date


class InvalidRequestError(DomainError):
    """Raised for requests that are well-formed but break a business rule."""

    code = ErrorCode.INVALID_REQUEST
