"""
Booking rule violations.

Every rejection raised by the services is a ``BookingError`` carrying the
user-facing message and the HTTP status the API answers with. None of them
is fatal; the API layer turns them into ``{"success": false, "error": ...}``.
"""

from typing import Optional


class BookingError(Exception):
    status_code: int = 400
    default_message: str = "Request rejected"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFields(BookingError):
    default_message = "Missing required fields"


class InvalidSlot(BookingError):
    default_message = "Invalid date or hour"


class InThePast(BookingError):
    default_message = "Cannot book a reservation for a time that has already passed"


class UserOverlap(BookingError):
    def __init__(self, existing_hour: str):
        self.existing_hour = existing_hour
        super().__init__(
            f"You already have a reservation at {existing_hour} on this date. "
            "Reservations cannot overlap or be adjacent."
        )


class SlotFull(BookingError):
    default_message = "This time slot is already reserved"


class NotFound(BookingError):
    status_code = 404
    default_message = "Reservation not found"


class Forbidden(BookingError):
    status_code = 403
    default_message = "You can only cancel your own reservations"


class AlreadyCancelled(BookingError):
    default_message = "Reservation is already cancelled"


class InvalidStatusTransition(BookingError):
    status_code = 409
    default_message = "Only pending reservations can be confirmed"


class InvalidRating(BookingError):
    default_message = "Rating must be between 1 and 5 stars"


class DuplicateReview(BookingError):
    default_message = "You have already reviewed this reservation"


class ReservationNotFound(BookingError):
    status_code = 404
    default_message = "Reservation not found"


class StorageUnavailable(BookingError):
    status_code = 500
    default_message = "Storage unavailable"
