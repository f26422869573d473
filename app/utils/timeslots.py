from datetime import datetime
from typing import List, Optional

from app.core.config import settings
from app.core.errors import InvalidSlot
from app.models.reservation import Reservation, ReservationStatus


def bookable_hours() -> List[str]:
    """Hourly slots from opening to closing hour, both inclusive ("09:00" .. "21:00")."""
    return [f"{h:02d}:00" for h in range(settings.OPENING_HOUR, settings.CLOSING_HOUR + 1)]


def parse_hour(hour: str) -> int:
    """Integer hour of an "HH:MM" string; minutes are ignored."""
    try:
        return int(hour.split(":")[0])
    except (AttributeError, ValueError):
        raise InvalidSlot(f"Invalid hour '{hour}', expected HH:MM")


def slot_start(date: str, hour: str) -> datetime:
    """
    Start of a slot as a naive local datetime.

    The date contributes year/month/day and the hour contributes hour/minute
    (minute defaults to 0). No timezone conversion takes place: dates and
    hours are wall-clock values of the center.
    """
    try:
        year, month, day = (int(part) for part in date.split("-"))
    except (AttributeError, ValueError):
        raise InvalidSlot(f"Invalid date '{date}', expected YYYY-MM-DD")

    parts = hour.split(":") if isinstance(hour, str) else []
    try:
        h = int(parts[0])
        minute = int(parts[1]) if len(parts) > 1 and parts[1] else 0
        return datetime(year, month, day, h, minute)
    except (IndexError, ValueError):
        raise InvalidSlot(f"Invalid date/hour '{date} {hour}'")


def hours_overlap(hour1: str, hour2: str) -> bool:
    # Same or adjacent hours conflict
    return abs(parse_hour(hour1) - parse_hour(hour2)) <= 1


def is_past(date: str, hour: str, now: Optional[datetime] = None) -> bool:
    # Local time: dates and hours are stored as naive wall-clock values
    now = now or datetime.now()
    return slot_start(date, hour) < now


def display_status(reservation: Reservation, now: Optional[datetime] = None) -> str:
    """Stored status, or "completed" once a non-cancelled slot has passed."""
    if reservation.status == ReservationStatus.cancelled.value:
        return reservation.status
    try:
        past = is_past(reservation.date, reservation.hour, now)
    except InvalidSlot:
        return reservation.status
    return ReservationStatus.completed.value if past else reservation.status


def can_cancel(reservation: Reservation, now: Optional[datetime] = None) -> bool:
    if reservation.status == ReservationStatus.cancelled.value:
        return False
    if settings.ALLOW_PAST_CANCELLATION:
        return True
    try:
        return not is_past(reservation.date, reservation.hour, now)
    except InvalidSlot:
        return False
