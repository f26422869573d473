"""
Reservation admission - the single source of truth for booking rules.

The API endpoints call into this module; client-side checks are only a hint.
Identity is always passed in explicitly as ``user_id``.

Admission is read-then-write without isolation: two concurrent requests for
the last spot of a slot can both pass the capacity check. Setting
``ATOMIC_SLOT_ADMISSION`` makes the gateway hold a per-slot lock (PostgreSQL)
from the capacity read until the reservation is committed.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from app.core.config import settings
from app.core.errors import (
    AlreadyCancelled,
    Forbidden,
    InThePast,
    InvalidSlot,
    InvalidStatusTransition,
    MissingFields,
    NotFound,
    SlotFull,
    UserOverlap,
)
from app.models.center import Center
from app.models.reservation import ACTIVE_STATUSES, Reservation, ReservationStatus
from app.services.store import StoreGateway
from app.utils.timeslots import bookable_hours, hours_overlap, is_past, slot_start

logger = logging.getLogger(__name__)


@dataclass
class ReservationRequest:
    center_id: Optional[str]
    user_id: Optional[str]
    date: Optional[str]
    hour: Optional[str]


@dataclass
class SlotAvailability:
    hour: str
    capacity: int
    booked: int
    remaining: int
    is_past: bool


def center_capacity(center: Optional[Center]) -> int:
    if center is None or not center.capacity or center.capacity < 1:
        return settings.DEFAULT_CENTER_CAPACITY
    return center.capacity


def submit_reservation(
    store: StoreGateway,
    request: ReservationRequest,
    now: Optional[datetime] = None,
) -> Reservation:
    """
    Admit or reject a booking for one (center, date, hour) slot.

    Checks run in order and stop at the first failure:
    missing fields, malformed slot, slot already started, hour outside the
    bookable set, the user's own same/adjacent-hour bookings on that date
    (any center), and finally the slot's capacity. Nothing is written unless
    every check passes.
    """
    if not (request.center_id and request.date and request.hour and request.user_id):
        raise MissingFields()

    now = now or datetime.now()
    if slot_start(request.date, request.hour) < now:
        raise InThePast()

    if request.hour not in bookable_hours():
        raise InvalidSlot(
            f"Hour must be one of {settings.OPENING_HOUR:02d}:00 to {settings.CLOSING_HOUR:02d}:00"
        )

    center_id = str(request.center_id)
    store.lock_slot(center_id, request.date, request.hour)

    own = store.find_reservations(
        user_id=request.user_id, date=request.date, status_in=ACTIVE_STATUSES
    )
    for existing in own:
        if hours_overlap(existing.hour, request.hour):
            logger.info(
                "Rejected %s %s for user %s: overlaps %s",
                request.date, request.hour, request.user_id, existing.hour,
            )
            raise UserOverlap(existing.hour)

    taken = store.find_reservations(
        center_id=center_id,
        date=request.date,
        hour=request.hour,
        status_in=ACTIVE_STATUSES,
    )
    capacity = center_capacity(store.find_center(center_id))
    if len(taken) >= capacity:
        logger.info(
            "Rejected %s %s at center %s: %d/%d booked",
            request.date, request.hour, center_id, len(taken), capacity,
        )
        raise SlotFull()

    reservation = store.create_reservation({
        "center_id": center_id,
        "user_id": request.user_id,
        "date": request.date,
        "hour": request.hour,
        "status": ReservationStatus.pending.value,
    })
    logger.info(
        "Reservation %s created: center %s %s %s user %s",
        reservation.id, center_id, request.date, request.hour, request.user_id,
    )
    return reservation


def cancel_reservation(
    store: StoreGateway,
    reservation_id: Optional[str],
    user_id: Optional[str],
    now: Optional[datetime] = None,
) -> Reservation:
    if not reservation_id or not user_id:
        raise MissingFields("reservationId and userId are required")

    reservation = store.get_reservation(reservation_id)
    if reservation is None:
        raise NotFound()
    if reservation.user_id != user_id:
        raise Forbidden("You can only cancel your own reservations")
    if reservation.status == ReservationStatus.cancelled.value:
        raise AlreadyCancelled()
    if not settings.ALLOW_PAST_CANCELLATION and is_past(reservation.date, reservation.hour, now):
        raise InThePast("Cannot cancel a reservation that has already passed")

    store.update_reservation_status(
        reservation.id, ReservationStatus.cancelled.value, datetime.now(timezone.utc)
    )
    logger.info("Reservation %s cancelled by user %s", reservation.id, user_id)
    return reservation


def confirm_reservation(store: StoreGateway, reservation_id: Optional[str]) -> Reservation:
    """Operator approval: move a pending reservation to confirmed."""
    if not reservation_id:
        raise MissingFields("reservationId is required")

    reservation = store.get_reservation(reservation_id)
    if reservation is None:
        raise NotFound()
    if reservation.status == ReservationStatus.cancelled.value:
        raise AlreadyCancelled()
    if reservation.status != ReservationStatus.pending.value:
        raise InvalidStatusTransition(
            f"Only pending reservations can be confirmed (current status: '{reservation.status}')"
        )

    store.update_reservation_status(
        reservation.id, ReservationStatus.confirmed.value, datetime.now(timezone.utc)
    )
    logger.info("Reservation %s confirmed", reservation.id)
    return reservation


def list_user_reservations(store: StoreGateway, user_id: Optional[str]) -> List[Reservation]:
    if not user_id:
        raise MissingFields("userId is required")
    return store.find_reservations(user_id=user_id)


def list_slot_reservations(
    store: StoreGateway,
    center_id: Optional[str],
    date: Optional[str],
    hour: Optional[str],
) -> List[Reservation]:
    if not (center_id and date and hour):
        raise MissingFields("centerId, date, and hour are required")
    return store.find_reservations(
        center_id=str(center_id), date=date, hour=hour, status_in=ACTIVE_STATUSES
    )


def slot_availability(
    store: StoreGateway,
    center_id: Optional[str],
    date: Optional[str],
    now: Optional[datetime] = None,
) -> List[SlotAvailability]:
    """Capacity, bookings and remaining spots for every bookable hour of a day."""
    if not (center_id and date):
        raise MissingFields("centerId and date are required")

    center = store.find_center(center_id)
    if center is None:
        raise NotFound("Center not found")

    capacity = center_capacity(center)
    booked_by_hour = {}
    for reservation in store.find_reservations(
        center_id=center.id, date=date, status_in=ACTIVE_STATUSES
    ):
        booked_by_hour[reservation.hour] = booked_by_hour.get(reservation.hour, 0) + 1

    now = now or datetime.now()
    slots = []
    for hour in bookable_hours():
        booked = booked_by_hour.get(hour, 0)
        slots.append(SlotAvailability(
            hour=hour,
            capacity=capacity,
            booked=booked,
            remaining=max(capacity - booked, 0),
            is_past=is_past(date, hour, now),
        ))
    return slots
