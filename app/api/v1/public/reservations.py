import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_store
from app.models.reservation import Reservation
from app.services import reservations as reservation_service
from app.services.reservations import ReservationRequest
from app.services.store import StoreGateway
from app.schemas.common import ActionResponse
from app.schemas.reservation import (
    ReservationCreate,
    ReservationCancel,
    ReservationCreated,
    Reservation as ReservationSchema,
)
from app.utils.timeslots import can_cancel, display_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reservations", tags=["Reservations"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def serialize_reservation(
    reservation: Reservation, now: Optional[datetime] = None
) -> ReservationSchema:
    """Attach the computed display status and cancel flag to a stored reservation."""
    now = now or datetime.now()
    return ReservationSchema(
        id=reservation.id,
        center_id=reservation.center_id,
        user_id=reservation.user_id,
        date=reservation.date,
        hour=reservation.hour,
        status=reservation.status,
        display_status=display_status(reservation, now),
        can_cancel=can_cancel(reservation, now),
        created_at=reservation.created_at,
        confirmed_at=reservation.confirmed_at,
        cancelled_at=reservation.cancelled_at,
    )


# ---------------------------------------------------------------------------
# POST /reservations — admit a new reservation
# ---------------------------------------------------------------------------


@router.post("/", response_model=ReservationCreated)
def create_reservation(data: ReservationCreate, store: StoreGateway = Depends(get_store)):
    """
    Book one hourly slot at a center.

    Rejected when fields are missing, the slot has already started, the user
    holds a booking at the same or an adjacent hour that day, or the slot is
    at the center's capacity. New reservations are always `pending`.
    """
    if data.status and data.status != "pending":
        logger.debug("Ignoring requested status %r on new reservation", data.status)

    reservation = reservation_service.submit_reservation(
        store,
        ReservationRequest(
            center_id=data.center_id,
            user_id=data.user_id,
            date=data.date,
            hour=data.hour,
        ),
    )
    return ReservationCreated(
        success=True,
        **serialize_reservation(reservation).model_dump(),
    )


# ---------------------------------------------------------------------------
# GET /reservations — a user's reservations
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[ReservationSchema])
def list_user_reservations(
    user_id: Optional[str] = Query(None, alias="userId"),
    store: StoreGateway = Depends(get_store),
):
    now = datetime.now()
    return [
        serialize_reservation(r, now)
        for r in reservation_service.list_user_reservations(store, user_id)
    ]


# ---------------------------------------------------------------------------
# GET /reservations/slot — active reservations of one slot
# ---------------------------------------------------------------------------


@router.get("/slot", response_model=List[ReservationSchema])
def list_slot_reservations(
    center_id: Optional[str] = Query(None, alias="centerId"),
    date: Optional[str] = Query(None),
    hour: Optional[str] = Query(None),
    store: StoreGateway = Depends(get_store),
):
    now = datetime.now()
    return [
        serialize_reservation(r, now)
        for r in reservation_service.list_slot_reservations(store, center_id, date, hour)
    ]


# ---------------------------------------------------------------------------
# POST|PUT /reservations/cancel
# ---------------------------------------------------------------------------


@router.api_route("/cancel", methods=["POST", "PUT"], response_model=ActionResponse)
def cancel_reservation(data: ReservationCancel, store: StoreGateway = Depends(get_store)):
    """Cancel one of the caller's own reservations while its slot is still ahead."""
    reservation_service.cancel_reservation(store, data.reservation_id, data.user_id)
    return ActionResponse(success=True, message="Reservation cancelled successfully")
