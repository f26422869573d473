from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from app.api.deps import get_store
from app.core.errors import StorageUnavailable
from app.services import centers as center_service
from app.services import reservations as reservation_service
from app.services.store import StoreGateway
from app.schemas.center import Center as CenterSchema, SlotAvailability

router = APIRouter(prefix="/centers", tags=["Centers"])


@router.get(
    "/",
    response_model=List[CenterSchema],
    responses={500: {"content": {"text/plain": {}}, "description": "Storage unavailable"}},
)
def list_centers(
    search: Optional[str] = Query(None, description="Match on name, category or address"),
    store: StoreGateway = Depends(get_store),
):
    # The catalogue fails with a plain text body, not the JSON error envelope
    try:
        return center_service.list_centers(store, search)
    except StorageUnavailable as exc:
        return PlainTextResponse(exc.message, status_code=exc.status_code)


@router.get("/{center_id}", response_model=CenterSchema)
def get_center(center_id: str, store: StoreGateway = Depends(get_store)):
    return center_service.get_center(store, center_id)


@router.get("/{center_id}/availability", response_model=List[SlotAvailability])
def get_availability(
    center_id: str,
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    store: StoreGateway = Depends(get_store),
):
    """Capacity, booked count and remaining spots for every bookable hour of `date`."""
    return [
        SlotAvailability(
            hour=slot.hour,
            capacity=slot.capacity,
            booked=slot.booked,
            remaining=slot.remaining,
            is_past=slot.is_past,
        )
        for slot in reservation_service.slot_availability(store, center_id, date)
    ]
