from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.services import reservations as reservation_service
from app.services.store import StoreGateway
from app.schemas.common import ActionResponse

router = APIRouter(prefix="/reservations", tags=["Admin - Reservations"])


@router.post("/{reservation_id}/confirm", response_model=ActionResponse)
def confirm_reservation(reservation_id: str, store: StoreGateway = Depends(get_store)):
    """Center operator approval of a pending reservation."""
    reservation_service.confirm_reservation(store, reservation_id)
    return ActionResponse(success=True, message="Reservation confirmed")
