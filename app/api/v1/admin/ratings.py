from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.services import ratings as rating_service
from app.services.store import StoreGateway
from app.schemas.review import RecalculateResponse

router = APIRouter(prefix="/reviews", tags=["Admin - Ratings"])


@router.post("/recalculate", response_model=RecalculateResponse)
def recalculate_ratings(store: StoreGateway = Depends(get_store)):
    """Rebuild every center's rating and review count from the full review set."""
    updated = rating_service.recalculate_all_ratings(store)
    return RecalculateResponse(
        success=True,
        message=f"Updated ratings for {len(updated)} centers",
        centers_updated=len(updated),
    )
