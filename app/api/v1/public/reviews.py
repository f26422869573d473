from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_store
from app.services import ratings as rating_service
from app.services.ratings import ReviewRequest
from app.services.store import StoreGateway
from app.schemas.review import ReviewCreate, ReviewCreated, Review as ReviewSchema

router = APIRouter(prefix="/reviews", tags=["Reviews"])


@router.post("/", response_model=ReviewCreated)
def submit_review(data: ReviewCreate, store: StoreGateway = Depends(get_store)):
    """
    Submit a star rating + optional comment for a finished reservation.

    Rules:
    - Rating must be a whole number 1–5.
    - One review per reservation.
    - Only the reservation's owner can review it.
    - Recomputes the center's `rating` and `reviewCount` from all its reviews.
    """
    review, average = rating_service.submit_review(
        store,
        ReviewRequest(
            center_id=data.center_id,
            reservation_id=data.reservation_id,
            user_id=data.user_id,
            rating=data.rating,
            comment=data.comment,
        ),
    )
    return ReviewCreated(success=True, id=review.id, average_rating=average)


@router.get("/", response_model=List[ReviewSchema])
def list_reviews(
    center_id: Optional[str] = Query(None, alias="centerId"),
    include_user_names: bool = Query(False, alias="includeUserNames"),
    store: StoreGateway = Depends(get_store),
):
    """Return a center's reviews, newest first. No authentication required."""
    return rating_service.list_center_reviews(store, center_id, include_user_names)


@router.get("/reservation/{reservation_id}", response_model=ReviewSchema)
def get_reservation_review(reservation_id: str, store: StoreGateway = Depends(get_store)):
    return rating_service.get_reservation_review(store, reservation_id)
