"""
Reviews and center rating aggregation.

A center's ``rating`` is the unrounded mean of every review it has and
``review_count`` the number of those reviews. Both are recomputed from the
full review set on each new review rather than maintained incrementally.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from app.core.errors import (
    DuplicateReview,
    Forbidden,
    InvalidRating,
    MissingFields,
    ReservationNotFound,
)
from app.models.review import Review
from app.services.store import StoreGateway

logger = logging.getLogger(__name__)

UNKNOWN_USER = "Unknown User"


@dataclass
class ReviewRequest:
    center_id: Optional[str]
    reservation_id: Optional[str]
    user_id: Optional[str]
    rating: Optional[Union[int, float]]
    comment: Optional[str] = None


def average_rating(ratings: Sequence[int]) -> float:
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


def _validated_rating(rating: Union[int, float]) -> int:
    if isinstance(rating, bool) or not float(rating).is_integer():
        raise InvalidRating()
    value = int(rating)
    if value < 1 or value > 5:
        raise InvalidRating()
    return value


def refresh_center_rating(
    store: StoreGateway, center_id: str, commit: bool = True
) -> Tuple[float, int]:
    ratings = [review.rating for review in store.find_reviews(center_id=center_id)]
    rating, count = average_rating(ratings), len(ratings)
    if not store.update_center_rating(center_id, rating, count, commit=commit):
        logger.warning("Center %s not found, rating %.2f not stored", center_id, rating)
    return rating, count


def submit_review(store: StoreGateway, request: ReviewRequest) -> Tuple[Review, float]:
    """
    Store a review for a reservation and refresh the center's rating.

    Returns the stored review and the center's new average rating.
    """
    if not (request.center_id and request.reservation_id and request.user_id) \
            or request.rating is None:
        raise MissingFields()

    rating = _validated_rating(request.rating)

    if store.find_reviews(reservation_id=request.reservation_id):
        raise DuplicateReview()

    reservation = store.get_reservation(request.reservation_id)
    if reservation is None:
        raise ReservationNotFound()
    if reservation.user_id != request.user_id:
        raise Forbidden("You can only review your own reservations")

    # Review row and center aggregate commit together or not at all
    center_id = str(request.center_id)
    review = store.create_review({
        "center_id": center_id,
        "reservation_id": request.reservation_id,
        "user_id": request.user_id,
        "rating": rating,
        "comment": request.comment or "",
    }, commit=False)

    average, count = refresh_center_rating(store, center_id, commit=False)
    store.commit()
    logger.info(
        "Review %s stored; center %s now %.2f over %d review(s)",
        review.id, center_id, average, count,
    )
    return review, average


def recalculate_all_ratings(store: StoreGateway) -> Dict[str, Tuple[float, int]]:
    """
    Rebuild rating and review count of every reviewed center in one pass.

    Returns ``{center_id: (rating, count)}`` for the centers that were
    actually updated. Running it again over the same reviews writes the same
    values.
    """
    ratings_by_center: Dict[str, List[int]] = defaultdict(list)
    for review in store.find_reviews():
        ratings_by_center[str(review.center_id)].append(review.rating)

    logger.info("Recalculating ratings for %d center(s)", len(ratings_by_center))

    updated = {}
    for center_id, ratings in ratings_by_center.items():
        rating = average_rating(ratings)
        if store.update_center_rating(center_id, rating, len(ratings)):
            updated[center_id] = (rating, len(ratings))
        else:
            logger.warning("Skipping ratings of unknown center %s", center_id)
    return updated


def list_center_reviews(
    store: StoreGateway,
    center_id: Optional[str],
    include_user_names: bool = False,
) -> List[dict]:
    if not center_id:
        raise MissingFields("centerId is required")

    reviews = store.find_reviews(center_id=str(center_id))
    names = {}
    if include_user_names:
        for user in store.find_users(review.user_id for review in reviews):
            names[user.id] = user.username or user.email or UNKNOWN_USER

    result = []
    for review in reviews:
        item = {
            "id": review.id,
            "center_id": review.center_id,
            "reservation_id": review.reservation_id,
            "user_id": review.user_id,
            "rating": review.rating,
            "comment": review.comment,
            "created_at": review.created_at,
        }
        if include_user_names:
            item["user_name"] = names.get(review.user_id, UNKNOWN_USER)
        result.append(item)
    return result


def get_reservation_review(store: StoreGateway, reservation_id: str) -> Review:
    reviews = store.find_reviews(reservation_id=reservation_id)
    if not reviews:
        raise ReservationNotFound("No review for this reservation")
    return reviews[0]
