import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import (
    DuplicateReview,
    Forbidden,
    InvalidRating,
    MissingFields,
    ReservationNotFound,
    StorageUnavailable,
)
from app.models.center import Center
from app.models.review import Review
from app.models.user import User
from app.services.ratings import (
    ReviewRequest,
    average_rating,
    get_reservation_review,
    list_center_reviews,
    recalculate_all_ratings,
    submit_review,
)
from app.services.store import SqlStoreGateway, _storage_call


@pytest.fixture
def review_for(store, make_reservation):
    """Submit a review with the given rating on a fresh reservation of its own."""
    counter = iter(range(9, 22))

    def _review(rating, center_id="c1", user_id="u1", comment=None):
        reservation = make_reservation(
            user_id=user_id, center_id=center_id, hour=f"{next(counter):02d}:00"
        )
        return submit_review(store, ReviewRequest(
            center_id=center_id,
            reservation_id=reservation.id,
            user_id=user_id,
            rating=rating,
            comment=comment,
        ))

    return _review


def test_average_rating():
    assert average_rating([5, 3, 4]) == 4.0
    assert average_rating([]) == 0.0


def test_center_rating_is_mean_of_all_reviews(db, make_center, review_for):
    make_center("c1")

    for rating in (5, 3, 4):
        review_for(rating)
    center = db.get(Center, "c1")
    db.refresh(center)
    assert (center.rating, center.review_count) == (4.0, 3)

    review, average = review_for(2)
    assert average == 3.5
    db.refresh(center)
    assert (center.rating, center.review_count) == (3.5, 4)
    assert review.comment == ""


def test_rating_is_stored_unrounded(db, make_center, review_for):
    make_center("c1")
    for rating in (5, 4, 4):
        review_for(rating)
    center = db.get(Center, "c1")
    db.refresh(center)
    assert center.rating == pytest.approx(13 / 3)


def test_second_review_of_a_reservation_is_rejected(store, make_center, make_reservation):
    make_center("c1")
    reservation = make_reservation(user_id="u1")
    request = ReviewRequest(
        center_id="c1", reservation_id=reservation.id, user_id="u1", rating=5, comment="Great"
    )

    review, _ = submit_review(store, request)
    assert review.comment == "Great"

    with pytest.raises(DuplicateReview):
        submit_review(store, request)


@pytest.mark.parametrize("rating", [0, 6, -1, 4.5])
def test_rating_must_be_whole_number_between_one_and_five(store, make_reservation, rating):
    reservation = make_reservation(user_id="u1")
    with pytest.raises(InvalidRating):
        submit_review(store, ReviewRequest(
            center_id="c1", reservation_id=reservation.id, user_id="u1", rating=rating
        ))


def test_missing_fields(store):
    with pytest.raises(MissingFields):
        submit_review(store, ReviewRequest(
            center_id="c1", reservation_id="r1", user_id="u1", rating=None
        ))
    with pytest.raises(MissingFields):
        submit_review(store, ReviewRequest(
            center_id="", reservation_id="r1", user_id="u1", rating=3
        ))


def test_review_requires_an_existing_own_reservation(store, db, make_reservation):
    with pytest.raises(ReservationNotFound):
        submit_review(store, ReviewRequest(
            center_id="c1", reservation_id="missing", user_id="u1", rating=4
        ))

    reservation = make_reservation(user_id="u1")
    with pytest.raises(Forbidden):
        submit_review(store, ReviewRequest(
            center_id="c1", reservation_id=reservation.id, user_id="u2", rating=4
        ))
    assert db.query(Review).count() == 0


def test_recalculate_all_ratings_is_idempotent(db, store, make_center):
    make_center("c1")
    make_center("c2")
    make_center("c3")
    for i, (center_id, rating) in enumerate([("c1", 5), ("c1", 2), ("c2", 4)]):
        db.add(Review(center_id=center_id, reservation_id=f"r{i}", user_id="u1", rating=rating))
    # Stale aggregates to repair
    db.get(Center, "c1").rating = 1.0
    db.commit()

    first = recalculate_all_ratings(store)
    snapshot = {c.id: (c.rating, c.review_count) for c in db.query(Center).all()}
    second = recalculate_all_ratings(store)
    db.expire_all()

    assert first == second == {"c1": (3.5, 2), "c2": (4.0, 1)}
    assert {c.id: (c.rating, c.review_count) for c in db.query(Center).all()} == snapshot
    assert snapshot["c3"] == (0.0, 0)


def test_recalculate_skips_reviews_of_unknown_centers(db, store, make_center):
    make_center("c1")
    db.add(Review(center_id="c1", reservation_id="r1", user_id="u1", rating=4))
    db.add(Review(center_id="gone", reservation_id="r2", user_id="u1", rating=1))
    db.commit()

    assert recalculate_all_ratings(store) == {"c1": (4.0, 1)}


def test_list_center_reviews_with_user_names(db, store, make_center, review_for):
    make_center("c1")
    db.add(User(id="u1", username="ana"))
    db.add(User(id="u2", email="bob@example.com"))
    db.commit()
    review_for(5, user_id="u1")
    review_for(3, user_id="u2")
    review_for(4, user_id="u3")

    plain = list_center_reviews(store, "c1")
    assert all("user_name" not in item for item in plain)

    named = {item["user_id"]: item["user_name"] for item in list_center_reviews(store, "c1", True)}
    assert named == {"u1": "ana", "u2": "bob@example.com", "u3": "Unknown User"}

    with pytest.raises(MissingFields):
        list_center_reviews(store, "")


def test_get_reservation_review(store, make_center, review_for):
    make_center("c1")
    review, _ = review_for(4)

    assert get_reservation_review(store, review.reservation_id).id == review.id
    with pytest.raises(ReservationNotFound):
        get_reservation_review(store, "missing")


class FailingRescanStore(SqlStoreGateway):
    @_storage_call
    def find_reviews(self, center_id=None, reservation_id=None):
        if center_id is not None:
            raise OperationalError("SELECT", {}, Exception("connection reset"))
        return super().find_reviews(center_id=center_id, reservation_id=reservation_id)


def test_failed_rating_refresh_leaves_no_review_behind(db, make_center, make_reservation):
    make_center("c1")
    reservation = make_reservation(user_id="u1")
    request = ReviewRequest(center_id="c1", reservation_id=reservation.id, user_id="u1", rating=5)

    with pytest.raises(StorageUnavailable):
        submit_review(FailingRescanStore(db), request)

    assert db.query(Review).count() == 0
    center = db.get(Center, "c1")
    db.refresh(center)
    assert (center.rating, center.review_count) == (0.0, 0)

    # A retry on a healthy store goes through
    _, average = submit_review(SqlStoreGateway(db), request)
    assert average == 5.0


def test_unique_reservation_constraint_reports_duplicate_review(db, store, make_reservation):
    reservation = make_reservation(user_id="u1")
    db.add(Review(center_id="c1", reservation_id=reservation.id, user_id="u1", rating=3))
    db.commit()

    with pytest.raises(DuplicateReview):
        store.create_review({
            "center_id": "c1", "reservation_id": reservation.id, "user_id": "u1", "rating": 4,
        })
    assert db.query(Review).count() == 1
