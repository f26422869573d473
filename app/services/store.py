"""
Store gateway - read/write primitives the booking rules run against.

``StoreGateway`` is the contract the services depend on. ``SqlStoreGateway``
implements it on a SQLAlchemy session; every database failure surfaces as
``StorageUnavailable`` after the session is rolled back, so a failed read
never leaves a half-applied write behind. No retries happen here.
"""

import abc
import functools
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateReview, StorageUnavailable
from app.models.center import Center
from app.models.favorite import Favorite, favorite_key
from app.models.reservation import Reservation
from app.models.review import Review
from app.models.user import User

logger = logging.getLogger(__name__)


class StoreGateway(abc.ABC):

    # --- reservations ---

    @abc.abstractmethod
    def find_reservations(
        self,
        user_id: Optional[str] = None,
        center_id: Optional[str] = None,
        date: Optional[str] = None,
        hour: Optional[str] = None,
        status_in: Optional[Sequence[str]] = None,
    ) -> List[Reservation]: ...

    @abc.abstractmethod
    def get_reservation(self, reservation_id: str) -> Optional[Reservation]: ...

    @abc.abstractmethod
    def create_reservation(self, data: dict) -> Reservation: ...

    @abc.abstractmethod
    def update_reservation_status(
        self, reservation_id: str, status: str, timestamp: datetime
    ) -> None: ...

    def lock_slot(self, center_id: str, date: str, hour: str) -> None:
        """Serialise admissions for one slot until the next write commits."""

    # --- centers ---

    @abc.abstractmethod
    def list_centers(self) -> List[Center]: ...

    @abc.abstractmethod
    def find_center(self, center_id: str) -> Optional[Center]: ...

    @abc.abstractmethod
    def update_center_rating(
        self, center_id: str, rating: float, count: int, commit: bool = True
    ) -> bool: ...

    # --- reviews ---

    @abc.abstractmethod
    def find_reviews(
        self, center_id: Optional[str] = None, reservation_id: Optional[str] = None
    ) -> List[Review]: ...

    @abc.abstractmethod
    def create_review(self, data: dict, commit: bool = True) -> Review:
        """Insert a review; raises DuplicateReview if its reservation already has one."""

    @abc.abstractmethod
    def commit(self) -> None:
        """Commit writes made with ``commit=False``."""

    # --- users ---

    @abc.abstractmethod
    def find_users(self, user_ids: Iterable[str]) -> List[User]: ...

    # --- favorites ---

    @abc.abstractmethod
    def add_favorite(self, user_id: str, center_id: str) -> None: ...

    @abc.abstractmethod
    def remove_favorite(self, user_id: str, center_id: str) -> None: ...

    @abc.abstractmethod
    def is_favorite(self, user_id: str, center_id: str) -> bool: ...

    @abc.abstractmethod
    def find_favorites(self, user_id: str) -> List[Favorite]: ...


def _storage_call(func):
    """Roll back and re-raise database errors as StorageUnavailable."""

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Storage call %s failed: %s", func.__name__, exc)
            raise StorageUnavailable(f"Storage unavailable: {exc}") from exc

    return wrapper


class SqlStoreGateway(StoreGateway):
    def __init__(self, db: Session, atomic_slots: bool = False):
        self.db = db
        self.atomic_slots = atomic_slots

    # --- reservations ---

    @_storage_call
    def find_reservations(
        self,
        user_id: Optional[str] = None,
        center_id: Optional[str] = None,
        date: Optional[str] = None,
        hour: Optional[str] = None,
        status_in: Optional[Sequence[str]] = None,
    ) -> List[Reservation]:
        query = self.db.query(Reservation)
        if user_id is not None:
            query = query.filter(Reservation.user_id == user_id)
        if center_id is not None:
            query = query.filter(Reservation.center_id == str(center_id))
        if date is not None:
            query = query.filter(Reservation.date == date)
        if hour is not None:
            query = query.filter(Reservation.hour == hour)
        if status_in is not None:
            query = query.filter(Reservation.status.in_(list(status_in)))
        return query.order_by(Reservation.date, Reservation.hour).all()

    @_storage_call
    def get_reservation(self, reservation_id: str) -> Optional[Reservation]:
        return self.db.query(Reservation).filter(Reservation.id == reservation_id).first()

    @_storage_call
    def create_reservation(self, data: dict) -> Reservation:
        reservation = Reservation(**data)
        self.db.add(reservation)
        self.db.commit()
        self.db.refresh(reservation)
        return reservation

    @_storage_call
    def update_reservation_status(
        self, reservation_id: str, status: str, timestamp: datetime
    ) -> None:
        values = {"status": status}
        if status == "cancelled":
            values["cancelled_at"] = timestamp
        elif status == "confirmed":
            values["confirmed_at"] = timestamp
        self.db.query(Reservation).filter(Reservation.id == reservation_id).update(
            values, synchronize_session="fetch"
        )
        self.db.commit()

    @_storage_call
    def lock_slot(self, center_id: str, date: str, hour: str) -> None:
        if not self.atomic_slots or self.db.get_bind().dialect.name != "postgresql":
            return
        # Held until the transaction that writes the reservation commits
        self.db.execute(
            text("SELECT pg_advisory_xact_lock(hashtext(:key))"),
            {"key": f"{center_id}|{date}|{hour}"},
        )

    # --- centers ---

    @_storage_call
    def list_centers(self) -> List[Center]:
        return self.db.query(Center).order_by(Center.name).all()

    @_storage_call
    def find_center(self, center_id: str) -> Optional[Center]:
        return self.db.query(Center).filter(Center.id == str(center_id)).first()

    @_storage_call
    def update_center_rating(
        self, center_id: str, rating: float, count: int, commit: bool = True
    ) -> bool:
        updated = self.db.query(Center).filter(Center.id == str(center_id)).update(
            {"rating": rating, "review_count": count}, synchronize_session="fetch"
        )
        if commit:
            self.db.commit()
        return updated > 0

    # --- reviews ---

    @_storage_call
    def find_reviews(
        self, center_id: Optional[str] = None, reservation_id: Optional[str] = None
    ) -> List[Review]:
        query = self.db.query(Review)
        if center_id is not None:
            query = query.filter(Review.center_id == str(center_id))
        if reservation_id is not None:
            query = query.filter(Review.reservation_id == reservation_id)
        return query.order_by(Review.created_at.desc()).all()

    @_storage_call
    def create_review(self, data: dict, commit: bool = True) -> Review:
        review = Review(**data)
        self.db.add(review)
        try:
            self.db.flush()
        except IntegrityError:
            # Unique reservation_id: a concurrent review got there first
            self.db.rollback()
            raise DuplicateReview()
        if commit:
            self.db.commit()
            self.db.refresh(review)
        return review

    @_storage_call
    def commit(self) -> None:
        self.db.commit()

    # --- users ---

    @_storage_call
    def find_users(self, user_ids: Iterable[str]) -> List[User]:
        ids = list(set(user_ids))
        if not ids:
            return []
        return self.db.query(User).filter(User.id.in_(ids)).all()

    # --- favorites ---

    @_storage_call
    def add_favorite(self, user_id: str, center_id: str) -> None:
        key = favorite_key(user_id, center_id)
        if self.db.query(Favorite).filter(Favorite.id == key).first():
            return
        self.db.add(Favorite(id=key, user_id=user_id, center_id=str(center_id)))
        self.db.commit()

    @_storage_call
    def remove_favorite(self, user_id: str, center_id: str) -> None:
        self.db.query(Favorite).filter(
            Favorite.id == favorite_key(user_id, center_id)
        ).delete(synchronize_session="fetch")
        self.db.commit()

    @_storage_call
    def is_favorite(self, user_id: str, center_id: str) -> bool:
        key = favorite_key(user_id, center_id)
        return self.db.query(Favorite).filter(Favorite.id == key).first() is not None

    @_storage_call
    def find_favorites(self, user_id: str) -> List[Favorite]:
        return (
            self.db.query(Favorite)
            .filter(Favorite.user_id == user_id)
            .order_by(Favorite.created_at)
            .all()
        )
