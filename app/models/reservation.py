import enum
from sqlalchemy import Column, String, DateTime, func, Index
from app.db.session import Base
from app.models.center import new_id


class ReservationStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    # Display-only: computed from the slot time, never stored
    completed = "completed"


ACTIVE_STATUSES = (ReservationStatus.pending.value, ReservationStatus.confirmed.value)


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(String(64), primary_key=True, default=new_id)
    center_id = Column(String(64), nullable=False)
    user_id = Column(String(128), nullable=False, index=True)
    date = Column(String(10), nullable=False) # YYYY-MM-DD
    hour = Column(String(5), nullable=False) # HH:MM
    status = Column(String(20), nullable=False, default=ReservationStatus.pending.value, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_reservations_slot", "center_id", "date", "hour"),
        Index("ix_reservations_user_date", "user_id", "date"),
    )
