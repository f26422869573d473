from typing import Optional, Union
from datetime import datetime

from pydantic import field_validator

from app.schemas.common import CamelModel, id_to_str


# Reservation — Create (POST /reservations)
class ReservationCreate(CamelModel):
    center_id: Optional[Union[str, int]] = None
    date: Optional[str] = None
    hour: Optional[str] = None
    user_id: Optional[str] = None
    # Accepted for compatibility; new reservations always start as pending
    status: Optional[str] = None

    @field_validator("center_id", mode="before")
    @classmethod
    def center_id_as_str(cls, v):
        return id_to_str(v)


# Reservation — Cancel (POST|PUT /reservations/cancel)
class ReservationCancel(CamelModel):
    reservation_id: Optional[str] = None
    user_id: Optional[str] = None


class Reservation(CamelModel):
    id: str
    center_id: str
    user_id: str
    date: str
    hour: str
    status: str
    display_status: str
    can_cancel: bool
    created_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None


# Reservation — Create response: {success, id, ...reservation}
class ReservationCreated(Reservation):
    success: bool = True
