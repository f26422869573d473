from typing import Optional, Union
from datetime import datetime

from pydantic import field_validator

from app.schemas.common import CamelModel, id_to_str


class ReviewCreate(CamelModel):
    center_id: Optional[Union[str, int]] = None
    reservation_id: Optional[str] = None
    user_id: Optional[str] = None
    rating: Optional[float] = None
    comment: Optional[str] = None

    @field_validator("center_id", mode="before")
    @classmethod
    def center_id_as_str(cls, v):
        return id_to_str(v)


class Review(CamelModel):
    id: str
    center_id: str
    reservation_id: str
    user_id: str
    rating: int
    comment: str = ""
    created_at: Optional[datetime] = None
    user_name: Optional[str] = None


class ReviewCreated(CamelModel):
    success: bool = True
    id: str
    average_rating: float


class RecalculateResponse(CamelModel):
    success: bool = True
    message: str
    centers_updated: int
