from app.schemas.common import CamelModel, ErrorResponse, ActionResponse
from app.schemas.center import Center, SlotAvailability
from app.schemas.reservation import (
    Reservation, ReservationCreate, ReservationCancel, ReservationCreated,
)
from app.schemas.review import Review, ReviewCreate, ReviewCreated, RecalculateResponse
from app.schemas.favorite import FavoriteRequest, FavoriteStatus
