from typing import Optional

from app.schemas.common import CamelModel


class Center(CamelModel):
    id: str
    name: str
    category: Optional[str] = None
    address: Optional[str] = None
    capacity: Optional[int] = None
    rating: float = 0.0
    review_count: int = 0


# One hourly slot of a day (GET /centers/{id}/availability)
class SlotAvailability(CamelModel):
    hour: str
    capacity: int
    booked: int
    remaining: int
    is_past: bool
