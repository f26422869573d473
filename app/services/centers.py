from typing import List, Optional

from app.core.errors import NotFound
from app.models.center import Center
from app.services.store import StoreGateway


def list_centers(store: StoreGateway, search: Optional[str] = None) -> List[Center]:
    """All centers, optionally filtered by a case-insensitive term on name, category or address."""
    centers = store.list_centers()
    if not search:
        return centers

    term = search.lower()
    return [
        center for center in centers
        if any(term in (value or "").lower() for value in (center.name, center.category, center.address))
    ]


def get_center(store: StoreGateway, center_id: str) -> Center:
    center = store.find_center(center_id)
    if center is None:
        raise NotFound("Center not found")
    return center
