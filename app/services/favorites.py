"""Favorite centers - a plain (user, center) membership set."""

from typing import List, Optional

from app.core.errors import MissingFields
from app.services.store import StoreGateway


def _require(user_id: Optional[str], center_id: Optional[str]) -> None:
    if not user_id or not center_id:
        raise MissingFields("userId and centerId are required")


def add_favorite(store: StoreGateway, user_id: Optional[str], center_id: Optional[str]) -> None:
    _require(user_id, center_id)
    store.add_favorite(user_id, str(center_id))


def remove_favorite(store: StoreGateway, user_id: Optional[str], center_id: Optional[str]) -> None:
    _require(user_id, center_id)
    store.remove_favorite(user_id, str(center_id))


def is_favorite(store: StoreGateway, user_id: Optional[str], center_id: Optional[str]) -> bool:
    _require(user_id, center_id)
    return store.is_favorite(user_id, str(center_id))


def list_favorites(store: StoreGateway, user_id: Optional[str]) -> List[str]:
    if not user_id:
        raise MissingFields("userId is required")
    return [favorite.center_id for favorite in store.find_favorites(user_id)]
