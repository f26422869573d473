from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_store
from app.services import favorites as favorite_service
from app.services.store import StoreGateway
from app.schemas.common import ActionResponse
from app.schemas.favorite import FavoriteRequest, FavoriteStatus

router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.get("/", response_model=List[str])
def list_favorites(
    user_id: Optional[str] = Query(None, alias="userId"),
    store: StoreGateway = Depends(get_store),
):
    """Center ids the user has marked as favorite."""
    return favorite_service.list_favorites(store, user_id)


@router.get("/check", response_model=FavoriteStatus)
def check_favorite(
    user_id: Optional[str] = Query(None, alias="userId"),
    center_id: Optional[str] = Query(None, alias="centerId"),
    store: StoreGateway = Depends(get_store),
):
    is_favorite = favorite_service.is_favorite(store, user_id, center_id)
    return FavoriteStatus(center_id=center_id, is_favorite=is_favorite)


@router.post("/", response_model=ActionResponse)
def add_favorite(data: FavoriteRequest, store: StoreGateway = Depends(get_store)):
    favorite_service.add_favorite(store, data.user_id, data.center_id)
    return ActionResponse(success=True, message="Added to favorites")


@router.delete("/", response_model=ActionResponse)
def remove_favorite(
    user_id: Optional[str] = Query(None, alias="userId"),
    center_id: Optional[str] = Query(None, alias="centerId"),
    store: StoreGateway = Depends(get_store),
):
    favorite_service.remove_favorite(store, user_id, center_id)
    return ActionResponse(success=True, message="Removed from favorites")
