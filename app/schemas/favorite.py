from typing import Optional, Union

from pydantic import field_validator

from app.schemas.common import CamelModel, id_to_str


class FavoriteRequest(CamelModel):
    user_id: Optional[str] = None
    center_id: Optional[Union[str, int]] = None

    @field_validator("center_id", mode="before")
    @classmethod
    def center_id_as_str(cls, v):
        return id_to_str(v)


class FavoriteStatus(CamelModel):
    center_id: str
    is_favorite: bool
