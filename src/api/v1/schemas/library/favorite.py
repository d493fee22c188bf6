from datetime import datetime
from typing import List, Optional

from api.v1.schemas.base import CamelModel, Pagination


class FavoriteCreateRequest(CamelModel):
    anime_id: str
    title: str
    poster: Optional[str] = None


class FavoriteDetail(CamelModel):
    id: int
    anime_id: str
    title: str
    poster: Optional[str] = None
    added_at: datetime


class FavoritePage(CamelModel):
    favorites: List[FavoriteDetail]
    pagination: Pagination


class FavoriteStatus(CamelModel):
    favorited: bool
