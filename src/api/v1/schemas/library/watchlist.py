from datetime import datetime
from typing import List, Optional

from api.v1.schemas.base import CamelModel, Pagination
from shared.enum.watch_status import WatchStatus


class WatchlistCreateRequest(CamelModel):
    anime_id: str
    title: str
    poster: Optional[str] = None
    status: WatchStatus = WatchStatus.PLAN_TO_WATCH


class WatchlistUpdateRequest(CamelModel):
    status: WatchStatus


class WatchlistItemDetail(CamelModel):
    id: int
    anime_id: str
    title: str
    poster: Optional[str] = None
    status: WatchStatus
    added_at: datetime
    updated_at: datetime


class WatchlistPage(CamelModel):
    items: List[WatchlistItemDetail]
    pagination: Pagination
