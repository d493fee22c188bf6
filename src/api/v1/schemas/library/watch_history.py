from datetime import datetime
from typing import List

from pydantic import Field

from api.v1.schemas.base import CamelModel, Pagination


class WatchProgressRequest(CamelModel):
    anime_id: str
    episode_id: str
    episode_number: int = Field(ge=0)
    progress: int = Field(0, ge=0, description="Playback position in seconds")
    completed: bool = False


class WatchHistoryDetail(CamelModel):
    id: int
    anime_id: str
    episode_id: str
    episode_number: int
    progress: int
    completed: bool
    watched_at: datetime


class WatchHistoryPage(CamelModel):
    history: List[WatchHistoryDetail]
    pagination: Pagination


class HistoryClearResponse(CamelModel):
    message: str = "Watch history cleared"
    deleted: int
