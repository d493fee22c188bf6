from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel, UniqueConstraint


class WatchHistory(SQLModel, table=True):
    """Playback progress of one episode for one user"""

    __tablename__ = "watch_history"  # type: ignore
    __table_args__ = (
        UniqueConstraint(
            "user_id", "anime_id", "episode_id", name="uq_watch_history_episode"
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="users.id")
    anime_id: str = Field(index=True)
    episode_id: str
    episode_number: int
    progress: int = Field(default=0, description="Playback position in seconds")
    completed: bool = Field(default=False)
    watched_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )
