from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel, UniqueConstraint

from shared.enum.watch_status import WatchStatus


class WatchlistItem(SQLModel, table=True):
    """An anime on the user's watchlist, with its watch state"""

    __tablename__ = "watchlist"  # type: ignore
    __table_args__ = (
        UniqueConstraint("user_id", "anime_id", name="uq_watchlist_user_anime"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="users.id")
    anime_id: str = Field(index=True)
    title: str
    poster: Optional[str] = Field(default=None)
    status: str = Field(default=WatchStatus.PLAN_TO_WATCH.value, index=True)
    added_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column_kwargs={"onupdate": lambda: datetime.now(timezone.utc)},
    )
