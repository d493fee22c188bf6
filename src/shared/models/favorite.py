from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel, UniqueConstraint


class Favorite(SQLModel, table=True):
    """An anime the user marked as favorite"""

    __tablename__ = "favorites"  # type: ignore
    __table_args__ = (
        UniqueConstraint("user_id", "anime_id", name="uq_favorite_user_anime"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="users.id")
    anime_id: str = Field(index=True)
    title: str
    poster: Optional[str] = Field(default=None, description="Poster image URL")
    added_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
