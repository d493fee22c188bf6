from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel, UniqueConstraint


class AnimeReview(SQLModel, table=True):
    """One user's rating and optional write-up for one anime."""

    __tablename__ = "anime_reviews"  # type: ignore
    __table_args__ = (
        UniqueConstraint("user_id", "anime_id", name="uq_anime_review_user_anime"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="users.id")
    anime_id: str = Field(index=True, description="External catalog id")

    # Copied at creation time, never synced with the catalog
    anime_title: str = Field(description="Anime title")

    rating: int = Field(description="1-10")
    review_text: Optional[str] = Field(default=None)
    spoiler_warning: bool = Field(default=False)

    # Cache of count(review_votes.helpful = true), rewritten after every vote
    helpful_count: int = Field(default=0, index=True)
    reported: bool = Field(default=False, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
