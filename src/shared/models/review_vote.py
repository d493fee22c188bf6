from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel, UniqueConstraint


class ReviewVote(SQLModel, table=True):
    """A user's helpful / not helpful judgement on a review."""

    __tablename__ = "review_votes"  # type: ignore
    __table_args__ = (
        UniqueConstraint("review_id", "user_id", name="uq_review_vote_review_user"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    review_id: int = Field(index=True, foreign_key="anime_reviews.id")
    user_id: int = Field(index=True, foreign_key="users.id")
    helpful: bool
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
