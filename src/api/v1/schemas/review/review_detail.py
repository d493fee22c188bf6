from datetime import datetime
from typing import List, Optional

from pydantic import Field

from api.v1.schemas.base import CamelModel, Pagination
from reviews.dto import ReviewWithAuthor


class ReviewDetail(CamelModel):
    """A stored review"""

    id: int
    user_id: int
    anime_id: str
    anime_title: str
    rating: int
    review_text: Optional[str] = None
    spoiler_warning: bool
    helpful_count: int = Field(description="Number of helpful votes")
    reported: bool
    created_at: datetime
    updated_at: datetime


class ReviewWithAuthorDetail(ReviewDetail):
    """A review plus its author's public profile"""

    username: Optional[str] = None
    avatar: Optional[str] = None

    @classmethod
    def from_dto(cls, item: ReviewWithAuthor) -> "ReviewWithAuthorDetail":
        data = ReviewDetail.model_validate(item.review).model_dump()
        return cls(**data, username=item.username, avatar=item.avatar)


class AnimeReviewPage(CamelModel):
    reviews: List[ReviewWithAuthorDetail]
    pagination: Pagination


class UserReviewPage(CamelModel):
    reviews: List[ReviewDetail]
    pagination: Pagination


class RatingStatsResponse(CamelModel):
    average_rating: str = Field(description="Mean rating to one decimal, '0.0' if none")
    total_reviews: int


class VoteResponse(CamelModel):
    message: str = "Vote recorded successfully"
    helpful_count: int = Field(description="Helpful votes after this vote")
