from api.v1.schemas.review.review_detail import (
    AnimeReviewPage,
    RatingStatsResponse,
    ReviewDetail,
    ReviewWithAuthorDetail,
    UserReviewPage,
    VoteResponse,
)
from api.v1.schemas.review.review_requests import (
    ReviewCreateRequest,
    ReviewUpdateRequest,
    VoteRequest,
)

__all__ = [
    "AnimeReviewPage",
    "RatingStatsResponse",
    "ReviewCreateRequest",
    "ReviewDetail",
    "ReviewUpdateRequest",
    "ReviewWithAuthorDetail",
    "UserReviewPage",
    "VoteRequest",
    "VoteResponse",
]
