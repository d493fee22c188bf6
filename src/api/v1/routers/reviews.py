"""Review and rating routes"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from api.v1.dependencies.security import get_current_user_id, require_auth
from api.v1.schemas.base import MessageResponse, Pagination
from api.v1.schemas.review import (
    AnimeReviewPage,
    RatingStatsResponse,
    ReviewCreateRequest,
    ReviewDetail,
    ReviewUpdateRequest,
    ReviewWithAuthorDetail,
    UserReviewPage,
    VoteRequest,
    VoteResponse,
)
from reviews.exceptions import ServiceError
from reviews.review_service import ReviewService
from shared.database import AsyncSessionFactory
from shared.enum.review_sort import ReviewSort
from shared.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reviews", tags=["Reviews"])


def _to_http(e: ServiceError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "",
    summary="Submit a review",
    status_code=status.HTTP_201_CREATED,
    response_model=ReviewDetail,
)
async def submit_review(
    body: ReviewCreateRequest, user_id: int = Depends(require_auth)
):
    """
    Submit the caller's review of an anime.

    - rating: integer 1-10 (required)
    - one review per user per anime; a second submission is rejected with 400
    """
    try:
        async with AsyncSessionFactory() as session:
            service = ReviewService(session)
            review = await service.submit_review(
                user_id=user_id,
                anime_id=body.anime_id,
                anime_title=body.anime_title,
                rating=body.rating,
                review_text=body.review_text,
                spoiler_warning=body.spoiler_warning,
            )
        return ReviewDetail.model_validate(review)

    except ServiceError as e:
        raise _to_http(e)
    except Exception as e:
        logger.error(f"Submit review failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit review",
        )


@router.get(
    "/anime/{anime_id}",
    summary="List reviews of an anime",
    response_model=AnimeReviewPage,
)
async def list_anime_reviews(
    anime_id: str,
    page: int = Query(DEFAULT_PAGE, ge=1, description="1-based page"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Page size"),
    sort_by: str = Query(
        ReviewSort.RECENT.value,
        alias="sortBy",
        description="'recent' (newest first) or 'helpful' (most helpful first)",
    ),
    user_id: Optional[int] = Depends(get_current_user_id),
):
    """
    Paginated reviews of one anime with each author's username and avatar.

    Authentication is optional and does not change the result.
    """
    try:
        async with AsyncSessionFactory() as session:
            service = ReviewService(session)
            reviews, total = await service.list_anime_reviews(
                anime_id=anime_id, page=page, limit=limit, sort_by=sort_by
            )

        return AnimeReviewPage(
            reviews=[ReviewWithAuthorDetail.from_dto(r) for r in reviews],
            pagination=Pagination.build(page, limit, total),
        )

    except ServiceError as e:
        raise _to_http(e)
    except Exception as e:
        logger.error(f"Fetching reviews of anime {anime_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch reviews",
        )


@router.get(
    "/anime/{anime_id}/mine",
    summary="The caller's review of an anime",
    response_model=ReviewDetail,
)
async def get_my_review(anime_id: str, user_id: int = Depends(require_auth)):
    try:
        async with AsyncSessionFactory() as session:
            service = ReviewService(session)
            review = await service.get_user_review_for_anime(user_id, anime_id)
        return ReviewDetail.model_validate(review)

    except ServiceError as e:
        raise _to_http(e)
    except Exception as e:
        logger.error(f"Fetching own review failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch review",
        )


@router.get(
    "/anime/{anime_id}/stats",
    summary="Rating statistics of an anime",
    response_model=RatingStatsResponse,
)
async def get_rating_stats(anime_id: str):
    """Average rating (one decimal, '0.0' without reviews) and review count."""
    try:
        async with AsyncSessionFactory() as session:
            service = ReviewService(session)
            stats = await service.get_rating_stats(anime_id)
        return RatingStatsResponse(
            average_rating=stats.average_rating, total_reviews=stats.total_reviews
        )

    except Exception as e:
        logger.error(f"Fetching rating stats failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch rating stats",
        )


@router.get(
    "/user/{target_user_id}",
    summary="All reviews written by a user",
    response_model=UserReviewPage,
)
async def list_user_reviews(
    target_user_id: int = Path(..., description="Author user id"),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
):
    try:
        async with AsyncSessionFactory() as session:
            service = ReviewService(session)
            reviews, total = await service.list_user_reviews(
                target_user_id, page=page, limit=limit
            )

        return UserReviewPage(
            reviews=[ReviewDetail.model_validate(r) for r in reviews],
            pagination=Pagination.build(page, limit, total),
        )

    except ServiceError as e:
        raise _to_http(e)
    except Exception as e:
        logger.error(f"Fetching reviews of user {target_user_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user reviews",
        )


@router.put("/{review_id}", summary="Update own review", response_model=ReviewDetail)
async def update_review(
    review_id: int,
    body: ReviewUpdateRequest,
    user_id: int = Depends(require_auth),
):
    """
    Overwrite rating, text and spoiler flag. Only the author may do this.
    """
    try:
        async with AsyncSessionFactory() as session:
            service = ReviewService(session)
            review = await service.update_review(
                review_id=review_id,
                user_id=user_id,
                rating=body.rating,
                review_text=body.review_text,
                spoiler_warning=body.spoiler_warning,
            )
        return ReviewDetail.model_validate(review)

    except ServiceError as e:
        raise _to_http(e)
    except Exception as e:
        logger.error(f"Update review {review_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update review",
        )


@router.delete(
    "/{review_id}", summary="Delete own review", response_model=MessageResponse
)
async def delete_review(review_id: int, user_id: int = Depends(require_auth)):
    """Deletes the review and every vote cast on it."""
    try:
        async with AsyncSessionFactory() as session:
            service = ReviewService(session)
            await service.delete_review(review_id, user_id)
        return MessageResponse(message="Review deleted successfully")

    except ServiceError as e:
        raise _to_http(e)
    except Exception as e:
        logger.error(f"Delete review {review_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete review",
        )


@router.post(
    "/{review_id}/vote", summary="Vote on a review", response_model=VoteResponse
)
async def vote_review(
    review_id: int, body: VoteRequest, user_id: int = Depends(require_auth)
):
    """
    Mark a review helpful or not. Voting again replaces the earlier vote.
    """
    try:
        async with AsyncSessionFactory() as session:
            service = ReviewService(session)
            helpful_count = await service.vote_review(review_id, user_id, body.helpful)
        return VoteResponse(helpful_count=helpful_count)

    except ServiceError as e:
        raise _to_http(e)
    except Exception as e:
        logger.error(f"Vote on review {review_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to vote on review",
        )


@router.post(
    "/{review_id}/report", summary="Report a review", response_model=MessageResponse
)
async def report_review(review_id: int, user_id: int = Depends(require_auth)):
    try:
        async with AsyncSessionFactory() as session:
            service = ReviewService(session)
            await service.report_review(review_id, user_id)
        return MessageResponse(message="Review reported successfully")

    except ServiceError as e:
        raise _to_http(e)
    except Exception as e:
        logger.error(f"Report review {review_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to report review",
        )
