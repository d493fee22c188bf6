"""Favorite anime routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.v1.dependencies.security import require_auth
from api.v1.schemas.base import MessageResponse, Pagination
from api.v1.schemas.library import (
    FavoriteCreateRequest,
    FavoriteDetail,
    FavoritePage,
    FavoriteStatus,
)
from library.favorite_service import FavoriteService
from reviews.exceptions import ServiceError
from shared.database import AsyncSessionFactory
from shared.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.post(
    "",
    summary="Add a favorite",
    status_code=status.HTTP_201_CREATED,
    response_model=FavoriteDetail,
)
async def add_favorite(
    body: FavoriteCreateRequest, user_id: int = Depends(require_auth)
):
    try:
        async with AsyncSessionFactory() as session:
            favorite = await FavoriteService(session).add_favorite(
                user_id, body.anime_id, body.title, body.poster
            )
        return FavoriteDetail.model_validate(favorite)

    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Add favorite failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add favorite",
        )


@router.get("", summary="List favorites", response_model=FavoritePage)
async def list_favorites(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    user_id: int = Depends(require_auth),
):
    """Newest first."""
    try:
        async with AsyncSessionFactory() as session:
            favorites, total = await FavoriteService(session).list_favorites(
                user_id, page=page, limit=limit
            )
        return FavoritePage(
            favorites=[FavoriteDetail.model_validate(f) for f in favorites],
            pagination=Pagination.build(page, limit, total),
        )

    except Exception as e:
        logger.error(f"List favorites failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch favorites",
        )


@router.get(
    "/{anime_id}/status", summary="Is this anime a favorite", response_model=FavoriteStatus
)
async def favorite_status(anime_id: str, user_id: int = Depends(require_auth)):
    try:
        async with AsyncSessionFactory() as session:
            favorited = await FavoriteService(session).is_favorite(user_id, anime_id)
        return FavoriteStatus(favorited=favorited)

    except Exception as e:
        logger.error(f"Favorite status check failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to check favorite",
        )


@router.delete(
    "/{anime_id}", summary="Remove a favorite", response_model=MessageResponse
)
async def remove_favorite(anime_id: str, user_id: int = Depends(require_auth)):
    try:
        async with AsyncSessionFactory() as session:
            await FavoriteService(session).remove_favorite(user_id, anime_id)
        return MessageResponse(message="Removed from favorites")

    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Remove favorite failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove favorite",
        )
