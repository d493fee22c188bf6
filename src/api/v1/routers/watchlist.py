"""Watchlist routes"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.v1.dependencies.security import require_auth
from api.v1.schemas.base import MessageResponse, Pagination
from api.v1.schemas.library import (
    WatchlistCreateRequest,
    WatchlistItemDetail,
    WatchlistPage,
    WatchlistUpdateRequest,
)
from library.watchlist_service import WatchlistService
from reviews.exceptions import ServiceError
from shared.database import AsyncSessionFactory
from shared.enum.watch_status import WatchStatus
from shared.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/watchlist", tags=["Watchlist"])


@router.post(
    "",
    summary="Add to watchlist",
    status_code=status.HTTP_201_CREATED,
    response_model=WatchlistItemDetail,
)
async def add_to_watchlist(
    body: WatchlistCreateRequest, user_id: int = Depends(require_auth)
):
    try:
        async with AsyncSessionFactory() as session:
            item = await WatchlistService(session).add_item(
                user_id,
                body.anime_id,
                body.title,
                poster=body.poster,
                status=body.status,
            )
        return WatchlistItemDetail.model_validate(item)

    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Add to watchlist failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add to watchlist",
        )


@router.get("", summary="List watchlist", response_model=WatchlistPage)
async def list_watchlist(
    watch_status: Optional[WatchStatus] = Query(
        None, alias="status", description="Only entries in this state"
    ),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    user_id: int = Depends(require_auth),
):
    """Most recently updated first."""
    try:
        async with AsyncSessionFactory() as session:
            items, total = await WatchlistService(session).list_items(
                user_id, status=watch_status, page=page, limit=limit
            )
        return WatchlistPage(
            items=[WatchlistItemDetail.model_validate(i) for i in items],
            pagination=Pagination.build(page, limit, total),
        )

    except Exception as e:
        logger.error(f"List watchlist failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch watchlist",
        )


@router.put(
    "/{anime_id}", summary="Change watch status", response_model=WatchlistItemDetail
)
async def update_watchlist_status(
    anime_id: str,
    body: WatchlistUpdateRequest,
    user_id: int = Depends(require_auth),
):
    try:
        async with AsyncSessionFactory() as session:
            item = await WatchlistService(session).update_status(
                user_id, anime_id, body.status
            )
        return WatchlistItemDetail.model_validate(item)

    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Update watchlist status failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update watchlist",
        )


@router.delete(
    "/{anime_id}", summary="Remove from watchlist", response_model=MessageResponse
)
async def remove_from_watchlist(anime_id: str, user_id: int = Depends(require_auth)):
    try:
        async with AsyncSessionFactory() as session:
            await WatchlistService(session).remove_item(user_id, anime_id)
        return MessageResponse(message="Removed from watchlist")

    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Remove from watchlist failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove from watchlist",
        )
