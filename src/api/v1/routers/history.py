"""Watch history routes"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.v1.dependencies.security import require_auth
from api.v1.schemas.base import Pagination
from api.v1.schemas.library import (
    HistoryClearResponse,
    WatchHistoryDetail,
    WatchHistoryPage,
    WatchProgressRequest,
)
from library.watch_history_service import WatchHistoryService
from shared.database import AsyncSessionFactory
from shared.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/history", tags=["Watch history"])


@router.post("", summary="Record episode progress", response_model=WatchHistoryDetail)
async def record_progress(
    body: WatchProgressRequest, user_id: int = Depends(require_auth)
):
    """
    Create or overwrite the caller's progress on one episode.
    """
    try:
        async with AsyncSessionFactory() as session:
            entry = await WatchHistoryService(session).record_progress(
                user_id=user_id,
                anime_id=body.anime_id,
                episode_id=body.episode_id,
                episode_number=body.episode_number,
                progress=body.progress,
                completed=body.completed,
            )
        return WatchHistoryDetail.model_validate(entry)

    except Exception as e:
        logger.error(f"Record watch progress failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record progress",
        )


@router.get("", summary="Watch history", response_model=WatchHistoryPage)
async def list_history(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    user_id: int = Depends(require_auth),
):
    try:
        async with AsyncSessionFactory() as session:
            entries, total = await WatchHistoryService(session).list_history(
                user_id, page=page, limit=limit
            )
        return WatchHistoryPage(
            history=[WatchHistoryDetail.model_validate(e) for e in entries],
            pagination=Pagination.build(page, limit, total),
        )

    except Exception as e:
        logger.error(f"List watch history failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch watch history",
        )


@router.get(
    "/{anime_id}",
    summary="Watched episodes of one anime",
    response_model=List[WatchHistoryDetail],
)
async def list_anime_history(anime_id: str, user_id: int = Depends(require_auth)):
    try:
        async with AsyncSessionFactory() as session:
            entries = await WatchHistoryService(session).list_anime_history(
                user_id, anime_id
            )
        return [WatchHistoryDetail.model_validate(e) for e in entries]

    except Exception as e:
        logger.error(f"List anime watch history failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch watch history",
        )


@router.delete("", summary="Clear watch history", response_model=HistoryClearResponse)
async def clear_history(user_id: int = Depends(require_auth)):
    try:
        async with AsyncSessionFactory() as session:
            deleted = await WatchHistoryService(session).clear_history(user_id)
        return HistoryClearResponse(deleted=deleted)

    except Exception as e:
        logger.error(f"Clear watch history failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to clear watch history",
        )
