import logging
from datetime import datetime, timezone
from typing import List, Tuple

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import asc, delete, desc, func, select

from shared.models.watch_history import WatchHistory
from shared.pagination import page_offset

logger = logging.getLogger(__name__)


class WatchHistoryService:
    """Episode playback progress per user"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record_progress(
        self,
        user_id: int,
        anime_id: str,
        episode_id: str,
        episode_number: int,
        progress: int = 0,
        completed: bool = False,
    ) -> WatchHistory:
        """
        Create or refresh the history entry of one episode.

        Re-watching an episode overwrites its progress and moves it to the
        top of the history.
        """
        now = datetime.now(timezone.utc)
        insert_stmt = sqlite_insert(WatchHistory).values(
            user_id=user_id,
            anime_id=anime_id,
            episode_id=episode_id,
            episode_number=episode_number,
            progress=progress,
            completed=completed,
            watched_at=now,
        )
        upsert_stmt = insert_stmt.on_conflict_do_update(
            index_elements=["user_id", "anime_id", "episode_id"],
            set_={
                "episode_number": insert_stmt.excluded.episode_number,
                "progress": insert_stmt.excluded.progress,
                "completed": insert_stmt.excluded.completed,
                "watched_at": insert_stmt.excluded.watched_at,
            },
        )
        try:
            await self.session.execute(upsert_stmt)
            await self.session.commit()
        except Exception as e:
            logger.error(f"Failed to record watch progress: {e}", exc_info=True)
            await self.session.rollback()
            raise

        statement = (
            select(WatchHistory)
            .where(
                WatchHistory.user_id == user_id,
                WatchHistory.anime_id == anime_id,
                WatchHistory.episode_id == episode_id,
            )
            .execution_options(populate_existing=True)
        )
        entry = (await self.session.execute(statement)).scalar_one()
        logger.debug(
            f"User {user_id} at {progress}s of {anime_id} episode {episode_number}"
        )
        return entry

    async def list_history(
        self, user_id: int, page: int = 1, limit: int = 10
    ) -> Tuple[List[WatchHistory], int]:
        statement = (
            select(WatchHistory)
            .where(WatchHistory.user_id == user_id)
            .order_by(desc(WatchHistory.watched_at), desc(WatchHistory.id))
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        result = await self.session.execute(statement)

        count_stmt = (
            select(func.count())
            .select_from(WatchHistory)
            .where(WatchHistory.user_id == user_id)
        )
        total = (await self.session.execute(count_stmt)).scalar_one()
        return list(result.scalars().all()), total

    async def list_anime_history(self, user_id: int, anime_id: str) -> List[WatchHistory]:
        statement = (
            select(WatchHistory)
            .where(WatchHistory.user_id == user_id, WatchHistory.anime_id == anime_id)
            .order_by(asc(WatchHistory.episode_number))
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def clear_history(self, user_id: int) -> int:
        statement = delete(WatchHistory).where(WatchHistory.user_id == user_id)  # type: ignore
        result = await self.session.execute(statement)
        await self.session.commit()
        logger.info(f"Cleared {result.rowcount} history entries of user {user_id}")
        return result.rowcount
