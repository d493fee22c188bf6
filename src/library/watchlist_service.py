import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import and_, delete, desc, func, select

from reviews.exceptions import DuplicateEntryError, NotFoundError
from shared.enum.watch_status import WatchStatus
from shared.models.watchlist_item import WatchlistItem
from shared.pagination import page_offset

logger = logging.getLogger(__name__)


class WatchlistService:
    """Database operations for a user's watchlist"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_item(
        self,
        user_id: int,
        anime_id: str,
        title: str,
        poster: Optional[str] = None,
        status: WatchStatus = WatchStatus.PLAN_TO_WATCH,
    ) -> WatchlistItem:
        item = WatchlistItem(
            user_id=user_id,
            anime_id=anime_id,
            title=title,
            poster=poster,
            status=WatchStatus(status).value,
        )
        self.session.add(item)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            if await self.find_item(user_id, anime_id) is not None:
                logger.debug(
                    f"User {user_id} tried to add anime {anime_id} to the watchlist twice"
                )
                raise DuplicateEntryError("Anime is already in the watchlist")
            raise
        except Exception as e:
            logger.error(f"Failed to add watchlist item: {e}", exc_info=True)
            await self.session.rollback()
            raise
        await self.session.refresh(item)
        logger.info(f"User {user_id} added anime {anime_id} to the watchlist as {item.status}")
        return item

    async def find_item(self, user_id: int, anime_id: str) -> Optional[WatchlistItem]:
        statement = select(WatchlistItem).where(
            WatchlistItem.user_id == user_id, WatchlistItem.anime_id == anime_id
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_item(self, user_id: int, anime_id: str) -> WatchlistItem:
        item = await self.find_item(user_id, anime_id)
        if item is None:
            raise NotFoundError("Watchlist item not found")
        return item

    async def update_status(
        self, user_id: int, anime_id: str, status: WatchStatus
    ) -> WatchlistItem:
        item = await self.get_item(user_id, anime_id)
        item.status = WatchStatus(status).value
        self.session.add(item)
        try:
            await self.session.commit()
            await self.session.refresh(item)
        except Exception as e:
            logger.error(f"Failed to update watchlist item: {e}", exc_info=True)
            await self.session.rollback()
            raise
        logger.info(f"User {user_id} moved anime {anime_id} to {item.status}")
        return item

    async def remove_item(self, user_id: int, anime_id: str):
        statement = delete(WatchlistItem).where(
            and_(WatchlistItem.user_id == user_id, WatchlistItem.anime_id == anime_id)  # type: ignore
        )
        result = await self.session.execute(statement)
        await self.session.commit()
        if result.rowcount == 0:
            raise NotFoundError("Watchlist item not found")
        logger.info(f"User {user_id} removed anime {anime_id} from the watchlist")

    async def list_items(
        self,
        user_id: int,
        status: Optional[WatchStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[WatchlistItem], int]:
        """Most recently updated first, optionally restricted to one status."""
        query = select(WatchlistItem).where(WatchlistItem.user_id == user_id)
        if status is not None:
            query = query.where(WatchlistItem.status == WatchStatus(status).value)

        count_stmt = select(func.count()).select_from(query.alias("sub"))
        total = (await self.session.execute(count_stmt)).scalar_one_or_none() or 0

        data_stmt = (
            query.order_by(desc(WatchlistItem.updated_at), desc(WatchlistItem.id))
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        result = await self.session.execute(data_stmt)
        return list(result.scalars().all()), total
