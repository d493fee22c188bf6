import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import and_, delete, desc, func, select

from reviews.exceptions import DuplicateEntryError, NotFoundError
from shared.models.favorite import Favorite
from shared.pagination import page_offset

logger = logging.getLogger(__name__)


class FavoriteService:
    """Database operations for a user's favorite anime"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_favorite(
        self, user_id: int, anime_id: str, title: str, poster: Optional[str] = None
    ) -> Favorite:
        """
        Add an anime to the user's favorites.

        Raises DuplicateEntryError if it is already there.
        """
        favorite = Favorite(user_id=user_id, anime_id=anime_id, title=title, poster=poster)
        self.session.add(favorite)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            # Only UNIQUE(user_id, anime_id) is a duplicate; other violations propagate
            if await self.is_favorite(user_id, anime_id):
                logger.debug(f"User {user_id} tried to favorite anime {anime_id} twice")
                raise DuplicateEntryError("Anime is already in favorites")
            raise
        except Exception as e:
            logger.error(
                f"Failed to add favorite {anime_id} for user {user_id}: {e}",
                exc_info=True,
            )
            await self.session.rollback()
            raise
        await self.session.refresh(favorite)
        logger.info(f"User {user_id} added anime {anime_id} to favorites")
        return favorite

    async def remove_favorite(self, user_id: int, anime_id: str):
        statement = delete(Favorite).where(
            and_(Favorite.user_id == user_id, Favorite.anime_id == anime_id)  # type: ignore
        )
        result = await self.session.execute(statement)
        await self.session.commit()
        if result.rowcount == 0:
            raise NotFoundError("Favorite not found")
        logger.info(f"User {user_id} removed anime {anime_id} from favorites")

    async def is_favorite(self, user_id: int, anime_id: str) -> bool:
        statement = select(Favorite.id).where(
            Favorite.user_id == user_id, Favorite.anime_id == anime_id
        )
        result = await self.session.execute(statement)
        return result.first() is not None

    async def list_favorites(
        self, user_id: int, page: int = 1, limit: int = 10
    ) -> Tuple[List[Favorite], int]:
        statement = (
            select(Favorite)
            .where(Favorite.user_id == user_id)
            .order_by(desc(Favorite.added_at), desc(Favorite.id))
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        result = await self.session.execute(statement)

        count_stmt = (
            select(func.count()).select_from(Favorite).where(Favorite.user_id == user_id)
        )
        total = (await self.session.execute(count_stmt)).scalar_one()
        return list(result.scalars().all()), total
