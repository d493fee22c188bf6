import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Tuple

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import delete, desc, func, select

from reviews.dto import RatingStats, ReviewWithAuthor
from reviews.exceptions import (
    AuthorizationError,
    DuplicateReviewError,
    NotFoundError,
    ValidationError,
)
from shared.enum.review_sort import ReviewSort
from shared.models.anime_review import AnimeReview
from shared.models.review_vote import ReviewVote
from shared.models.user import User
from shared.pagination import page_offset

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 10


def validate_rating(rating) -> int:
    """Ratings are integers in [1, 10]; anything else is a validation error."""
    if (
        rating is None
        or isinstance(rating, bool)
        or not isinstance(rating, int)
        or rating < MIN_RATING
        or rating > MAX_RATING
    ):
        raise ValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}"
        )
    return rating


def validate_pagination(page: int, limit: int):
    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be at least 1")


def format_average(average) -> str:
    """One decimal place, halves rounded up (7.25 -> "7.3"). "0.0" when empty."""
    if average is None:
        return "0.0"
    return str(Decimal(str(average)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class ReviewService:
    """Review lifecycle, helpfulness voting, reporting and rating statistics.

    The caller identity is always passed in explicitly; the service holds no
    state besides the session it was created with.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_review(self, review_id: int) -> Optional[AnimeReview]:
        statement = select(AnimeReview).where(AnimeReview.id == review_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_review(self, review_id: int) -> AnimeReview:
        review = await self.find_review(review_id)
        if review is None:
            raise NotFoundError("Review not found")
        return review

    async def find_user_review(
        self, user_id: int, anime_id: str
    ) -> Optional[AnimeReview]:
        statement = (
            select(AnimeReview)
            .where(AnimeReview.user_id == user_id, AnimeReview.anime_id == anime_id)
            .limit(1)
        )
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def submit_review(
        self,
        user_id: int,
        anime_id: str,
        anime_title: str,
        rating: Optional[int],
        review_text: Optional[str] = None,
        spoiler_warning: bool = False,
    ) -> AnimeReview:
        """
        Create the caller's review of an anime.

        Raises ValidationError for a bad rating and DuplicateReviewError when
        the caller already reviewed this anime. The existence check gives the
        precise error; the unique constraint catches submissions that race
        past it.
        """
        validate_rating(rating)

        if await self.find_user_review(user_id, anime_id) is not None:
            logger.debug(f"User {user_id} tried to review anime {anime_id} twice")
            raise DuplicateReviewError("You have already reviewed this anime")

        review = AnimeReview(
            user_id=user_id,
            anime_id=anime_id,
            anime_title=anime_title,
            rating=rating,
            review_text=review_text or None,
            spoiler_warning=bool(spoiler_warning),
            helpful_count=0,
            reported=False,
        )
        self.session.add(review)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            if await self.find_user_review(user_id, anime_id) is not None:
                logger.debug(
                    f"Concurrent duplicate review by user {user_id} on anime {anime_id}"
                )
                raise DuplicateReviewError("You have already reviewed this anime")
            raise
        except Exception as e:
            logger.error(f"Failed to submit review: {e}", exc_info=True)
            await self.session.rollback()
            raise

        await self.session.refresh(review)
        logger.info(
            f"User {user_id} reviewed anime {anime_id} (review {review.id}, rating {rating})"
        )
        return review

    async def list_anime_reviews(
        self,
        anime_id: str,
        page: int = 1,
        limit: int = 10,
        sort_by: str = ReviewSort.RECENT,
    ) -> Tuple[List[ReviewWithAuthor], int]:
        """
        One page of an anime's reviews with each author's username and avatar.

        sort_by "helpful" orders by helpful count, anything else by creation
        time; both newest id first on ties.
        """
        validate_pagination(page, limit)

        if sort_by == ReviewSort.HELPFUL:
            primary = desc(AnimeReview.helpful_count)
        else:
            primary = desc(AnimeReview.created_at)

        statement = (
            select(AnimeReview, User.username, User.avatar)
            .outerjoin(User, AnimeReview.user_id == User.id)  # type: ignore
            .where(AnimeReview.anime_id == anime_id)
            .order_by(primary, desc(AnimeReview.id))
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        result = await self.session.execute(statement)
        reviews = [
            ReviewWithAuthor(review=review, username=username, avatar=avatar)
            for review, username, avatar in result.all()
        ]

        count_stmt = (
            select(func.count())
            .select_from(AnimeReview)
            .where(AnimeReview.anime_id == anime_id)
        )
        total = (await self.session.execute(count_stmt)).scalar_one()

        return reviews, total

    async def get_user_review_for_anime(
        self, user_id: int, anime_id: str
    ) -> AnimeReview:
        review = await self.find_user_review(user_id, anime_id)
        if review is None:
            raise NotFoundError("Review not found")
        return review

    async def _get_owned_review(self, review_id: int, user_id: int) -> AnimeReview:
        review = await self.get_review(review_id)
        if review.user_id != user_id:
            logger.warning(
                f"User {user_id} tried to modify review {review_id} owned by {review.user_id}"
            )
            raise AuthorizationError("Not authorized")
        return review

    async def update_review(
        self,
        review_id: int,
        user_id: int,
        rating: Optional[int],
        review_text: Optional[str] = None,
        spoiler_warning: bool = False,
    ) -> AnimeReview:
        """
        Overwrite rating, text and spoiler flag of the caller's own review.

        helpful_count and reported are left alone.
        """
        review = await self._get_owned_review(review_id, user_id)
        validate_rating(rating)

        review.rating = rating  # type: ignore[assignment]
        review.review_text = review_text or None
        review.spoiler_warning = bool(spoiler_warning)
        review.updated_at = datetime.now(timezone.utc)

        self.session.add(review)
        try:
            await self.session.commit()
            await self.session.refresh(review)
        except Exception as e:
            logger.error(f"Failed to update review {review_id}: {e}", exc_info=True)
            await self.session.rollback()
            raise

        logger.info(f"Review {review_id} updated by user {user_id}")
        return review

    async def delete_review(self, review_id: int, user_id: int):
        """Delete the caller's own review together with all of its votes."""
        review = await self._get_owned_review(review_id, user_id)

        try:
            # Votes first, in the same transaction as the review itself
            await self.session.execute(
                delete(ReviewVote).where(ReviewVote.review_id == review_id)  # type: ignore
            )
            await self.session.delete(review)
            await self.session.commit()
        except Exception as e:
            logger.error(f"Failed to delete review {review_id}: {e}", exc_info=True)
            await self.session.rollback()
            raise

        logger.info(f"Review {review_id} deleted by user {user_id}")

    async def vote_review(self, review_id: int, user_id: int, helpful: bool) -> int:
        """
        Record or replace the caller's vote on a review.

        The review's helpful count is then recomputed from the vote rows and
        written back within the same transaction. Returns the new count.
        """
        review = await self.get_review(review_id)

        insert_stmt = sqlite_insert(ReviewVote).values(
            review_id=review_id,
            user_id=user_id,
            helpful=bool(helpful),
            created_at=datetime.now(timezone.utc),
        )
        upsert_stmt = insert_stmt.on_conflict_do_update(
            index_elements=["review_id", "user_id"],
            set_={"helpful": insert_stmt.excluded.helpful},
        )

        try:
            await self.session.execute(upsert_stmt)
            helpful_count = await self.count_helpful_votes(review_id)
            review.helpful_count = helpful_count
            self.session.add(review)
            await self.session.commit()
        except Exception as e:
            logger.error(f"Failed to vote on review {review_id}: {e}", exc_info=True)
            await self.session.rollback()
            raise

        logger.info(
            f"User {user_id} voted helpful={bool(helpful)} on review {review_id}, "
            f"helpful count now {helpful_count}"
        )
        return helpful_count

    async def count_helpful_votes(self, review_id: int) -> int:
        statement = (
            select(func.count())
            .select_from(ReviewVote)
            .where(
                ReviewVote.review_id == review_id,
                ReviewVote.helpful == True,  # noqa: E712
            )
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def get_votes(self, review_id: int) -> List[ReviewVote]:
        statement = select(ReviewVote).where(ReviewVote.review_id == review_id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def report_review(self, review_id: int, user_id: int):
        """Flag a review for moderation. Any authenticated user may report."""
        review = await self.get_review(review_id)
        review.reported = True
        self.session.add(review)
        try:
            await self.session.commit()
        except Exception as e:
            logger.error(f"Failed to report review {review_id}: {e}", exc_info=True)
            await self.session.rollback()
            raise
        logger.info(f"Review {review_id} reported by user {user_id}")

    async def get_rating_stats(self, anime_id: str) -> RatingStats:
        statement = select(
            func.avg(AnimeReview.rating), func.count(AnimeReview.id)
        ).where(AnimeReview.anime_id == anime_id)
        average, total = (await self.session.execute(statement)).one()
        return RatingStats(
            average_rating=format_average(average),
            total_reviews=int(total or 0),
        )

    async def list_user_reviews(
        self, user_id: int, page: int = 1, limit: int = 10
    ) -> Tuple[List[AnimeReview], int]:
        """All of one user's reviews, newest first."""
        validate_pagination(page, limit)

        statement = (
            select(AnimeReview)
            .where(AnimeReview.user_id == user_id)
            .order_by(desc(AnimeReview.created_at), desc(AnimeReview.id))
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        result = await self.session.execute(statement)
        reviews = list(result.scalars().all())

        count_stmt = (
            select(func.count())
            .select_from(AnimeReview)
            .where(AnimeReview.user_id == user_id)
        )
        total = (await self.session.execute(count_stmt)).scalar_one()

        return reviews, total
