# Review authoring with rating validation and owner-only mutation

import uuid

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_tracker.db_handlers import ReviewDBHandler, check_local_db
from movie_tracker.exceptions import InvalidScoreError, NotFoundOrUnauthorizedError
from movie_tracker.models import Movie, Review
from movie_tracker.models.review import MAX_RATING, MIN_RATING
from movie_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


def validate_rating(rating) -> int:
    """Return the rating if it is an integer in [1, 10], else raise InvalidScoreError."""
    # bool is an int subclass but never a rating
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidScoreError(rating, minimum=MIN_RATING, maximum=MAX_RATING)
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidScoreError(rating, minimum=MIN_RATING, maximum=MAX_RATING)
    return rating


class ReviewService:
    """
    Creates, edits and deletes reviews.

    A user may review the same movie more than once. Edits and deletes are
    limited to the review's author; a review that does not exist and a review
    written by someone else are reported identically.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        self.session_factory = session_factory
        self.review_handler = ReviewDBHandler(session_factory)

    @check_local_db
    async def create(
        self,
        user_id: uuid.UUID,
        movie: Movie,
        rating: int,
        comment: str | None = None,
        *,
        db: AsyncSession = None,
    ) -> Review:
        rating = validate_rating(rating)
        review = await self.review_handler.create(
            {
                "user_id": user_id,
                "movie_id": movie.id,
                "rating": rating,
                "comment": comment,
            },
            db=db,
        )
        logger.info(f"User {user_id} reviewed movie {review.movie_id} ({rating}/10)")
        return review

    @check_local_db
    async def update(
        self,
        user_id: uuid.UUID,
        review_id: uuid.UUID,
        rating: int | None = None,
        comment: str | None = None,
        *,
        db: AsyncSession = None,
    ) -> Review:
        """Apply only the fields that were supplied (not None)."""
        review = await self._get_owned(user_id, review_id, db=db)

        changes = {}
        if rating is not None:
            changes["rating"] = validate_rating(rating)
        if comment is not None:
            changes["comment"] = comment

        if not changes:
            return review

        review = await self.review_handler.update(review, changes, db=db)
        logger.info(f"User {user_id} updated review {review_id}: {sorted(changes)}")
        return review

    @check_local_db
    async def delete(
        self, user_id: uuid.UUID, review_id: uuid.UUID, *, db: AsyncSession = None
    ) -> None:
        review = await self._get_owned(user_id, review_id, db=db)
        await self.review_handler.remove(review.id, db=db)
        logger.info(f"User {user_id} deleted review {review_id}")

    async def _get_owned(
        self, user_id: uuid.UUID, review_id: uuid.UUID, *, db: AsyncSession
    ) -> Review:
        review = await self.review_handler.get_owned_review(review_id, user_id, db=db)
        if review is None:
            raise NotFoundOrUnauthorizedError("Review not found or unauthorized")
        return review
