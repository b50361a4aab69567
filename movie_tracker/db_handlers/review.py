from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_tracker.db_handlers.base import BaseDBHandler, check_local_db
from movie_tracker.models.movie import Movie
from movie_tracker.models.review import Review
from movie_tracker.models.user import User
from movie_tracker.utils.logger import setup_logger

logger = setup_logger("db_handlers.review")


class ReviewDBHandler(BaseDBHandler[Review]):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        super().__init__(Review, session_factory)

    @check_local_db
    async def get_owned_review(
        self, review_id: uuid.UUID, user_id: uuid.UUID, *, db: AsyncSession = None
    ) -> Review | None:
        """Get a review only if it was written by the given user."""
        return await self.get_by_attributes(id=review_id, user_id=user_id, db=db)

    @check_local_db
    async def get_reviews_with_movies(
        self, user_id: uuid.UUID, *, db: AsyncSession = None
    ) -> list[tuple[Review, Movie]]:
        """A user's reviews joined with the reviewed movie, newest first."""
        stmt = (
            select(Review, Movie)
            .join(Movie, Review.movie_id == Movie.id)
            .where(Review.user_id == user_id)
            .order_by(Review.created_at.desc())
        )
        result = await db.execute(stmt)
        return [(review, movie) for review, movie in result.all()]

    @check_local_db
    async def get_reviews_with_authors(
        self, movie_id: uuid.UUID, *, db: AsyncSession = None
    ) -> list[tuple[Review, uuid.UUID, str]]:
        """A movie's reviews with the author's id and username, newest first."""
        stmt = (
            select(Review, User.id, User.username)
            .join(User, Review.user_id == User.id)
            .where(Review.movie_id == movie_id)
            .order_by(Review.created_at.desc())
        )
        result = await db.execute(stmt)
        return [
            (review, author_id, username)
            for review, author_id, username in result.all()
        ]
