"""
Read-side views over watchlists and reviews.

Every listing returns typed records pairing the association with the row it
points at, and an empty list when nothing matches. "No results" is never an
error.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_tracker.db_handlers import (
    MovieDBHandler,
    ReviewDBHandler,
    WatchlistDBHandler,
    check_local_db,
)
from movie_tracker.schemas import (
    AuthorInfo,
    MovieInfo,
    ReviewInfo,
    ReviewWithAuthor,
    ReviewWithMovie,
    WatchlistEntryInfo,
    WatchlistItem,
)


class ListingService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        self.session_factory = session_factory
        self.movie_handler = MovieDBHandler(session_factory)
        self.review_handler = ReviewDBHandler(session_factory)
        self.watchlist_handler = WatchlistDBHandler(session_factory)

    @check_local_db
    async def list_watchlist_for_user(
        self, user_id: uuid.UUID, *, db: AsyncSession = None
    ) -> list[WatchlistItem]:
        """The user's watchlist with each entry's movie, oldest entry first."""
        rows = await self.watchlist_handler.get_entries_with_movies(user_id, db=db)
        return [
            WatchlistItem(
                entry=WatchlistEntryInfo.model_validate(entry),
                movie=MovieInfo.model_validate(movie),
            )
            for entry, movie in rows
        ]

    @check_local_db
    async def list_reviews_for_user(
        self, user_id: uuid.UUID, *, db: AsyncSession = None
    ) -> list[ReviewWithMovie]:
        """The user's reviews with the reviewed movie, most recent first."""
        rows = await self.review_handler.get_reviews_with_movies(user_id, db=db)
        return [
            ReviewWithMovie(
                review=ReviewInfo.model_validate(review),
                movie=MovieInfo.model_validate(movie),
            )
            for review, movie in rows
        ]

    @check_local_db
    async def list_reviews_for_user_public(
        self, user_id: uuid.UUID, *, db: AsyncSession = None
    ) -> list[ReviewWithMovie]:
        """Public profile view; same data as the owner's own listing."""
        return await self.list_reviews_for_user(user_id, db=db)

    @check_local_db
    async def list_reviews_for_movie(
        self, movie_ref: str | uuid.UUID, *, db: AsyncSession = None
    ) -> list[ReviewWithAuthor]:
        """Reviews of a movie given its IMDb id or UUID, most recent first."""
        movie = await self.movie_handler.get_by_reference(str(movie_ref), db=db)
        if movie is None:
            return []

        rows = await self.review_handler.get_reviews_with_authors(movie.id, db=db)
        return [
            ReviewWithAuthor(
                review=ReviewInfo.model_validate(review),
                author=AuthorInfo(id=author_id, username=username),
            )
            for review, author_id, username in rows
        ]
