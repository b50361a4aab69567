from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_tracker.db_handlers.base import BaseDBHandler, check_local_db
from movie_tracker.models.movie import Movie
from movie_tracker.models.watchlist_entry import WatchlistEntry
from movie_tracker.utils.logger import setup_logger

logger = setup_logger("db_handlers.watchlist")


class WatchlistDBHandler(BaseDBHandler[WatchlistEntry]):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        super().__init__(WatchlistEntry, session_factory)

    @check_local_db
    async def get_entry_for_pair(
        self, user_id: uuid.UUID, movie_id: uuid.UUID, *, db: AsyncSession = None
    ) -> WatchlistEntry | None:
        return await self.get_by_attributes(user_id=user_id, movie_id=movie_id, db=db)

    @check_local_db
    async def get_owned_entry(
        self, entry_id: uuid.UUID, user_id: uuid.UUID, *, db: AsyncSession = None
    ) -> WatchlistEntry | None:
        """Get an entry only if it belongs to the given user."""
        return await self.get_by_attributes(id=entry_id, user_id=user_id, db=db)

    @check_local_db
    async def get_entries_with_movies(
        self, user_id: uuid.UUID, *, db: AsyncSession = None
    ) -> list[tuple[WatchlistEntry, Movie]]:
        """All of a user's entries joined with their movie, oldest first."""
        stmt = (
            select(WatchlistEntry, Movie)
            .join(Movie, WatchlistEntry.movie_id == Movie.id)
            .where(WatchlistEntry.user_id == user_id)
            .order_by(WatchlistEntry.created_at.asc())
        )
        result = await db.execute(stmt)
        return [(entry, movie) for entry, movie in result.all()]
