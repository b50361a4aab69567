# Watchlist linking: one entry per (user, movie), removable only by its owner

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_tracker.db_handlers import WatchlistDBHandler, check_local_db
from movie_tracker.exceptions import (
    DuplicateAssociationError,
    NotFoundOrUnauthorizedError,
)
from movie_tracker.models import Movie, WatchlistEntry
from movie_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


class WatchlistService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        self.session_factory = session_factory
        self.watchlist_handler = WatchlistDBHandler(session_factory)

    @check_local_db
    async def add(
        self, user_id: uuid.UUID, movie: Movie, *, db: AsyncSession = None
    ) -> WatchlistEntry:
        """Link a movie to the user's watchlist; a second link is rejected."""
        movie_id, imdb_id = movie.id, movie.imdb_id
        duplicate_message = f"Movie '{imdb_id}' is already in the watchlist"

        existing = await self.watchlist_handler.get_entry_for_pair(
            user_id, movie_id, db=db
        )
        if existing is not None:
            raise DuplicateAssociationError(duplicate_message)

        try:
            entry = await self.watchlist_handler.create(
                {"user_id": user_id, "movie_id": movie_id}, db=db
            )
        except IntegrityError as e:
            # Another request linked the same pair between our check and insert
            raise DuplicateAssociationError(duplicate_message) from e

        logger.info(f"User {user_id} added {imdb_id} to watchlist (entry {entry.id})")
        return entry

    @check_local_db
    async def remove(
        self, user_id: uuid.UUID, entry_id: uuid.UUID, *, db: AsyncSession = None
    ) -> None:
        entry = await self.watchlist_handler.get_owned_entry(entry_id, user_id, db=db)
        if entry is None:
            raise NotFoundOrUnauthorizedError("Watchlist entry not found")

        await self.watchlist_handler.remove(entry.id, db=db)
        logger.info(f"User {user_id} removed watchlist entry {entry_id}")
