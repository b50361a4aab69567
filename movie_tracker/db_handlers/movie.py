from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_tracker.db_handlers.base import BaseDBHandler, check_local_db
from movie_tracker.models.movie import Movie
from movie_tracker.utils.logger import setup_logger

logger = setup_logger("db_handlers.movie")


class MovieDBHandler(BaseDBHandler[Movie]):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        super().__init__(Movie, session_factory)

    @check_local_db
    async def get_by_imdb_id(
        self, imdb_id: str, *, db: AsyncSession = None
    ) -> Movie | None:
        """Find a movie by its IMDb id."""
        return await self.get_by_attributes(imdb_id=imdb_id, db=db)

    @check_local_db
    async def get_by_reference(
        self, movie_ref: str, *, db: AsyncSession = None
    ) -> Movie | None:
        """Find a movie by either its UUID or its IMDb id."""
        try:
            movie_id = uuid.UUID(movie_ref)
        except ValueError:
            return await self.get_by_imdb_id(movie_ref, db=db)
        return await self.get(movie_id, db=db)
