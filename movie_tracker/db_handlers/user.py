from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_tracker.db_handlers.base import BaseDBHandler, check_local_db
from movie_tracker.models.user import User
from movie_tracker.utils.logger import setup_logger

logger = setup_logger("db_handlers.user")


class UserDBHandler(BaseDBHandler[User]):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        super().__init__(User, session_factory)

    @check_local_db
    async def get_user_by_email(
        self, email: str, *, db: AsyncSession = None
    ) -> User | None:
        """Get a user by email address."""
        try:
            stmt = select(User).filter(User.email == email)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving user by email '{email}': {e}")
            raise

    @check_local_db
    async def find_conflicting_user(
        self, username: str, email: str, *, db: AsyncSession = None
    ) -> User | None:
        """Return a user that already holds this username or email, if any."""
        stmt = select(User).where(or_(User.username == username, User.email == email))
        result = await db.execute(stmt)
        return result.scalars().first()
