from __future__ import annotations

import asyncio
from functools import wraps
from typing import Any, Generic, TypeVar

from asyncpg.exceptions import ConnectionDoesNotExistError
from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_tracker.models.base import Base
from movie_tracker.utils.logger import setup_logger

logger = setup_logger("db_handlers")


# Define generic types for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


def check_local_db(func):
    """Database session decorator with transaction management and retry logic.

    The decorated method's owner must expose ``session_factory``; it is only
    used when the caller does not pass ``db``.
    """

    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        # If 'db' is already provided, we're in a nested call.
        # The outermost caller who created the session is responsible for the transaction.
        if kwargs.get("db"):
            return await func(self, *args, **kwargs)

        session_factory = getattr(self, "session_factory", None)
        if session_factory is None:
            raise RuntimeError(
                f"{type(self).__name__}.{func.__name__} needs a 'db' session "
                "or a handler built with a session_factory"
            )

        last_exception = None
        # Retry logic for dropped connections
        for attempt in range(3):
            async with session_factory() as db:
                kwargs["db"] = db
                try:
                    result = await func(self, *args, **kwargs)
                    await db.commit()
                    return result
                except DBAPIError as e:
                    await db.rollback()
                    if isinstance(e.orig, ConnectionDoesNotExistError):
                        last_exception = e
                        logger.warning(
                            f"Connection error in {func.__name__} (attempt {attempt + 1}/3): {e}. Retrying..."
                        )
                        await asyncio.sleep(1 + attempt)
                        continue
                    logger.error(
                        f"DBAPIError in {func.__name__} (attempt {attempt + 1}/3): {e}",
                        exc_info=True,
                    )
                    raise
                except Exception:
                    await db.rollback()
                    raise

        logger.error(
            f"All retries failed for {func.__name__}. Last error: {last_exception}"
        )
        raise last_exception

    return wrapper


class BaseDBHandler(Generic[ModelType]):
    """Generic handler for database operations with basic CRUD methods."""

    def __init__(
        self,
        model: type[ModelType],
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ):
        self.model = model
        self.session_factory = session_factory

    @check_local_db
    async def create(
        self, obj_dict: dict[str, Any], *, db: AsyncSession = None
    ) -> ModelType:
        """Create a new record in the database."""

        db_obj = self.model(**obj_dict)
        try:
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
            return db_obj
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"IntegrityError creating {self.model.__name__}: {e.orig}")
            # Re-raise IntegrityError so calling code can handle it specifically
            raise
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error creating {self.model.__name__}: {e}", exc_info=True)
            raise

    @check_local_db
    async def get(self, id: Any, *, db: AsyncSession = None) -> ModelType | None:
        """Get a single record by its primary key."""
        stmt = select(self.model).where(self.model.id == id)
        result = await db.execute(stmt)
        return result.scalars().first()

    @check_local_db
    async def get_by_attributes(
        self, *, db: AsyncSession = None, **kwargs
    ) -> ModelType | None:
        """Get a single record by a set of attributes."""
        options_to_load = kwargs.pop("options", None)

        stmt = select(self.model).filter_by(**kwargs)
        if options_to_load:
            stmt = stmt.options(*options_to_load)

        result = await db.execute(stmt)
        return result.scalars().first()

    @check_local_db
    async def update(
        self,
        db_obj: ModelType,
        update_data: dict[str, Any],
        *,
        db: AsyncSession = None,
    ) -> ModelType:
        """Update an existing record in the database."""

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        try:
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(
                f"Error updating {self.model.__name__} with id {db_obj.id}: {e}",
                exc_info=True,
            )
            raise

    @check_local_db
    async def remove(self, id: Any, *, db: AsyncSession = None) -> ModelType | None:
        """Remove a record from the database by its primary key."""
        obj = await self.get(id=id, db=db)
        if obj:
            try:
                await db.delete(obj)
                await db.commit()
                return obj
            except SQLAlchemyError as e:
                await db.rollback()
                logger.error(
                    f"Error removing {self.model.__name__} with id {id}: {e}",
                    exc_info=True,
                )
                raise
        return None
