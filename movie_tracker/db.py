import argparse
import asyncio
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from movie_tracker import models  # noqa: F401
from movie_tracker.config import settings
from movie_tracker.models.base import Base
from movie_tracker.utils.logger import setup_logger

logger = setup_logger("db")

POSTGRES_PREFIX = "postgresql+asyncpg://"
SQLITE_PREFIX = "sqlite+aiosqlite://"


def normalize_database_url(database_url: str | None) -> str:
    """Return a URL with an async driver, or raise for unsupported databases."""
    if not database_url:
        raise ValueError(
            "MOVIE_TRACKER_DATABASE_URL environment variable not set for Application DB"
        )
    if database_url.startswith((POSTGRES_PREFIX, SQLITE_PREFIX)):
        return database_url
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", POSTGRES_PREFIX, 1)
    raise ValueError(f"Unsupported database URL prefix: {database_url}")


def _engine_options(database_url: str) -> dict:
    if database_url.startswith(SQLITE_PREFIX):
        options = {"echo": False, "connect_args": {"check_same_thread": False}}
        if database_url in (SQLITE_PREFIX, f"{SQLITE_PREFIX}/:memory:"):
            # One shared connection, otherwise every session sees an empty database
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,
        "pool_size": 20,
        "max_overflow": 30,
        "pool_timeout": 60,
        "pool_recycle": 300,
        "echo": False,
        "connect_args": {"timeout": 30},
    }


class AppDatabase:
    """
    Process-wide handle on the application database.

    Created once at startup, shared through ``app.state`` and closed at
    shutdown. Handlers and services receive its session factory instead of
    reaching for a module-level engine.
    """

    def __init__(self, database_url: str | None, schema_name: str | None = None):
        self.database_url = normalize_database_url(database_url)
        self.schema_name = schema_name
        self.is_postgres = self.database_url.startswith(POSTGRES_PREFIX)
        logger.debug(f"Application DB URL: {self.database_url}")

        self.engine = create_async_engine(
            self.database_url, **_engine_options(self.database_url)
        )
        self.session_factory = async_sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def init_db(self) -> None:
        """Create the schema (PostgreSQL only) and all tables that do not exist."""
        if not Base.metadata.tables:
            logger.warning("Base.metadata.tables is EMPTY! No tables will be created.")

        async with self.engine.begin() as conn:
            if self.is_postgres and self.schema_name:
                await conn.execute(
                    text(f"CREATE SCHEMA IF NOT EXISTS {self.schema_name}")
                )
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Database schema initialized.")

    async def reset(self) -> None:
        """Drop and recreate every application table. Destroys all data."""
        logger.warning("Resetting the Application database. THIS IS DESTRUCTIVE.")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await self.init_db()

    async def list_tables(self) -> list[str]:
        async with self.engine.connect() as conn:
            table_names = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names(
                    schema=self.schema_name if self.is_postgres else None
                )
            )
        logger.debug(f"Tables in Application DB: {table_names}")
        return table_names

    async def check_connection(self) -> bool:
        """Performs a simple query to check actual DB connectivity."""
        async with self.session_factory() as session:
            try:
                result = await session.execute(text("SELECT 1"))
                if result.scalar_one() != 1:
                    raise RuntimeError("Test query returned an unexpected result.")
            except Exception as e:
                logger.error(f"Failed to execute test query: {e}", exc_info=True)
                raise RuntimeError("Database connectivity check failed.") from e
        logger.info("Successfully connected to Application DB.")
        return True

    async def close(self) -> None:
        logger.info("Closing database connections.")
        await self.engine.dispose()


# --- Dependencies for FastAPI ---
def get_database(request: Request) -> AppDatabase:
    return request.app.state.database


async def get_app_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with get_database(request).session_factory() as session:
        yield session


async def _run_action(action: str) -> None:
    database = AppDatabase(settings.app_database_url, settings.schema_name)
    try:
        if action == "init":
            await database.init_db()
        elif action == "reset":
            await database.reset()
        elif action == "list-tables":
            for name in await database.list_tables():
                print(name)
    finally:
        await database.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Movie tracker application database utility"
    )
    parser.add_argument(
        "action",
        choices=["init", "reset", "list-tables"],
        help="'init' to create missing tables, "
        "'reset' to drop and recreate all tables, "
        "'list-tables' to show the tables that exist.",
    )
    args = parser.parse_args()

    if args.action == "reset":
        confirm = input(
            "WARNING: This will delete all data in the Application DB. Are you sure? (yes/no): "
        )
        if confirm.lower() != "yes":
            logger.info("Application Database reset cancelled by user.")
            raise SystemExit(0)

    asyncio.run(_run_action(args.action))
    logger.info("Application Database utility script finished.")
