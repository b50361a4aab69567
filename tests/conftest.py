"""
This file contains shared fixtures and configuration for the test suite.

Pytest will automatically discover and use the fixtures defined in this file.

Every test that touches storage gets its own in-memory SQLite database, so the
UNIQUE and CHECK constraints of the real schema are enforced. The OMDb gateway
is replaced by StubCatalog, which records every call it receives.
"""

import os

# Tests run against SQLite, which has no schemas
os.environ.pop("MOVIE_TRACKER_SCHEMA", None)

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from movie_tracker.db import AppDatabase
from movie_tracker.db_handlers import UserDBHandler
from movie_tracker.services.listing_service import ListingService
from movie_tracker.services.movie_resolver import MovieResolver
from movie_tracker.services.review_service import ReviewService
from movie_tracker.services.watchlist_service import WatchlistService

from tests.stubs import (
    DARK_KNIGHT,
    GODFATHER,
    SHAWSHANK,
    TEST_DATABASE_URL,
    StubCatalog,
)


@pytest_asyncio.fixture
async def database():
    """A fresh in-memory database with all tables created."""
    database = AppDatabase(TEST_DATABASE_URL)
    await database.init_db()
    yield database
    await database.close()


@pytest.fixture
def catalog() -> StubCatalog:
    return StubCatalog(movies=[SHAWSHANK, GODFATHER, DARK_KNIGHT])


@pytest.fixture
def resolver(database: AppDatabase, catalog: StubCatalog) -> MovieResolver:
    return MovieResolver(catalog, database.session_factory)


@pytest.fixture
def watchlist_service(database: AppDatabase) -> WatchlistService:
    return WatchlistService(database.session_factory)


@pytest.fixture
def review_service(database: AppDatabase) -> ReviewService:
    return ReviewService(database.session_factory)


@pytest.fixture
def listing_service(database: AppDatabase) -> ListingService:
    return ListingService(database.session_factory)


async def _create_user(database: AppDatabase, username: str):
    return await UserDBHandler(database.session_factory).create(
        {
            "username": username,
            "email": f"{username}@example.com",
            "hashed_password": "not-a-real-hash",
        }
    )


@pytest_asyncio.fixture
async def alice(database: AppDatabase):
    return await _create_user(database, "alice")


@pytest_asyncio.fixture
async def bob(database: AppDatabase):
    return await _create_user(database, "bob")


@pytest_asyncio.fixture
async def shawshank(resolver: MovieResolver):
    return await resolver.resolve(SHAWSHANK.imdb_id)


@pytest_asyncio.fixture
async def godfather(resolver: MovieResolver):
    return await resolver.resolve(GODFATHER.imdb_id)


@pytest.fixture
def api_catalog() -> StubCatalog:
    return StubCatalog(movies=[SHAWSHANK, GODFATHER, DARK_KNIGHT])


@pytest.fixture
def client(api_catalog: StubCatalog):
    """
    Test client for an application backed by its own in-memory database.
    The TestClient handles the application's lifespan events (startup/shutdown).
    """
    from main import create_app

    app = create_app(database_url=TEST_DATABASE_URL, catalog=api_catalog)
    with TestClient(app) as c:
        yield c
