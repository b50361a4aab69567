import asyncio

import pytest
from sqlalchemy import func, select

from movie_tracker.db_handlers import MovieDBHandler
from movie_tracker.exceptions import (
    ReferenceNotFoundError,
    UpstreamUnavailableError,
    ValidationFailedError,
)
from movie_tracker.models import Movie
from movie_tracker.schemas import MovieDescriptor
from movie_tracker.services.movie_resolver import MovieResolver

from tests.stubs import SHAWSHANK, StubCatalog


async def count_movies(database, imdb_id: str) -> int:
    async with database.session_factory() as session:
        result = await session.execute(
            select(func.count()).select_from(Movie).where(Movie.imdb_id == imdb_id)
        )
        return result.scalar_one()


@pytest.mark.asyncio
async def test_fallback_descriptor_is_used_for_new_movie(database):
    """A client-supplied descriptor creates the movie without asking the catalog."""
    catalog = StubCatalog()
    resolver = MovieResolver(catalog, database.session_factory)
    fallback = MovieDescriptor(
        imdb_id="tt0111161",
        title="The Shawshank Redemption",
        year="1994",
        poster="https://example.com/client-poster.jpg",
    )

    movie = await resolver.resolve("tt0111161", fallback)

    assert movie.imdb_id == "tt0111161"
    assert movie.title == "The Shawshank Redemption"
    assert movie.year == "1994"
    assert movie.poster == "https://example.com/client-poster.jpg"
    assert catalog.calls == []

    # Second resolution finds the stored row and never calls the gateway
    again = await resolver.resolve("tt0111161")
    assert again.id == movie.id
    assert catalog.calls == []


@pytest.mark.asyncio
async def test_unknown_movie_is_fetched_from_catalog_once(resolver, catalog, database):
    first = await resolver.resolve(SHAWSHANK.imdb_id)
    second = await resolver.resolve(SHAWSHANK.imdb_id)

    assert first.id == second.id
    assert first.title == SHAWSHANK.title
    assert catalog.calls == [("imdb_id", SHAWSHANK.imdb_id)]
    assert await count_movies(database, SHAWSHANK.imdb_id) == 1


@pytest.mark.asyncio
async def test_existing_movie_is_not_overwritten_by_fallback(resolver, database):
    original = await resolver.resolve(SHAWSHANK.imdb_id)
    other_metadata = MovieDescriptor(
        imdb_id=SHAWSHANK.imdb_id, title="Some Other Title", year="2001"
    )

    again = await resolver.resolve(SHAWSHANK.imdb_id, other_metadata)

    assert again.id == original.id
    assert again.title == SHAWSHANK.title
    assert again.year == "1994"


@pytest.mark.asyncio
async def test_requested_imdb_id_wins_over_descriptor_id(database):
    catalog = StubCatalog()
    resolver = MovieResolver(catalog, database.session_factory)
    mismatched = MovieDescriptor(imdb_id="tt9999999", title="Typo Movie")

    movie = await resolver.resolve("tt1234567", mismatched)

    assert movie.imdb_id == "tt1234567"
    assert await count_movies(database, "tt9999999") == 0


@pytest.mark.asyncio
async def test_unknown_imdb_id_raises_reference_not_found(resolver, database):
    with pytest.raises(ReferenceNotFoundError) as exc_info:
        await resolver.resolve("tt0000000")

    assert exc_info.value.kind == "reference_not_found"
    assert await count_movies(database, "tt0000000") == 0


@pytest.mark.asyncio
async def test_upstream_failure_propagates_and_stores_nothing(database):
    catalog = StubCatalog(error=UpstreamUnavailableError("OMDb is down"))
    resolver = MovieResolver(catalog, database.session_factory)

    with pytest.raises(UpstreamUnavailableError):
        await resolver.resolve(SHAWSHANK.imdb_id)

    assert await count_movies(database, SHAWSHANK.imdb_id) == 0


@pytest.mark.asyncio
async def test_lost_insert_race_returns_existing_movie(database):
    """
    Simulate a concurrent creator: the row appears after our lookup but before
    our insert, so the insert violates the unique imdb_id constraint.
    """
    existing = await MovieDBHandler(database.session_factory).create(
        SHAWSHANK.to_row()
    )

    catalog = StubCatalog(movies=[SHAWSHANK])
    resolver = MovieResolver(catalog, database.session_factory)
    real_lookup = resolver.movie_handler.get_by_imdb_id
    lookups = []

    async def lookup_missing_first_time(imdb_id, *, db=None):
        lookups.append(imdb_id)
        if len(lookups) == 1:
            return None
        return await real_lookup(imdb_id, db=db)

    resolver.movie_handler.get_by_imdb_id = lookup_missing_first_time

    movie = await resolver.resolve(SHAWSHANK.imdb_id)

    assert movie.id == existing.id
    assert len(lookups) == 2
    assert await count_movies(database, SHAWSHANK.imdb_id) == 1


@pytest.mark.asyncio
async def test_search_and_resolve_creates_then_reuses(resolver, catalog, database):
    first = await resolver.search_and_resolve("The Shawshank Redemption")
    second = await resolver.search_and_resolve("the shawshank redemption")

    assert first.id == second.id
    assert first.imdb_id == SHAWSHANK.imdb_id
    # Title search always asks the catalog, but never fetches by id
    assert [kind for kind, _ in catalog.calls] == ["title", "title"]
    assert await count_movies(database, SHAWSHANK.imdb_id) == 1


@pytest.mark.asyncio
async def test_search_without_match_raises_reference_not_found(resolver):
    with pytest.raises(ReferenceNotFoundError):
        await resolver.search_and_resolve("Definitely Not A Movie")


class SlowCatalog(StubCatalog):
    """Holds every lookup open long enough for concurrent callers to overlap."""

    async def fetch_by_imdb_id(self, imdb_id):
        await asyncio.sleep(0.05)
        return await super().fetch_by_imdb_id(imdb_id)


@pytest.mark.asyncio
async def test_concurrent_resolves_converge_on_one_movie(database):
    catalog = SlowCatalog(movies=[SHAWSHANK])
    resolver = MovieResolver(catalog, database.session_factory)

    movies = await asyncio.gather(
        *(resolver.resolve(SHAWSHANK.imdb_id) for _ in range(8))
    )

    assert len({movie.id for movie in movies}) == 1
    assert await count_movies(database, SHAWSHANK.imdb_id) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
async def test_blank_title_is_rejected_before_catalog(resolver, catalog, title):
    with pytest.raises(ValidationFailedError):
        await resolver.search_and_resolve(title)

    assert catalog.calls == []
