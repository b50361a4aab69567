# Movie resolution: find-or-create the canonical local movie for an IMDb id

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_tracker.db_handlers import MovieDBHandler, check_local_db
from movie_tracker.exceptions import (
    MovieNotFoundError,
    ReferenceNotFoundError,
    ValidationFailedError,
)
from movie_tracker.models import Movie
from movie_tracker.schemas import MovieDescriptor
from movie_tracker.services.catalog_interface import MovieCatalog
from movie_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


class MovieResolver:
    """
    Guarantees a single Movie row per IMDb id.

    Lookup order: local store → client-supplied fallback → catalog. An existing
    row is returned untouched; metadata is never refreshed on read. Creation
    converges under concurrent callers: losing the insert race on the unique
    imdb_id constraint is treated as "someone else created it" and the winner's
    row is returned.
    """

    def __init__(
        self,
        catalog: MovieCatalog,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ):
        self.catalog = catalog
        self.session_factory = session_factory
        self.movie_handler = MovieDBHandler(session_factory)

    @check_local_db
    async def resolve(
        self,
        imdb_id: str,
        fallback: MovieDescriptor | None = None,
        *,
        db: AsyncSession = None,
    ) -> Movie:
        # --- Step 1: Existing row wins ---
        movie = await self.movie_handler.get_by_imdb_id(imdb_id, db=db)
        if movie is not None:
            return movie

        # --- Step 2: Describe the new movie from the caller or the catalog ---
        if fallback is not None:
            descriptor = fallback
            source = "client"
        else:
            try:
                descriptor = await self.catalog.fetch_by_imdb_id(imdb_id)
            except MovieNotFoundError as e:
                raise ReferenceNotFoundError(imdb_id) from e
            source = "catalog"

        # The requested id is the natural key, whatever the descriptor carries
        if descriptor.imdb_id != imdb_id:
            descriptor = descriptor.model_copy(update={"imdb_id": imdb_id})

        # --- Step 3: Insert, converging on the existing row if we lost a race ---
        return await self._create_or_get_existing(descriptor, source, db=db)

    @check_local_db
    async def search_and_resolve(self, title: str, *, db: AsyncSession = None) -> Movie:
        """Look a title up in the catalog and return the matching local movie."""
        title = title.strip()
        if not title:
            raise ValidationFailedError("Title must not be blank")

        try:
            descriptor = await self.catalog.search_by_title(title)
        except MovieNotFoundError as e:
            raise ReferenceNotFoundError(
                title, f"No movie matches title '{title}'"
            ) from e
        return await self.resolve(descriptor.imdb_id, fallback=descriptor, db=db)

    async def _create_or_get_existing(
        self, descriptor: MovieDescriptor, source: str, *, db: AsyncSession
    ) -> Movie:
        try:
            movie = await self.movie_handler.create(descriptor.to_row(), db=db)
            logger.info(
                f"Created movie {movie.id} for {descriptor.imdb_id} from {source} metadata"
            )
            return movie
        except IntegrityError:
            # create() has already rolled the session back
            logger.warning(
                f"Movie {descriptor.imdb_id} was created concurrently, fetching existing row"
            )
            existing = await self.movie_handler.get_by_imdb_id(descriptor.imdb_id, db=db)
            if existing is None:
                logger.error(
                    f"Could not resolve IntegrityError for movie {descriptor.imdb_id}. Re-raising."
                )
                raise
            return existing
