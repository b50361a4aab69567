"""
Movie API Routes - catalog lookups that materialize local movie records.

Both endpoints return the canonical local movie, creating it on first sight.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from movie_tracker.db import get_app_db
from movie_tracker.dependencies import (
    get_current_user,
    get_current_user_optional,
    get_movie_resolver,
)
from movie_tracker.models import User
from movie_tracker.schemas import MovieInfo, MovieReference, error_responses
from movie_tracker.services.movie_resolver import MovieResolver
from movie_tracker.utils.logger import setup_logger

logger = setup_logger("api.movies")

router = APIRouter(
    prefix="/api/movies",
    tags=["Movies"],
    responses=error_responses(400, 401, 404, 422, 502),
)


@router.get("/search", response_model=MovieInfo)
async def search_movie(
    title: str = Query(..., min_length=1, description="Movie title to look up"),
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_app_db),
    resolver: MovieResolver = Depends(get_movie_resolver),
):
    """Find a movie by title in the catalog and return its local record."""
    requester = current_user.username if current_user else "anonymous user"
    logger.info(f"Title search '{title}' by {requester}")
    movie = await resolver.search_and_resolve(title, db=db)
    return MovieInfo.model_validate(movie)


@router.post("/resolve", response_model=MovieInfo)
async def resolve_movie(
    reference: MovieReference,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    resolver: MovieResolver = Depends(get_movie_resolver),
):
    """
    Return the local movie for an IMDb id, creating it if needed.

    Client-supplied metadata is used only when the movie is new; otherwise the
    catalog is queried.
    """
    movie = await resolver.resolve(
        reference.imdb_id, reference.fallback_descriptor(), db=db
    )
    return MovieInfo.model_validate(movie)
