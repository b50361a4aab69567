"""
Watchlist API Routes - a user's personal list of movies to watch.

All routes act on the authenticated user's own watchlist only.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from movie_tracker.db import get_app_db
from movie_tracker.dependencies import (
    get_current_user,
    get_listing_service,
    get_movie_resolver,
    get_watchlist_service,
)
from movie_tracker.models import User
from movie_tracker.schemas import (
    MessageResponse,
    MovieInfo,
    WatchlistAddRequest,
    WatchlistEntryInfo,
    WatchlistItem,
    error_responses,
)
from movie_tracker.services.listing_service import ListingService
from movie_tracker.services.movie_resolver import MovieResolver
from movie_tracker.services.watchlist_service import WatchlistService

router = APIRouter(
    prefix="/api/watchlist",
    tags=["Watchlist"],
    responses=error_responses(401, 404, 409, 422, 502),
)


@router.post("", response_model=WatchlistItem, status_code=status.HTTP_201_CREATED)
async def add_to_watchlist(
    request_data: WatchlistAddRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    resolver: MovieResolver = Depends(get_movie_resolver),
    watchlist_service: WatchlistService = Depends(get_watchlist_service),
):
    """Resolve the movie (creating it if new) and add it to the watchlist."""
    user_id = current_user.id
    movie = await resolver.resolve(
        request_data.imdb_id, request_data.fallback_descriptor(), db=db
    )
    movie_info = MovieInfo.model_validate(movie)

    entry = await watchlist_service.add(user_id, movie, db=db)
    return WatchlistItem(entry=WatchlistEntryInfo.model_validate(entry), movie=movie_info)


@router.get("", response_model=list[WatchlistItem])
async def get_watchlist(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    listing_service: ListingService = Depends(get_listing_service),
):
    """The user's watchlist with full movie details, oldest entry first."""
    return await listing_service.list_watchlist_for_user(current_user.id, db=db)


@router.delete("/{entry_id}", response_model=MessageResponse)
async def remove_from_watchlist(
    entry_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
    watchlist_service: WatchlistService = Depends(get_watchlist_service),
):
    await watchlist_service.remove(current_user.id, entry_id, db=db)
    return MessageResponse(message="Movie removed from watchlist")
