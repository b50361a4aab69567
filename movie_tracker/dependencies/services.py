"""
Service providers for route handlers.

Every service is built per request around the session factory of the
application's database handle, and the resolver additionally receives the
process-wide movie catalog stored on ``app.state``.
"""

from fastapi import Depends, Request

from movie_tracker.db import AppDatabase, get_database
from movie_tracker.db_handlers import UserDBHandler
from movie_tracker.services.catalog_interface import MovieCatalog
from movie_tracker.services.listing_service import ListingService
from movie_tracker.services.movie_resolver import MovieResolver
from movie_tracker.services.review_service import ReviewService
from movie_tracker.services.watchlist_service import WatchlistService


def get_catalog(request: Request) -> MovieCatalog:
    return request.app.state.catalog


def get_user_handler(database: AppDatabase = Depends(get_database)) -> UserDBHandler:
    return UserDBHandler(database.session_factory)


def get_movie_resolver(
    database: AppDatabase = Depends(get_database),
    catalog: MovieCatalog = Depends(get_catalog),
) -> MovieResolver:
    return MovieResolver(catalog, database.session_factory)


def get_watchlist_service(
    database: AppDatabase = Depends(get_database),
) -> WatchlistService:
    return WatchlistService(database.session_factory)


def get_review_service(database: AppDatabase = Depends(get_database)) -> ReviewService:
    return ReviewService(database.session_factory)


def get_listing_service(
    database: AppDatabase = Depends(get_database),
) -> ListingService:
    return ListingService(database.session_factory)
