from movie_tracker.dependencies.auth import get_current_user, get_current_user_optional
from movie_tracker.dependencies.services import (
    get_catalog,
    get_listing_service,
    get_movie_resolver,
    get_review_service,
    get_user_handler,
    get_watchlist_service,
)

__all__ = [
    "get_current_user",
    "get_current_user_optional",
    "get_catalog",
    "get_listing_service",
    "get_movie_resolver",
    "get_review_service",
    "get_user_handler",
    "get_watchlist_service",
]
