from movie_tracker.db_handlers.base import BaseDBHandler, check_local_db
from movie_tracker.db_handlers.movie import MovieDBHandler
from movie_tracker.db_handlers.review import ReviewDBHandler
from movie_tracker.db_handlers.user import UserDBHandler
from movie_tracker.db_handlers.watchlist import WatchlistDBHandler

__all__ = [
    "BaseDBHandler",
    "check_local_db",
    "MovieDBHandler",
    "ReviewDBHandler",
    "UserDBHandler",
    "WatchlistDBHandler",
]
