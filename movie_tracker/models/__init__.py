"""
Database models for the movie tracker service.

Architecture: User → (WatchlistEntry | Review) → Movie.
"""

from movie_tracker.models.movie import Movie
from movie_tracker.models.review import Review
from movie_tracker.models.user import User
from movie_tracker.models.watchlist_entry import WatchlistEntry

__all__ = [
    # Core models
    "User",
    "Movie",
    # Association models
    "WatchlistEntry",
    "Review",
]
