"""
Abstract interface for movie metadata catalogs.

The resolver only depends on this interface, so the OMDb client can be swapped
for another provider or a stub.
"""

from abc import ABC, abstractmethod

from movie_tracker.schemas import MovieDescriptor


class MovieCatalog(ABC):
    """
    Read-only source of movie metadata.

    Implementations raise MovieNotFoundError when the provider has no match and
    UpstreamUnavailableError when the provider cannot be reached or answers
    with something unusable. They never retry.
    """

    @abstractmethod
    async def fetch_by_imdb_id(self, imdb_id: str) -> MovieDescriptor:
        """Look up a movie by its exact IMDb id."""

    @abstractmethod
    async def search_by_title(self, title: str) -> MovieDescriptor:
        """Look up the best match for a free-text title."""

    async def close(self):
        """Release any underlying connections. Default does nothing."""
        return
