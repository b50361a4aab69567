"""
Movie model: the locally cached copy of an OMDb title.

A movie row is created the first time any user references its IMDb id and is
shared by every watchlist entry and review pointing at it. Rows are never
refreshed from the provider and never deleted by the service.

Architecture:
    Movie ←→ WatchlistEntry ←→ User
    Movie ←→ Review ←→ User
"""

from sqlalchemy import Column, String, UniqueConstraint
from sqlalchemy.orm import relationship

from movie_tracker.models.base import Base, TimestampMixin, UUIDMixin, table_args


class Movie(Base, UUIDMixin, TimestampMixin):
    """Canonical local record for one IMDb title."""

    __tablename__ = "movies"
    __table_args__ = table_args(
        UniqueConstraint("imdb_id", name="uq_movies_imdb_id"),
    )

    imdb_id = Column(
        String(20),
        nullable=False,
        comment="IMDb identifier (e.g. 'tt0111161'), the natural key of the movie",
    )

    title = Column(
        String(255),
        nullable=False,
        comment="Display title as reported by the catalog or the client",
    )

    year = Column(
        String(20),
        nullable=True,
        comment="Release-year label, e.g. '1994' or '2010–2013'",
    )

    poster = Column(
        String(1024),
        nullable=True,
        comment="Poster image URL",
    )

    watchlist_entries = relationship(
        "WatchlistEntry",
        back_populates="movie",
        doc="Watchlist entries referencing this movie",
    )

    reviews = relationship(
        "Review",
        back_populates="movie",
        doc="Reviews posted about this movie",
    )

    def __repr__(self):
        return (
            f"<Movie(id={self.id}, imdb_id='{self.imdb_id}', title='{self.title}')>"
        )
