"""
Watchlist entry: the user ↔ movie association.

At most one entry exists per (user, movie) pair. The service checks for an
existing pair before inserting; the unique constraint is the durable backstop
when two requests race.
"""

from sqlalchemy import Column, ForeignKey, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from movie_tracker.models.base import (
    Base,
    TimestampMixin,
    UUIDMixin,
    qualified,
    table_args,
)


class WatchlistEntry(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "watchlist_entries"
    __table_args__ = table_args(
        UniqueConstraint("user_id", "movie_id", name="uq_watchlist_user_movie"),
        Index("ix_watchlist_user_id", "user_id"),
        Index("ix_watchlist_movie_id", "movie_id"),
    )

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey(qualified("users.id"), ondelete="CASCADE"),
        nullable=False,
        comment="Owner of the entry",
    )

    movie_id = Column(
        Uuid(as_uuid=True),
        ForeignKey(qualified("movies.id"), ondelete="CASCADE"),
        nullable=False,
        comment="Movie saved to the watchlist",
    )

    user = relationship("User", back_populates="watchlist_entries")

    movie = relationship("Movie", back_populates="watchlist_entries")

    def __repr__(self):
        return (
            f"<WatchlistEntry(id={self.id}, "
            f"user_id={self.user_id}, "
            f"movie_id={self.movie_id})>"
        )
