"""
Review model: a user's rating and optional comment on a movie.

Ratings are integers in the closed range [1, 10]; the check constraint mirrors
the service-level validation. A user may post more than one review for the same
movie.
"""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import relationship

from movie_tracker.models.base import (
    Base,
    TimestampMixin,
    UUIDMixin,
    qualified,
    table_args,
)

MIN_RATING = 1
MAX_RATING = 10


class Review(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "reviews"
    __table_args__ = table_args(
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}",
            name="ck_reviews_rating_range",
        ),
        Index("ix_reviews_user_id", "user_id"),
        Index("ix_reviews_movie_id", "movie_id"),
    )

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey(qualified("users.id"), ondelete="CASCADE"),
        nullable=False,
        comment="Author of the review",
    )

    movie_id = Column(
        Uuid(as_uuid=True),
        ForeignKey(qualified("movies.id"), ondelete="CASCADE"),
        nullable=False,
        comment="Reviewed movie",
    )

    rating = Column(
        Integer,
        nullable=False,
        comment="Score between 1 and 10 inclusive",
    )

    comment = Column(
        Text,
        nullable=True,
        comment="Optional free-text review",
    )

    user = relationship("User", back_populates="reviews")

    movie = relationship("Movie", back_populates="reviews")

    def __repr__(self):
        return (
            f"<Review(id={self.id}, user_id={self.user_id}, "
            f"movie_id={self.movie_id}, rating={self.rating})>"
        )
