"""
User model for authentication and ownership of watchlists and reviews.

Architecture:
    User → WatchlistEntry → Movie
    User → Review → Movie

Key Features:
    - bcrypt password hashing (only the hash is stored)
    - Unique username and unique email
    - Cascading ownership of watchlist entries and reviews
"""

from sqlalchemy import Column, Index, String
from sqlalchemy.orm import relationship

from movie_tracker.models.base import Base, TimestampMixin, UUIDMixin, table_args


class User(Base, UUIDMixin, TimestampMixin):
    """Registered account; created once at sign-up and read-only afterwards."""

    __tablename__ = "users"
    __table_args__ = table_args(
        Index("ix_users_username", "username", unique=True),
        Index("ix_users_email", "email", unique=True),
    )

    username = Column(
        String(50),
        nullable=False,
        comment="Unique public handle",
    )

    email = Column(
        String(255),
        nullable=False,
        comment="Unique contact address, used to log in",
    )

    hashed_password = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password for secure authentication",
    )

    watchlist_entries = relationship(
        "WatchlistEntry",
        back_populates="user",
        cascade="all, delete-orphan",
        doc="Movies this user saved to watch",
    )

    reviews = relationship(
        "Review",
        back_populates="user",
        cascade="all, delete-orphan",
        doc="Reviews written by this user",
    )

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
