"""
Base configurations and mixins for database models.

Provides the declarative base, timestamp and UUID primary-key mixins, and the
optional schema the tables live in. Column types are kept dialect-neutral so
the same models run on PostgreSQL in production and SQLite in tests.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.functions import now as db_now

from movie_tracker.config import settings


def utc_now() -> datetime:
    return datetime.now(UTC)


# Create the base class for all models
Base = declarative_base()


class TimestampMixin:
    """
    Adds created_at and updated_at columns.

    Values are stamped by the application with microsecond precision so that
    "most recent first" listings are stable; the database default covers rows
    inserted outside the ORM.
    """

    created_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=db_now(),
        nullable=False,
        comment="Timestamp when the record was created",
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=db_now(),
        onupdate=utc_now,
        nullable=False,
        comment="Timestamp when the record was last updated",
    )


class UUIDMixin:
    """UUID4 primary key, generated on insert and never reused."""

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True,
        comment="Primary key using UUID4 format",
    )


SCHEMA_NAME = settings.schema_name


def table_args(*args) -> tuple:
    """Append the schema option to a model's ``__table_args__`` when configured."""
    if SCHEMA_NAME:
        return (*args, {"schema": SCHEMA_NAME})
    return args


def qualified(column_path: str) -> str:
    """Schema-qualify a ``table.column`` foreign key target."""
    return f"{SCHEMA_NAME}.{column_path}" if SCHEMA_NAME else column_path


__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "SCHEMA_NAME",
    "qualified",
    "table_args",
    "utc_now",
]
