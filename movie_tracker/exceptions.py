"""
Domain errors raised by the resolution and association services.

Each error carries a machine-checkable ``kind`` and the HTTP status the API
layer renders it with. Route handlers let these propagate; the application's
exception handler turns them into ``{"kind": ..., "detail": ...}`` responses.
"""

from fastapi import status


class MovieTrackerError(Exception):
    kind = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "detail": self.message}


class ValidationFailedError(MovieTrackerError):
    """A required field is missing or a value is out of range."""

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidScoreError(ValidationFailedError):
    def __init__(self, rating, *, minimum: int, maximum: int) -> None:
        super().__init__(
            f"Rating must be an integer between {minimum} and {maximum}, got {rating!r}"
        )
        self.rating = rating


class ReferenceNotFoundError(MovieTrackerError):
    """The IMDb id could not be resolved from the store, a fallback or OMDb."""

    kind = "reference_not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, imdb_id: str, message: str | None = None) -> None:
        super().__init__(message or f"Movie '{imdb_id}' not found")
        self.imdb_id = imdb_id


class DuplicateAssociationError(MovieTrackerError):
    kind = "duplicate_association"
    status_code = status.HTTP_409_CONFLICT


class NotFoundOrUnauthorizedError(MovieTrackerError):
    """Target is missing or owned by someone else; the two are not distinguished."""

    kind = "not_found_or_unauthorized"
    status_code = status.HTTP_404_NOT_FOUND


class AccountExistsError(MovieTrackerError):
    kind = "account_exists"
    status_code = status.HTTP_400_BAD_REQUEST


class MovieNotFoundError(MovieTrackerError):
    """OMDb answered but has no movie for the query."""

    kind = "reference_not_found"
    status_code = status.HTTP_404_NOT_FOUND


class UpstreamUnavailableError(MovieTrackerError):
    """OMDb could not be reached or returned something unusable."""

    kind = "upstream_unavailable"
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.upstream_status_code = status_code
