"""
Authentication utilities with JWT tokens and bcrypt password hashing.

- bcrypt with salt for password hashing
- HS256 JWT signing, secret and lifetime taken from settings
- The token subject is the user's UUID
"""

import uuid
from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt


def _get_settings():
    """Lazy import of settings to avoid circular import."""
    from movie_tracker.config import settings

    return settings


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a hashed password."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )


def get_password_hash(password: str) -> str:
    """Hash a plain text password using bcrypt."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    hashed_password = bcrypt.hashpw(password=pwd_bytes, salt=salt)
    return hashed_password.decode("utf-8")


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token with the given data."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(
            minutes=_get_settings().access_token_expire_minutes
        )

    to_encode.update({"exp": expire})
    settings = _get_settings()
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def create_user_token(user_id: uuid.UUID) -> str:
    return create_access_token(data={"sub": str(user_id)})


def decode_access_token(token: str) -> dict | None:
    """Decode and verify a JWT access token."""
    settings = _get_settings()
    try:
        return jwt.decode(
            token, settings.secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None


def extract_user_id_from_token(token: str) -> uuid.UUID | None:
    """Extract the user id carried in the token's "sub" claim."""
    payload = decode_access_token(token)
    if payload is None:
        return None
    subject = payload.get("sub")
    if not subject:
        return None
    try:
        return uuid.UUID(subject)
    except (TypeError, ValueError):
        return None
