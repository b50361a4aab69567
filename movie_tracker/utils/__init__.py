"""
Common utilities package for the movie tracker service: authentication
helpers and logging setup.
"""

from movie_tracker.utils.auth import (
    create_access_token,
    create_user_token,
    decode_access_token,
    extract_user_id_from_token,
    get_password_hash,
    verify_password,
)
from movie_tracker.utils.logger import setup_logger

__all__ = [
    # Authentication utilities
    "create_access_token",
    "create_user_token",
    "decode_access_token",
    "extract_user_id_from_token",
    "get_password_hash",
    "verify_password",
    # Logging utilities
    "setup_logger",
]
