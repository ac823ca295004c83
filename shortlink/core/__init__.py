"""Core package - configuration, errors and database utilities."""

from .config import Settings, get_settings
from .database import connect_with_retry, create_db_engine, engine_from_settings
from .exceptions import (
    ShortenerError,
    NotFoundError,
    StoreError,
    DuplicateSlugError,
    SlugConflictError,
    StartupError,
)

__all__ = [
    "Settings",
    "get_settings",
    "connect_with_retry",
    "create_db_engine",
    "engine_from_settings",
    "ShortenerError",
    "NotFoundError",
    "StoreError",
    "DuplicateSlugError",
    "SlugConflictError",
    "StartupError",
]
