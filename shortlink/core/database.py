"""Database module for URL Shortener Service.

This module creates the SQLAlchemy engine and opens the first
connection with a bounded retry, so the service fails fast when the
datastore never comes up.
"""

import logging
import time
from typing import Callable, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from .config import Settings
from .exceptions import StartupError

logger = logging.getLogger(__name__)


def create_db_engine(url: str) -> Engine:
    """Create a SQLAlchemy engine for the given URL.

    In-memory SQLite databases share one connection across threads,
    everything else gets a regular connection pool.

    Args:
        url: SQLAlchemy database URL.

    Returns:
        SQLAlchemy engine.
    """
    if url.startswith("sqlite") and (url.endswith(":memory:") or url in ("sqlite://", "sqlite:///")):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, pool_pre_ping=True)


def connect_with_retry(
    url: str,
    attempts: int = 3,
    delay: float = 3.0,
    engine_factory: Callable[[str], Engine] = create_db_engine,
    sleep: Optional[Callable[[float], None]] = None,
) -> Engine:
    """Create an engine and verify the datastore answers.

    Args:
        url: SQLAlchemy database URL.
        attempts: Number of connection attempts.
        delay: Seconds to wait between attempts.
        engine_factory: Callable building an engine from a URL.
        sleep: Callable used to wait between attempts. Defaults to time.sleep.

    Returns:
        Connected SQLAlchemy engine.

    Raises:
        StartupError: If every attempt failed.
    """
    sleep = sleep or time.sleep
    last_error: Optional[Exception] = None
    for attempt in range(1, attempts + 1):
        engine = None
        try:
            engine = engine_factory(url)
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Successfully connected to the database.")
            return engine
        except SQLAlchemyError as e:
            last_error = e
            if engine is not None:
                engine.dispose()
            logger.warning(
                f"Error connecting to the database (attempt {attempt}/{attempts}): {e}"
            )
        if attempt < attempts:
            logger.info(f"Retrying in {delay} seconds...")
            sleep(delay)
    raise StartupError(f"Error initializing the database: {last_error}")


def engine_from_settings(settings: Settings, **kwargs) -> Engine:
    """Connect to the database described by settings."""
    return connect_with_retry(
        settings.sqlalchemy_url,
        attempts=settings.connect_retries,
        delay=settings.connect_retry_delay,
        **kwargs,
    )
