"""Relational URL store.

This module stores mappings in a single ``urls`` table through a
SQLAlchemy engine. PostgreSQL is the production target; SQLite works
for tests and local runs.
"""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..core.exceptions import DuplicateSlugError, NotFoundError, StoreError
from ..utils.shortener import DEFAULT_SLUG_LENGTH
from .base import URLStore

logger = logging.getLogger(__name__)

# PostgreSQL text columns cannot hold NUL, so no stored row contains it
NUL = "\x00"


class SQLURLStore(URLStore):
    """URL store backed by a relational database."""

    def __init__(self, engine: Engine, slug_length: int = DEFAULT_SLUG_LENGTH):
        """Initialize the store.

        Args:
            engine: SQLAlchemy engine, already connected.
            slug_length: Width of the slug column.
        """
        self.engine = engine
        self.slug_length = slug_length

    def init_schema(self) -> None:
        """Initialize database tables."""
        create_table_sql = f"""
        CREATE TABLE IF NOT EXISTS urls (
            slug CHAR({self.slug_length}) PRIMARY KEY,
            original_url TEXT NOT NULL
        )
        """
        try:
            with self.engine.begin() as conn:
                conn.execute(text(create_table_sql))
                if self.engine.dialect.name == "postgresql":
                    # hash index, long URLs overflow a btree row
                    conn.execute(
                        text(
                            "CREATE INDEX IF NOT EXISTS idx_urls_original_url "
                            "ON urls USING hash (original_url)"
                        )
                    )
            logger.info("Database initialized successfully")
        except SQLAlchemyError as e:
            logger.error(f"Database initialization failed: {e}")
            raise StoreError(f"Database initialization failed: {e}") from e

    def execute(self, query: str, params: Optional[dict] = None) -> Optional[str]:
        """Execute a SQL query.

        Args:
            query: SQL query string.
            params: Query parameters.

        Returns:
            First column of the first row for SELECT queries, None otherwise.
        """
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(query), params or {})
                if result.returns_rows:
                    return result.scalar()
                return None
        except (SQLAlchemyError, ValueError) as e:
            # psycopg2 raises a bare ValueError for values it cannot quote
            logger.error(f"Query execution failed: {e}")
            raise StoreError(str(e)) from e

    def insert(self, slug: str, url: str) -> None:
        """Insert a new mapping.

        Args:
            slug: The slug, primary key of the row.
            url: The original long URL.

        Raises:
            DuplicateSlugError: If the slug is already taken.
            StoreError: If the insert failed for any other reason.
        """
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    text("INSERT INTO urls (slug, original_url) VALUES (:slug, :url)"),
                    {"slug": slug, "url": url},
                )
        except IntegrityError as e:
            logger.warning(f"Slug already exists: {slug}")
            raise DuplicateSlugError(slug) from e
        except (SQLAlchemyError, ValueError) as e:
            logger.error(f"Error inserting URL: {e}")
            raise StoreError(f"Error inserting URL: {e}") from e

    def get(self, slug: str) -> str:
        """Get the original URL for a slug.

        Args:
            slug: The slug.

        Returns:
            The original URL.

        Raises:
            NotFoundError: If no row has this slug.
        """
        if NUL in slug:
            raise NotFoundError(f"No URL for slug: {slug!r}")
        url = self.execute(
            "SELECT original_url FROM urls WHERE slug = :slug", {"slug": slug}
        )
        if url is None:
            raise NotFoundError(f"No URL for slug: {slug}")
        return url

    def find_by_url(self, url: str) -> str:
        """Get the slug stored for a URL.

        When a URL is stored under several slugs, the lowest slug is returned.

        Args:
            url: The original URL, compared literally.

        Returns:
            The slug.

        Raises:
            NotFoundError: If the URL was never shortened.
        """
        if NUL in url:
            raise NotFoundError(f"No slug for URL: {url!r}")
        slug = self.execute(
            "SELECT slug FROM urls WHERE original_url = :url ORDER BY slug LIMIT 1",
            {"url": url},
        )
        if slug is None:
            raise NotFoundError(f"No slug for URL: {url}")
        return slug.rstrip()

    def ping(self) -> bool:
        """Check if the database answers a trivial query.

        Returns:
            True if reachable, False otherwise.
        """
        try:
            self.execute("SELECT 1")
        except StoreError:
            return False
        return True

    def close(self) -> None:
        """Close database connections."""
        self.engine.dispose()
