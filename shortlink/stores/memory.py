"""In-memory URL store, used for tests and local runs."""

import threading
from typing import Dict

from ..core.exceptions import DuplicateSlugError, NotFoundError
from .base import URLStore


class MemoryURLStore(URLStore):
    """Dict-backed store with a reverse index for idempotent shortening."""

    def __init__(self):
        self._urls: Dict[str, str] = {}
        self._slugs: Dict[str, str] = {}
        self._lock = threading.Lock()

    def insert(self, slug: str, url: str) -> None:
        """Insert a new mapping.

        Args:
            slug: The slug.
            url: The original long URL.

        Raises:
            DuplicateSlugError: If the slug is already taken.
        """
        with self._lock:
            if slug in self._urls:
                raise DuplicateSlugError(slug)
            self._urls[slug] = url
            # first slug wins for the reverse lookup
            self._slugs.setdefault(url, slug)

    def get(self, slug: str) -> str:
        """Get the original URL for a slug.

        Args:
            slug: The slug.

        Returns:
            The original URL.

        Raises:
            NotFoundError: If the slug is unknown.
        """
        with self._lock:
            try:
                return self._urls[slug]
            except KeyError:
                raise NotFoundError(f"No URL for slug: {slug}") from None

    def find_by_url(self, url: str) -> str:
        """Get the slug stored for a URL.

        When a URL is stored under several slugs, the first one inserted
        is returned.

        Args:
            url: The original URL, compared literally.

        Returns:
            The slug.

        Raises:
            NotFoundError: If the URL was never shortened.
        """
        with self._lock:
            try:
                return self._slugs[url]
            except KeyError:
                raise NotFoundError(f"No slug for URL: {url}") from None

    def ping(self) -> bool:
        """Always reachable."""
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)
