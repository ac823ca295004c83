"""Abstract base class for URL store implementations."""

from abc import ABC, abstractmethod


class URLStore(ABC):
    """Persistence for slug to URL mappings."""

    @abstractmethod
    def insert(self, slug: str, url: str) -> None:
        """Store a new mapping.

        Args:
            slug: The slug to use
            url: The original long URL

        Raises:
            DuplicateSlugError: If the slug is already mapped
            StoreError: If the store failed
        """

    @abstractmethod
    def get(self, slug: str) -> str:
        """Get the original URL for a slug.

        Args:
            slug: The slug to lookup

        Returns:
            The original URL

        Raises:
            NotFoundError: If no mapping exists
            StoreError: If the store failed
        """

    @abstractmethod
    def find_by_url(self, url: str) -> str:
        """Get the slug already assigned to a URL.

        URLs are compared literally, without normalization. When a URL is
        stored under several slugs, each implementation documents which one
        it returns; repeated calls return the same slug.

        Args:
            url: The original URL

        Returns:
            The slug

        Raises:
            NotFoundError: If the URL was never shortened
            StoreError: If the store failed
        """

    def init_schema(self) -> None:
        """Create backing tables if they do not exist."""

    @abstractmethod
    def ping(self) -> bool:
        """Check if the store is reachable."""

    def close(self) -> None:
        """Release store resources."""
