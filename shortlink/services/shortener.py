"""Business logic service for URL shortener."""

import logging
from typing import Optional

from ..core.exceptions import DuplicateSlugError, NotFoundError, SlugConflictError
from ..models.url import URLMapping
from ..stores.base import URLStore
from ..utils.shortener import RESERVED_SLUGS, SlugAssigner, create_short_url


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        store: URLStore,
        assigner: SlugAssigner,
        base_url: str = "http://localhost:8080/",
        idempotent: bool = True,
        max_attempts: int = 5,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize URL shortener service.

        Args:
            store: URL store instance
            assigner: Slug assigner
            base_url: Base URL prepended to slugs in responses
            idempotent: Reuse the existing slug when a URL is shortened again
            max_attempts: Maximum slugs tried when a random slug collides
            logger: Optional logger
        """
        self.store = store
        self.assigner = assigner
        self.base_url = base_url
        self.idempotent = idempotent
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    def shorten(self, url: str) -> URLMapping:
        """Get or create the mapping for a URL.

        Args:
            url: The original long URL

        Returns:
            The stored mapping

        Raises:
            SlugConflictError: If no free slug could be assigned
            StoreError: If the store failed
        """
        if self.idempotent:
            try:
                slug = self.store.find_by_url(url)
                self.logger.debug(f"Reusing slug {slug} for {url}")
                return URLMapping(slug=slug, original_url=url)
            except NotFoundError:
                pass

        attempts = 1 if self.assigner.deterministic else self.max_attempts
        for attempt in range(1, attempts + 1):
            slug = self.assigner.assign(url)
            if slug in RESERVED_SLUGS:
                self.logger.warning(
                    f"Slug {slug} is a reserved path (attempt {attempt}/{attempts})"
                )
                continue
            try:
                self.store.insert(slug, url)
            except DuplicateSlugError:
                if self._maps_to(slug, url):
                    # same URL already stored under this slug
                    return URLMapping(slug=slug, original_url=url)
                self.logger.warning(
                    f"Slug collision for {url} on {slug} (attempt {attempt}/{attempts})"
                )
                continue
            self.logger.info(f"Shortened url {url} to {self.short_url(slug)}")
            return URLMapping(slug=slug, original_url=url)

        raise SlugConflictError(url, attempts)

    def resolve(self, slug: str) -> str:
        """Get the original URL for a slug.

        Raises:
            NotFoundError: If the slug is unknown
        """
        url = self.store.get(slug)
        self.logger.info(f"Redirected url {self.short_url(slug)} to {url}")
        return url

    def short_url(self, slug: str) -> str:
        return create_short_url(self.base_url, slug)

    def _maps_to(self, slug: str, url: str) -> bool:
        try:
            return self.store.get(slug) == url
        except NotFoundError:
            return False
