"""URL shortening utilities module.

This module handles the assignment of slugs to URLs. Two strategies are
available:

- ``hash``: the first characters of the URL's MD5 hex digest. The same
  URL always gets the same slug.
- ``random``: characters drawn from ``[a-zA-Z0-9]`` with an injected
  random generator. The same URL may get a different slug each time.

Neither strategy detects collisions on its own; the store's primary key
does, and the service decides what to do about it.
"""

import hashlib
import random
import string
from abc import ABC, abstractmethod
from typing import Optional

# Characters allowed in random slugs
ALPHABET = string.ascii_letters + string.digits

DEFAULT_SLUG_LENGTH = 6

# Paths served by the application itself, never usable as slugs
RESERVED_SLUGS = frozenset(
    {"shorten", "health", "docs", "docs/oauth2-redirect", "redoc", "openapi.json"}
)


class SlugAssigner(ABC):
    """Base class for slug assignment strategies."""

    deterministic = False

    def __init__(self, length: int = DEFAULT_SLUG_LENGTH):
        if length < 1:
            raise ValueError("Slug length must be positive")
        self.length = length

    @abstractmethod
    def assign(self, url: str) -> str:
        """Derive a slug for a URL.

        Args:
            url: The original URL.

        Returns:
            Slug string of ``self.length`` characters.
        """


class HashSlugAssigner(SlugAssigner):
    """Content-addressed slugs taken from the URL's MD5 hex digest."""

    deterministic = True

    def __init__(self, length: int = DEFAULT_SLUG_LENGTH):
        if length > 32:
            raise ValueError("Hash slugs cannot be longer than 32 characters")
        super().__init__(length)

    def assign(self, url: str) -> str:
        return hashlib.md5(url.encode("utf-8")).hexdigest()[: self.length]


class RandomSlugAssigner(SlugAssigner):
    """Slugs drawn uniformly from the alphanumeric alphabet."""

    def __init__(
        self, length: int = DEFAULT_SLUG_LENGTH, rng: Optional[random.Random] = None
    ):
        super().__init__(length)
        self.rng = rng or random.Random()

    def assign(self, url: str) -> str:
        return "".join(self.rng.choices(ALPHABET, k=self.length))


def build_assigner(
    strategy: str,
    length: int = DEFAULT_SLUG_LENGTH,
    rng: Optional[random.Random] = None,
) -> SlugAssigner:
    """Create a slug assigner by strategy name.

    Args:
        strategy: ``"hash"`` or ``"random"``.
        length: Slug length.
        rng: Random generator for the random strategy.

    Returns:
        Slug assigner instance.

    Raises:
        ValueError: If the strategy is unknown.
    """
    if strategy == "hash":
        return HashSlugAssigner(length)
    if strategy == "random":
        return RandomSlugAssigner(length, rng=rng)
    raise ValueError(f"Unknown slug strategy: {strategy}")


def create_short_url(base_url: str, slug: str) -> str:
    """Create full short URL from base URL and slug.

    Args:
        base_url: Base URL of the service.
        slug: Slug.

    Returns:
        Full short URL string.
    """
    return f"{base_url.rstrip('/')}/{slug}"
