"""Exceptions raised by the URL Shortener Service."""


class ShortenerError(Exception):
    """Base class for service errors."""


class NotFoundError(ShortenerError):
    """No mapping exists for the requested slug or URL."""


class StoreError(ShortenerError):
    """The backing store failed to complete an operation."""


class DuplicateSlugError(StoreError):
    """The slug is already mapped to a URL."""

    def __init__(self, slug: str):
        super().__init__(f"Slug already exists: {slug}")
        self.slug = slug


class SlugConflictError(ShortenerError):
    """A slug could not be assigned without colliding with another URL."""

    def __init__(self, url: str, attempts: int):
        super().__init__(f"Could not assign a free slug to {url} after {attempts} attempt(s)")
        self.url = url
        self.attempts = attempts


class StartupError(ShortenerError):
    """The datastore was unreachable after all connection attempts."""
