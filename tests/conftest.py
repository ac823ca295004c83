"""Pytest configuration and fixtures."""

import random

import pytest
from fastapi.testclient import TestClient

from shortlink.core.config import Settings
from shortlink.core.database import create_db_engine
from shortlink.main import create_app
from shortlink.stores import MemoryURLStore, SQLURLStore
from shortlink.utils.shortener import RandomSlugAssigner, SlugAssigner


class SequenceAssigner(SlugAssigner):
    """Assigner handing out a fixed sequence of slugs."""

    def __init__(self, slugs, deterministic=False):
        super().__init__(len(slugs[0]))
        self.slugs = list(slugs)
        self.deterministic = deterministic
        self.calls = 0

    def assign(self, url):
        slug = self.slugs[min(self.calls, len(self.slugs) - 1)]
        self.calls += 1
        return slug


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, store_backend="memory")


@pytest.fixture
def memory_store():
    """Create an empty in-memory store."""
    return MemoryURLStore()


@pytest.fixture
def sql_store():
    """Create a SQL store on an in-memory SQLite database."""
    store = SQLURLStore(create_db_engine("sqlite://"))
    store.init_schema()
    yield store
    store.close()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Run a test against every store implementation."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(settings, memory_store):
    """Create a test client using the hash strategy and idempotent shortening."""
    app = create_app(settings, store=memory_store)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def random_client(settings, memory_store, rng):
    """Create a test client using random slugs without reverse lookup."""
    settings = settings.model_copy(update={"slug_strategy": "random", "idempotent": False})
    app = create_app(settings, store=memory_store, assigner=RandomSlugAssigner(rng=rng))
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def rng():
    """Seeded random generator."""
    return random.Random(1234)


@pytest.fixture
def sequence_assigner():
    """Factory for assigners with a scripted slug sequence."""
    return SequenceAssigner
