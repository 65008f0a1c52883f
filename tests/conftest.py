"""
Global pytest fixtures for the shortkey test suite.

Responsibilities:
    - Provide isolated in-memory stores (plain and call-counting)
    - Provide a small LRU cache and both key schemes
    - Provide services and a FastAPI TestClient wired through the app factory

Why an app factory?
    Using `create_app()` with injected dependencies gives each test fresh
    in-memory state and lets tests inspect the store the app is using.
"""

from collections import Counter

import pytest
from fastapi.testclient import TestClient

from main import create_app
from shortkey.cache.lru_cache import LRUCache
from shortkey.manager.resolver import ResolutionService
from shortkey.manager.shortener import ShorteningService
from shortkey.manager.strategies import RandomKeyGenerator, SequentialKeyGenerator
from shortkey.storage.storage import Storage

BASE_URL = "https://sho.rt/"


class CountingStorage(Storage):
    """In-memory store that records how often each operation was called."""

    def __init__(self):
        super().__init__()
        self.calls = Counter()

    def put(self, key, url):
        self.calls["put"] += 1
        return super().put(key, url)

    def get(self, key):
        self.calls["get"] += 1
        return super().get(key)

    def insert_returning_id(self, url):
        self.calls["insert_returning_id"] += 1
        return super().insert_returning_id(url)

    def get_by_id(self, ident):
        self.calls["get_by_id"] += 1
        return super().get_by_id(ident)

    @property
    def reads(self) -> int:
        return self.calls["get"] + self.calls["get_by_id"]

    @property
    def writes(self) -> int:
        return self.calls["put"] + self.calls["insert_returning_id"]


@pytest.fixture
def storage() -> CountingStorage:
    """Fresh call-counting in-memory store."""
    return CountingStorage()


@pytest.fixture
def cache() -> LRUCache:
    return LRUCache(capacity=1024)


@pytest.fixture
def random_generator() -> RandomKeyGenerator:
    return RandomKeyGenerator(length=6, max_attempts=5)


@pytest.fixture
def sequential_generator() -> SequentialKeyGenerator:
    return SequentialKeyGenerator()


@pytest.fixture
def shortener(storage, cache, random_generator) -> ShorteningService:
    return ShorteningService(storage, cache, random_generator, base_url=BASE_URL)


@pytest.fixture
def resolver(storage, cache, random_generator) -> ResolutionService:
    return ResolutionService(storage, cache, random_generator, base_url=BASE_URL)


@pytest.fixture
def client(storage, cache, random_generator) -> TestClient:
    """
    Fresh TestClient whose app shares the storage/cache fixtures, so tests can
    assert on store call counts behind the HTTP layer.
    """
    app = create_app(storage=storage, cache=cache, generator=random_generator, base_url=BASE_URL)
    return TestClient(app)
