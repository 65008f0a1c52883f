"""
Unit tests for the in-memory Storage backend.

Covers:
    - put (insert, reject duplicate key without overwriting)
    - get (found & NotFound)
    - insert_returning_id (monotonic, idempotent per url)
    - get_by_id (found & NotFound)
"""

import threading

import pytest

from shortkey.errors import KeyCollision, NotFound
from shortkey.storage.storage import Storage


@pytest.fixture
def storage():
    """Fresh storage instance per test."""
    return Storage()


def test_put_and_get(storage):
    storage.put("abcdef", "https://example.com")
    assert storage.get("abcdef") == "https://example.com"


def test_put_duplicate_key_collides(storage):
    storage.put("abcdef", "https://one.com")
    with pytest.raises(KeyCollision) as info:
        storage.put("abcdef", "https://two.com")
    assert info.value.key == "abcdef"
    assert storage.get("abcdef") == "https://one.com"


def test_get_missing(storage):
    with pytest.raises(NotFound):
        storage.get("nope")


def test_insert_returning_id_monotonic(storage):
    a = storage.insert_returning_id("https://a.com")
    b = storage.insert_returning_id("https://b.com")
    assert (a, b) == (1, 2)


def test_insert_returning_id_idempotent(storage):
    first = storage.insert_returning_id("https://a.com")
    storage.insert_returning_id("https://b.com")
    assert storage.insert_returning_id("https://a.com") == first


def test_get_by_id(storage):
    ident = storage.insert_returning_id("https://a.com")
    assert storage.get_by_id(ident) == "https://a.com"
    with pytest.raises(NotFound):
        storage.get_by_id(ident + 100)


def test_custom_start():
    assert Storage(start=1000).insert_returning_id("https://a.com") == 1000


def test_ping(storage):
    assert storage.ping() is None


def test_concurrent_ids_are_unique(storage):
    ids = []
    lock = threading.Lock()

    def worker(tid):
        for i in range(200):
            ident = storage.insert_returning_id(f"https://x.com/{tid}/{i}")
            with lock:
                ids.append(ident)

    threads = [threading.Thread(target=worker, args=(t,)) for t in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(ids) == len(set(ids)) == 1600
