"""
Bounded LRU cache for key resolution.

Responsibilities:
    - Absorb repeated reads in front of the store
    - Remember confirmed misses (ABSENT) so unknown keys do not hammer the store
    - Evict the least-recently-used entry once capacity is exceeded

Concurrency:
    Every request thread shares one instance. cachetools caches are not
    thread-safe, so a single lock guards every access, including the
    recency bookkeeping done on reads. It is never held while talking to
    the store.
"""

import threading
from typing import Any, Tuple

import cachetools

from .base import BaseCache

DEFAULT_CAPACITY = 1024


class LRUCache(BaseCache):
    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._items = cachetools.LRUCache(maxsize=capacity)
        self._lock = threading.Lock()

    def get(self, key: str) -> Tuple[Any, bool]:
        with self._lock:
            try:
                return self._items[key], True
            except KeyError:
                return None, False

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._items[key] = value

    def put_if_absent(self, key: str, value: Any) -> bool:
        with self._lock:
            if key in self._items:
                return False
            self._items[key] = value
            return True

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __contains__(self, key: object) -> bool:
        # Peek without promoting; used by tests and diagnostics.
        with self._lock:
            return key in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
