"""
Storage module for shortkey (in-memory implementation).

Responsibilities:
    - Keep random-scheme records (key -> url)
    - Keep sequential-scheme records (id -> url) with a url -> id index
    - Hand out monotonically increasing identifiers

Design:
    - In-memory reference implementation of the BaseStore contract, used by
      the default app and by the test suite.
    - A single lock serializes every operation, so request threads can share
      one instance.
    - For production, use the PostgreSQL backend (see db_storage.py).
"""

import threading
from typing import Dict

from ..errors import KeyCollision, NotFound
from .base import BaseStore


class Storage(BaseStore):
    def __init__(self, start: int = 1):
        """
        Initialize empty storage.

        Args:
            start (int): First identifier handed out by insert_returning_id,
                mirroring a BIGSERIAL column that starts at 1.

        Internal schema:
            self.urls    = {key: url}
            self.by_id   = {ident: url}
            self.id_of   = {url: ident}
        """
        self.urls: Dict[str, str] = {}
        self.by_id: Dict[int, str] = {}
        self.id_of: Dict[str, int] = {}
        self._next_id = start
        self._lock = threading.Lock()

    def put(self, key: str, url: str) -> None:
        with self._lock:
            if key in self.urls:
                raise KeyCollision(key)
            self.urls[key] = url

    def get(self, key: str) -> str:
        with self._lock:
            try:
                return self.urls[key]
            except KeyError:
                raise NotFound(key) from None

    def insert_returning_id(self, url: str) -> int:
        """
        Assign the next identifier to `url`, or return the one it already has.
        """
        with self._lock:
            existing = self.id_of.get(url)
            if existing is not None:
                return existing
            ident = self._next_id
            self._next_id += 1
            self.by_id[ident] = url
            self.id_of[url] = ident
            return ident

    def get_by_id(self, ident: int) -> str:
        with self._lock:
            try:
                return self.by_id[ident]
            except KeyError:
                raise NotFound(str(ident)) from None

    def ping(self) -> None:
        return None
