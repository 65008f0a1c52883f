"""
Abstract Base Class for resolution caches.

Responsibilities:
    - Define the get/put contract the resolution service relies on
    - Support easy substitution (in-process LRU today, shared cache later)

`get` returns a `(value, found)` pair so that a cached `ABSENT` marker is
distinguishable from a plain miss.
"""

from abc import ABC, abstractmethod
from typing import Any, Tuple

__all__ = ["BaseCache", "ABSENT"]


class _Absent:
    """Marker for a key the store confirmed does not exist."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


class BaseCache(ABC):
    """Abstract base for pluggable resolution caches."""

    @abstractmethod
    def get(self, key: str) -> Tuple[Any, bool]:  # pragma: no cover
        """
        Look up a key.

        Returns:
            (value, True) on a hit, where value is a URL or ABSENT;
            (None, False) on a miss.
        """
        raise NotImplementedError

    @abstractmethod
    def put(self, key: str, value: Any) -> None:  # pragma: no cover
        """Store a URL or ABSENT under key."""
        raise NotImplementedError

    @abstractmethod
    def put_if_absent(self, key: str, value: Any) -> bool:  # pragma: no cover
        """
        Store value only if key has no entry yet.

        Returns True when the value was stored. Used for ABSENT markers so a
        miss observed before a concurrent write never hides that write.
        """
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:  # pragma: no cover
        raise NotImplementedError
