"""
Key generation strategies for shortkey.

Provided strategies:
- RandomKeyGenerator: 6 random letters; uniqueness enforced by the store
  (insert-if-absent + bounded retry on KeyCollision)
- SequentialKeyGenerator: store-assigned identifier -> Base62; collision free,
  and the same long URL always maps to the same key

Both sit behind one `KeyGenerator` interface, chosen when the services are
built, so the shortening and resolution logic is written once:
- issue(store, url): persist url and return its key
- fetch(store, key): read the url for a key (raises NotFound)
- is_valid_key(key): cheap shape check done before any cache or store access

Configuration (via shortkey.config.settings):
- KEY_SCHEME: "random" (default) or "sequential"
- KEY_LENGTH: random key length (default 6)
- MAX_ATTEMPTS: random collision attempts before giving up (default 5)
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Type

from shortkey.config import settings
from ..errors import KeyCollision, StoreFailure
from ..storage.base import BaseStore
from .codec import LETTER_ALPHABET, decode, encode, is_canonical, random_key

log = logging.getLogger(__name__)

_LETTERS = frozenset(LETTER_ALPHABET)


class KeyGenerator(ABC):
    """Abstract base for key schemes."""

    @abstractmethod
    def issue(self, store: BaseStore, url: str) -> str:  # pragma: no cover
        """Persist `url` and return the key that now resolves to it."""
        raise NotImplementedError

    @abstractmethod
    def fetch(self, store: BaseStore, key: str) -> str:  # pragma: no cover
        """Return the url for a shape-valid key; raises NotFound when absent."""
        raise NotImplementedError

    @abstractmethod
    def is_valid_key(self, key: str) -> bool:  # pragma: no cover
        raise NotImplementedError


@dataclass
class RandomKeyGenerator(KeyGenerator):
    """
    Random letter keys; rely on store-level uniqueness (unique index + retry).

    With 52**6 (~2e10) possible keys a collision is rare, so a handful of
    attempts is plenty. Running out of attempts is a StoreFailure.
    """
    length: int = 6
    max_attempts: int = 5

    def generate(self) -> str:
        return random_key(self.length)

    def issue(self, store: BaseStore, url: str) -> str:
        for attempt in range(1, self.max_attempts + 1):
            key = self.generate()
            try:
                store.put(key, url)
            except KeyCollision:
                log.warning("Key collision on %s (attempt %d/%d)", key, attempt, self.max_attempts)
                continue
            return key
        raise StoreFailure(f"No free key after {self.max_attempts} attempts")

    def fetch(self, store: BaseStore, key: str) -> str:
        return store.get(key)

    def is_valid_key(self, key: str) -> bool:
        return len(key) == self.length and all(ch in _LETTERS for ch in key)


@dataclass
class SequentialKeyGenerator(KeyGenerator):
    """
    Store-assigned identifiers rendered in Base62.

    Properties:
    - Collision-free: the database sequence is the single source of ids
    - Idempotent: a URL that is already stored gets its existing key back
    - Shortest practical keys; no padding, so "00A" is not an alias of "A"
    """

    def issue(self, store: BaseStore, url: str) -> str:
        return encode(store.insert_returning_id(url))

    def fetch(self, store: BaseStore, key: str) -> str:
        return store.get_by_id(decode(key))

    def is_valid_key(self, key: str) -> bool:
        return is_canonical(key)


GENERATOR_REGISTRY: Dict[str, Type[KeyGenerator]] = {
    "random": RandomKeyGenerator,
    "rand": RandomKeyGenerator,
    "sequential": SequentialKeyGenerator,
    "seq": SequentialKeyGenerator,
    "base62": SequentialKeyGenerator,
}


def get_generator_from_config(name: Optional[str] = None) -> KeyGenerator:
    """
    Resolve the active key scheme from parameter or settings.KEY_SCHEME.

    Raises:
        ValueError: unknown scheme name.
    """
    key = (name or settings.KEY_SCHEME or "random").strip().lower()
    cls = GENERATOR_REGISTRY.get(key)
    if cls is None:
        raise ValueError(f"Unknown key scheme: {key!r}")
    log.info("Using key scheme: %s -> %s", key, cls.__name__)

    if cls is RandomKeyGenerator:
        return RandomKeyGenerator(length=settings.KEY_LENGTH, max_attempts=settings.MAX_ATTEMPTS)
    return cls()
