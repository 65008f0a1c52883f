"""
ResolutionService module for shortkey.

Read path, in order:
    1. Shape check: keys the scheme could never have minted short-circuit to
       not-found without touching cache or store.
    2. Cache: a hit (URL or ABSENT) is answered without a store round-trip.
    3. Store: a hit or a confirmed miss is written back to the cache. Store
       failures propagate and nothing is cached, so a transient outage is
       never remembered as a permanent 404. A confirmed miss only fills an
       empty slot, so a key shortened while the lookup was in flight keeps
       its real entry.

Also provides the reverse-check used by POST /check: it only looks up keys
minted under our own base URL and refuses to act as a generic redirect
resolver for third-party links.
"""

import logging
from typing import Optional, Tuple

from ..cache.base import ABSENT, BaseCache
from ..errors import BadInput, NotFound
from ..storage.base import BaseStore
from .shortener import normalize_base_url
from .strategies import KeyGenerator

log = logging.getLogger(__name__)


class ResolutionService:
    def __init__(
        self,
        store: BaseStore,
        cache: BaseCache,
        generator: KeyGenerator,
        base_url: str = "",
    ):
        self.store = store
        self.cache = cache
        self.generator = generator
        self.base_url = normalize_base_url(base_url)

    def resolve(self, key: str) -> Tuple[Optional[str], bool]:
        """
        Return `(target_url, True)` for a known key, `(None, False)` otherwise.

        Raises:
            StoreFailure: the store could not answer; nothing was cached.
        """
        if not key or not self.generator.is_valid_key(key):
            return None, False

        value, hit = self.cache.get(key)
        if hit:
            if value is ABSENT:
                return None, False
            return value, True

        log.debug("Cache miss for %s", key)
        try:
            target = self.generator.fetch(self.store, key)
        except NotFound:
            self.cache.put_if_absent(key, ABSENT)
            return None, False
        self.cache.put(key, target)
        return target, True

    def check_own_key(self, candidate: str) -> Tuple[Optional[str], bool]:
        """
        Resolve a full short link, but only if it is one of ours.

        Raises:
            BadInput: the base URL prefix is missing or the remainder is not a
                key our scheme could have produced.
            StoreFailure: propagated from resolve.
        """
        candidate = (candidate or "").strip()
        if not self.base_url or not candidate.startswith(self.base_url):
            raise BadInput("Not one of our keys")
        key = candidate[len(self.base_url):]
        if not self.generator.is_valid_key(key):
            raise BadInput("Not one of our keys")
        return self.resolve(key)
