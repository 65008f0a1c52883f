"""
ShorteningService module for shortkey.

Responsibilities:
    - Validate the long URL before anything is touched
    - Obtain a key from the configured KeyGenerator (random or sequential)
    - Write through to the store, then prime the resolution cache
    - Build the user-facing short link from the configured base URL

Design notes:
    - Store, cache and key scheme are injected; nothing here is global.
    - The cache is primed only after the store accepted the record, so a
      failed write never leaves a cached key that the store does not know.
    - Random keys retry on KeyCollision inside the generator; every other
      store error propagates as StoreFailure.

LLM Prompt Example:
    "Show how injecting the key scheme lets one shortening flow serve both
    random keys with collision retry and database-sequence keys."
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

from ..cache.base import BaseCache
from ..errors import BadInput
from ..storage.base import BaseStore
from .strategies import KeyGenerator

log = logging.getLogger(__name__)

DEFAULT_MAX_URL_LENGTH = 2048


def normalize_base_url(base_url: str) -> str:
    """Ensure the base URL ends with exactly one slash (empty stays empty)."""
    base_url = (base_url or "").strip()
    if not base_url:
        return ""
    return base_url.rstrip("/") + "/"


class ShorteningService:
    """
    Turns long URLs into short keys.

    Args:
        store (BaseStore): Durable key-value store.
        cache (BaseCache): Resolution cache to prime after a successful write.
        generator (KeyGenerator): Key scheme chosen for this deployment.
        base_url (str): Public prefix for short links, e.g. "https://sho.rt/".
        max_url_length (int): Longest accepted long URL.
    """

    def __init__(
        self,
        store: BaseStore,
        cache: BaseCache,
        generator: KeyGenerator,
        base_url: str = "",
        max_url_length: int = DEFAULT_MAX_URL_LENGTH,
    ):
        self.store = store
        self.cache = cache
        self.generator = generator
        self.base_url = normalize_base_url(base_url)
        self.max_url_length = max_url_length

    def _validate_url(self, raw_url: Optional[str]) -> None:
        """
        Request-URI well-formedness check.

        Accepts absolute URLs that carry a scheme plus a host or a path;
        rejects empty input, whitespace or control characters, and anything
        longer than max_url_length.

        Raises:
            BadInput: If the URL is malformed.
        """
        if not raw_url:
            raise BadInput("Invalid URL: empty")
        if len(raw_url) > self.max_url_length:
            raise BadInput(f"Invalid URL: longer than {self.max_url_length} characters")
        if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in raw_url):
            raise BadInput("Invalid URL: contains whitespace or control characters")
        try:
            parts = urlsplit(raw_url)
        except ValueError as exc:
            raise BadInput(f"Invalid URL: {exc}") from exc
        if not parts.scheme:
            raise BadInput("Invalid URL: missing scheme")
        if not (parts.netloc or parts.path):
            raise BadInput("Invalid URL: nothing after the scheme")

    def shorten(self, raw_url: str) -> str:
        """
        Persist `raw_url` and return its short key.

        Raises:
            BadInput: malformed URL; store and cache are not touched.
            StoreFailure: the store failed or random keys ran out of attempts;
                the cache is not touched.
        """
        self._validate_url(raw_url)
        key = self.generator.issue(self.store, raw_url)
        self.cache.put(key, raw_url)
        log.info("Created short key %s -> %s", key, raw_url)
        return key

    def short_url(self, key: str) -> str:
        """Join the configured base URL and a key into the user-facing link."""
        return f"{self.base_url}{key}"
