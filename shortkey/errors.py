"""
Error taxonomy for shortkey.

Every failure path of the engine ends in one of these types; the HTTP layer
translates them into status codes and the core never builds responses itself.

    ShortKeyError
    ├── BadInput        malformed URL, wrong key shape, foreign key  -> 400
    │   └── InvalidKey  character outside the base-62 alphabet
    ├── NotFound        confirmed absence in the store (cacheable)   -> 404
    ├── StoreFailure    timeout, connection loss, exhausted retries  -> 500
    └── KeyCollision    duplicate random key, retried internally
"""

__all__ = [
    "ShortKeyError",
    "BadInput",
    "InvalidKey",
    "NotFound",
    "StoreFailure",
    "KeyCollision",
]


class ShortKeyError(Exception):
    """Base class for all engine errors."""


class BadInput(ShortKeyError, ValueError):
    """Caller supplied something we will never accept; do not retry."""


class InvalidKey(BadInput):
    """Key contains a character outside the codec alphabet (or is empty)."""


class NotFound(ShortKeyError, LookupError):
    """The store confirmed there is no record for the key."""


class StoreFailure(ShortKeyError):
    """The store could not answer: unreachable, timed out or misbehaving."""


class KeyCollision(ShortKeyError):
    """Insert-if-absent hit an existing key."""

    def __init__(self, key: str):
        super().__init__(f"Key already exists: {key}")
        self.key = key
