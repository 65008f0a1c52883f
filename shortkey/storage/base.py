"""
Base storage interface for shortkey.

Purpose:
    Define the narrow contract the engine needs from durable storage so that
    the in-memory and PostgreSQL backends are interchangeable without touching
    the shortening or resolution services.

Contract:
    - Absence is signalled with `NotFound`, never with None.
    - Anything the backend cannot answer (timeouts, lost connections,
      unexpected constraint errors) is raised as `StoreFailure`.
    - A duplicate random key is raised as `KeyCollision` so the caller can
      retry it instead of reporting an internal error.
    - Records are immutable: `put` never overwrites.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.
"""

from abc import ABC, abstractmethod


class BaseStore(ABC):
    """Abstract base class for key-value store backends."""

    @abstractmethod  # pragma: no cover
    def put(self, key: str, url: str) -> None:
        """
        Insert `key -> url` if the key is free.

        Raises:
            KeyCollision: the key is already taken (regardless of its url).
            StoreFailure: the backend failed.

        LLM Prompt Example:
            "Design an insert-if-absent API that maps a unique-index violation
            to a distinguishable collision signal."
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def get(self, key: str) -> str:
        """
        Return the target url stored under `key`.

        Raises:
            NotFound: no such key.
            StoreFailure: the backend failed.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def insert_returning_id(self, url: str) -> int:
        """
        Persist `url` and return its store-assigned identifier in one atomic step.

        Idempotent: if `url` is already stored, its existing identifier is
        returned instead of an error.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def get_by_id(self, ident: int) -> str:
        """
        Return the url stored under a store-assigned identifier.

        Raises:
            NotFound: no such identifier.
            StoreFailure: the backend failed.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def ping(self) -> None:
        """Cheap liveness probe; raises StoreFailure when the backend is down."""
        raise NotImplementedError
