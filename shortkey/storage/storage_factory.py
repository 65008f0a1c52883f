"""
Storage factory - switch storage backend from config (lazy env version)
======================================================================

Centralizes selection of the storage backend (in-memory vs PostgreSQL) so the
rest of the app stays ignorant of where data lives.

- Reads environment **at call time** to avoid stale values in tests.
- Imports the DB backend **only if** the selected backend is "postgres".

Environment variables
---------------------
- SHORTKEY_STORAGE_BACKEND: "memory" (default) or "postgres"
- SHORTKEY_DB_DSN:          DSN string if backend=="postgres" (or DATABASE_URL)
- SHORTKEY_STORE_TIMEOUT:   per-call timeout in seconds (default 5)
"""

import logging
from typing import Optional

from shortkey.config import env_dsn, env_float, env_str
from shortkey.storage.storage import Storage

log = logging.getLogger(__name__)


def get_storage(backend: Optional[str] = None, **kwargs):
    """
    Return a BaseStore implementation based on configuration.

    Parameters
    ----------
    backend : str, optional
        "memory" (default) or "postgres". If omitted, reads SHORTKEY_STORAGE_BACKEND.
    kwargs : dict
        For postgres: dsn="...", timeout=<seconds>, ensure_schema=<bool>.
    """
    be = (backend or env_str("SHORTKEY_STORAGE_BACKEND", "memory")).lower()
    log.info("Selected storage backend: %r", be)

    if be == "memory":
        return Storage()

    if be == "postgres":
        dsn = kwargs.get("dsn") or env_dsn()
        if not dsn:
            raise ValueError("DB_DSN is required for postgres backend (env SHORTKEY_DB_DSN)")
        timeout = float(kwargs.get("timeout") or env_float("SHORTKEY_STORE_TIMEOUT", 5.0))
        # Local import to avoid hard dependency when not using postgres
        from shortkey.storage.db_storage import DBStorage

        store = DBStorage(dsn=dsn, timeout=timeout)
        if kwargs.get("ensure_schema"):
            store.ensure_schema()
        return store

    raise ValueError(f"Unknown storage backend: {be!r}")
