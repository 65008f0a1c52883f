"""
Main API module for shortkey.

Responsibilities:
    - Expose REST endpoints for shortening, redirecting and checking short links
    - Translate engine results and errors into HTTP status codes
    - Apply CORS headers for browser clients

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - In-memory store by default; PostgreSQL via SHORTKEY_STORAGE_BACKEND=postgres.
    - ShorteningService / ResolutionService own all key logic; this module only
      does request parsing and status codes.

Status code policy:
    - 400: malformed URL or a link that is not one of ours
    - 404: unknown key (including keys of the wrong shape)
    - 422: request body fails validation (missing url, url over the length limit)
    - 500: store failure
    - 503: health probe could not reach the store
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from shortkey.cache.base import BaseCache
from shortkey.cache.lru_cache import LRUCache
from shortkey.config import settings
from shortkey.errors import BadInput, StoreFailure
from shortkey.manager.resolver import ResolutionService
from shortkey.manager.shortener import ShorteningService
from shortkey.manager.strategies import KeyGenerator, get_generator_from_config
from shortkey.storage.base import BaseStore
from shortkey.storage.storage_factory import get_storage


class URLRequest(BaseModel):
    """Request payload carrying a single URL."""
    url: str = Field(..., max_length=settings.MAX_URL_LENGTH)


def create_app(
    storage: Optional[BaseStore] = None,
    cache: Optional[BaseCache] = None,
    generator: Optional[KeyGenerator] = None,
    base_url: Optional[str] = None,
) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Any dependency left as None is built from `shortkey.config.settings`.

    Why an app factory?
        - Enables per-test isolation in pytest.
        - Lets tests inject a counting store or a tiny cache.
        - Avoids accidental global state across workers/processes.

    LLM Prompt Example:
        "Show how an application factory enables test isolation and easy
        dependency swapping (e.g., in-memory vs DB storage) without code changes."
    """
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=settings.LOG_LEVEL,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    log = logging.getLogger("shortkey")

    app = FastAPI(
        title="shortkey",
        description="URL shortener with a read-through, negative-caching resolver",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests, swappable for production)
    # ----------------------------------------------------------------
    if storage is None:
        storage = get_storage()
        if hasattr(storage, "ensure_schema"):
            try:
                storage.ensure_schema()
            except StoreFailure:
                log.exception("Schema bootstrap failed; /health will report the store as down")
    cache = cache if cache is not None else LRUCache(settings.CACHE_CAPACITY)
    generator = generator or get_generator_from_config()
    base_url = settings.BASE_URL if base_url is None else base_url

    shortener = ShorteningService(
        storage, cache, generator, base_url=base_url, max_url_length=settings.MAX_URL_LENGTH
    )
    resolver = ResolutionService(storage, cache, generator, base_url=base_url)
    log.info("shortkey ready: store=%s scheme=%s", type(storage).__name__, type(generator).__name__)

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.get("/health")
    def health() -> Dict[str, str]:
        try:
            storage.ping()
        except StoreFailure:
            log.error("Health check failed: store unreachable")
            raise HTTPException(status_code=503, detail="Health check failed!")
        return {"status": "ok"}

    @app.post("/shorten")
    def shorten(req: URLRequest) -> Dict[str, Any]:
        """
        Create a short link for a given URL.

        Returns:
            dict: key, absolute short_url and the original URL.
        """
        try:
            key = shortener.shorten(req.url)
        except BadInput as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        except StoreFailure:
            log.exception("Failed to save URL")
            raise HTTPException(status_code=500, detail="Internal Server Error")
        return {
            "message": "Short link created",
            "key": key,
            "short_url": shortener.short_url(key),
            "original_url": req.url,
        }

    @app.post("/check")
    def check(req: URLRequest) -> Dict[str, Any]:
        """Look up where one of our own short links points, without redirecting."""
        try:
            target, found = resolver.check_own_key(req.url)
        except BadInput as exc:
            raise HTTPException(status_code=400, detail=f"Failed to check short URL: {exc}")
        except StoreFailure:
            log.exception("Failed to check short URL")
            raise HTTPException(status_code=500, detail="Internal Server Error")
        if not found:
            raise HTTPException(status_code=404, detail="Target url not found")
        key = req.url.strip()[len(resolver.base_url):]
        return {"short_url": req.url, "key": key, "original_url": target}

    @app.get("/{key}")
    def redirect(key: str) -> RedirectResponse:
        try:
            target, found = resolver.resolve(key)
        except StoreFailure:
            log.exception("Failed to resolve key %s", key)
            raise HTTPException(status_code=500, detail="Internal Server Error")
        if not found:
            log.info("Target URL not found for key: %s", key)
            raise HTTPException(status_code=404, detail="Target url not found")
        return RedirectResponse(url=target, status_code=302)

    app.state.shortener = shortener
    app.state.resolver = resolver
    return app


# `uvicorn main:app` and `from main import app` keep working.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8080)
