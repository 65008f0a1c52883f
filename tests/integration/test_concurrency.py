"""
Concurrent resolution against a shared cache and store.

Many threads resolving the same just-created key must all see the right
target; a burst against an unknown key must not corrupt the cache either.
"""

from concurrent.futures import ThreadPoolExecutor

from shortkey.cache.lru_cache import LRUCache
from shortkey.manager.resolver import ResolutionService
from shortkey.manager.shortener import ShorteningService

N_WORKERS = 32
N_CALLS = 500


def test_concurrent_resolve_same_key(shortener, resolver):
    url = "https://example.com/hot"
    key = shortener.shorten(url)

    with ThreadPoolExecutor(max_workers=N_WORKERS) as ex:
        results = list(ex.map(lambda _: resolver.resolve(key), range(N_CALLS)))

    assert results == [(url, True)] * N_CALLS


def test_concurrent_resolve_cold_cache(shortener, resolver, cache):
    url = "https://example.com/cold"
    key = shortener.shorten(url)
    cache.clear()

    with ThreadPoolExecutor(max_workers=N_WORKERS) as ex:
        results = list(ex.map(lambda _: resolver.resolve(key), range(N_CALLS)))

    assert results == [(url, True)] * N_CALLS


def test_concurrent_shorten_and_resolve_small_cache(storage, random_generator):
    cache = LRUCache(capacity=16)
    shortener = ShorteningService(storage, cache, random_generator)
    resolver = ResolutionService(storage, cache, random_generator)

    def roundtrip(i):
        url = f"https://example.com/{i}"
        key = shortener.shorten(url)
        return resolver.resolve(key) == (url, True)

    with ThreadPoolExecutor(max_workers=N_WORKERS) as ex:
        assert all(ex.map(roundtrip, range(N_CALLS)))
    assert len(cache) <= 16
