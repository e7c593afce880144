# ABOUTME: Tests for the thread-safe LRU TileCache
# ABOUTME: Byte and entry bounds, recency order, oversized tiles and concurrent access

from concurrent.futures import ThreadPoolExecutor

import pytest

from osrswiki.maps.cache import TileCache
from osrswiki.maps.models import TileAddress


def _address(n: int) -> TileAddress:
    return TileAddress(10, n, 0)


class TestTileCacheBasics:
    def test_get_returns_stored_bytes(self):
        cache = TileCache()
        cache.put(_address(1), b"tile")
        assert cache.get(_address(1)) == b"tile"
        assert _address(1) in cache

    def test_miss_returns_none(self):
        assert TileCache().get(_address(1)) is None

    def test_replacing_a_key_updates_byte_total(self):
        cache = TileCache()
        cache.put(_address(1), b"x" * 100)
        cache.put(_address(1), b"y" * 40)

        assert len(cache) == 1
        assert cache.total_bytes == 40
        assert cache.get(_address(1)) == b"y" * 40

    def test_clear(self):
        cache = TileCache()
        for n in range(5):
            cache.put(_address(n), b"data")
        cache.clear()

        assert len(cache) == 0
        assert cache.total_bytes == 0

    def test_negative_bounds_rejected(self):
        with pytest.raises(ValueError):
            TileCache(max_bytes=-1)
        with pytest.raises(ValueError):
            TileCache(max_entries=-1)

    def test_stats_track_hits_and_misses(self):
        cache = TileCache()
        cache.put(_address(1), b"a")
        cache.get(_address(1))
        cache.get(_address(2))

        stats = cache.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["entries"] == 1


class TestTileCacheBounds:
    def test_entry_bound_evicts_least_recently_used(self):
        cache = TileCache(max_bytes=1_000_000, max_entries=3)
        for n in range(3):
            cache.put(_address(n), b"data")

        cache.get(_address(0))
        cache.put(_address(3), b"data")

        assert len(cache) == 3
        assert _address(1) not in cache
        assert all(_address(n) in cache for n in (0, 2, 3))
        assert cache.stats()["evictions"] == 1

    def test_byte_bound_evicts_until_within_budget(self):
        cache = TileCache(max_bytes=100, max_entries=100)
        cache.put(_address(0), b"a" * 40)
        cache.put(_address(1), b"b" * 40)
        cache.put(_address(2), b"c" * 50)

        assert cache.total_bytes <= 100
        assert _address(0) not in cache
        assert _address(1) in cache
        assert _address(2) in cache

    def test_oversized_tile_is_not_cached(self):
        cache = TileCache(max_bytes=10, max_entries=10)
        cache.put(_address(0), b"small")
        cache.put(_address(1), b"x" * 11)

        assert _address(1) not in cache
        assert cache.get(_address(0)) == b"small"

    def test_zero_entry_cache_stores_nothing(self):
        cache = TileCache(max_bytes=100, max_entries=0)
        cache.put(_address(0), b"a")
        assert len(cache) == 0

    def test_bounds_hold_after_many_puts(self):
        cache = TileCache(max_bytes=1000, max_entries=7)
        for n in range(200):
            cache.put(_address(n), b"z" * (n % 300))
            assert cache.total_bytes <= 1000
            assert len(cache) <= 7


class TestTileCacheConcurrency:
    def test_concurrent_puts_and_gets_keep_bounds(self):
        cache = TileCache(max_bytes=5_000, max_entries=50)

        def worker(offset: int) -> None:
            for n in range(500):
                address = _address((offset * 31 + n) % 120)
                cache.put(address, b"t" * (n % 200))
                cache.get(address)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(worker, range(8)))

        assert len(cache) <= 50
        assert cache.total_bytes <= 5_000
        assert cache.total_bytes == sum(len(cache.get(a) or b"") for a in list(cache._entries))
