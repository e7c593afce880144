# ABOUTME: Thread-safe in-memory LRU cache for tile blobs
# ABOUTME: Bounded by both a byte budget and an entry count; overflow evicts least recently used

import threading
from collections import OrderedDict
from typing import Any

from osrswiki.maps.models import TileAddress

DEFAULT_MAX_BYTES = 50 * 1024 * 1024
DEFAULT_MAX_ENTRIES = 500


class TileCache:
    """LRU map of TileAddress -> tile bytes, guarded by a single lock.

    After every put, ``total_bytes <= max_bytes`` and ``len(cache) <= max_entries``.
    A tile larger than the whole byte budget is never cached.
    """

    def __init__(self, max_bytes: int = DEFAULT_MAX_BYTES, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_bytes < 0 or max_entries < 0:
            raise ValueError("Cache bounds must not be negative")

        self.max_bytes = max_bytes
        self.max_entries = max_entries
        self._entries: OrderedDict[TileAddress, bytes] = OrderedDict()
        self._total_bytes = 0
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, address: TileAddress) -> bytes | None:
        with self._lock:
            data = self._entries.get(address)
            if data is None:
                self._misses += 1
                return None
            self._entries.move_to_end(address)
            self._hits += 1
            return data

    def put(self, address: TileAddress, data: bytes) -> None:
        size = len(data)
        with self._lock:
            if address in self._entries:
                self._total_bytes -= len(self._entries.pop(address))

            if size > self.max_bytes or self.max_entries == 0:
                return

            self._entries[address] = data
            self._total_bytes += size

            while self._total_bytes > self.max_bytes or len(self._entries) > self.max_entries:
                _, evicted = self._entries.popitem(last=False)
                self._total_bytes -= len(evicted)
                self._evictions += 1

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._total_bytes = 0

    @property
    def total_bytes(self) -> int:
        with self._lock:
            return self._total_bytes

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, address: TileAddress) -> bool:
        with self._lock:
            return address in self._entries

    def stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "total_bytes": self._total_bytes,
                "max_bytes": self.max_bytes,
                "max_entries": self.max_entries,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }
