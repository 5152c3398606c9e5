"""Process-local memory tier of the blueprint cache.

A bounded, time-boxed LRU map from prompt hash to cached blueprint, built on
``cachetools.TTLCache``. Entries expire ``ttl`` seconds after they were last
written or hit; when the map is full the least recently used entry is
evicted. All mutations go through one lock so insert-then-evict is atomic
relative to other inserts.
"""

import threading
import time
from collections.abc import Callable

from cachetools import TTLCache

from blueprint_hub.models.cache import MemoryCacheEntry

DEFAULT_MAX_SIZE = 50
DEFAULT_TTL_SECONDS = 300.0  # 5 minutes


class MemoryCache:
    """Fixed-capacity LRU cache with per-entry time-to-live."""

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._entries: TTLCache = TTLCache(maxsize=max_size, ttl=ttl_seconds, timer=timer)
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return int(self._entries.maxsize)

    def get(self, prompt_hash: str) -> MemoryCacheEntry | None:
        """Return the live entry for ``prompt_hash`` and refresh its recency and TTL."""
        with self._lock:
            entry = self._entries.get(prompt_hash)
            if entry is None:
                return None
            # Re-inserting moves the key to the most-recent end and restarts its TTL
            self._entries[prompt_hash] = entry
            return entry

    def put(self, prompt_hash: str, entry: MemoryCacheEntry) -> None:
        """Insert or replace an entry, evicting expired then least-recent entries if full."""
        with self._lock:
            self._entries[prompt_hash] = entry

    def evict_if_needed(self) -> int:
        """Drop expired entries now. Returns how many were removed."""
        with self._lock:
            return len(self._entries.expire())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)

    def __contains__(self, prompt_hash: object) -> bool:
        with self._lock:
            return prompt_hash in self._entries
