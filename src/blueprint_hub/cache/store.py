"""Persistent cache store interface and the in-memory implementation.

The cache service only needs four capabilities from its system of record:
upsert by unique prompt hash, exact-hash point lookup, keyword-overlap
candidate listing ordered by usage, and atomic counter increments.
"""

import asyncio
from abc import ABC, abstractmethod

from blueprint_hub.models.cache import CacheEntry


class BlueprintStore(ABC):
    """Unified interface for persistent blueprint cache backends."""

    @abstractmethod
    async def upsert(self, entry: CacheEntry, ignore_duplicates: bool = True) -> CacheEntry:
        """Insert ``entry`` keyed by its prompt hash.

        With ``ignore_duplicates`` an existing row for the same hash is kept
        untouched and returned; otherwise its content is overwritten while
        its id and counters are preserved.
        """

    @abstractmethod
    async def get_by_hash(self, prompt_hash: str) -> CacheEntry | None:
        """Exact lookup by prompt hash."""

    @abstractmethod
    async def find_by_keywords(self, keywords: set[str], limit: int = 10) -> list[CacheEntry]:
        """Entries sharing at least one keyword, most used first, at most ``limit``."""

    @abstractmethod
    async def increment_usage(self, cache_id: str) -> None:
        """Atomically add one to ``times_used``."""

    @abstractmethod
    async def record_build(self, cache_id: str, success: bool) -> None:
        """Atomically add one to ``successful_builds`` or ``failed_builds``."""

    @abstractmethod
    async def list_entries(self) -> list[CacheEntry]:
        """All entries (analytics)."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""


class InMemoryBlueprintStore(BlueprintStore):
    """Dict-backed store for development and tests. Not shared across processes."""

    def __init__(self) -> None:
        self._by_hash: dict[str, CacheEntry] = {}
        self._hash_by_id: dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def upsert(self, entry: CacheEntry, ignore_duplicates: bool = True) -> CacheEntry:
        async with self._lock:
            existing = self._by_hash.get(entry.prompt_hash)
            if existing is not None:
                if ignore_duplicates:
                    return existing.model_copy(deep=True)
                entry = entry.model_copy(
                    update={
                        "id": existing.id,
                        "times_used": existing.times_used,
                        "successful_builds": existing.successful_builds,
                        "failed_builds": existing.failed_builds,
                        "created_at": existing.created_at,
                    }
                )
            stored = entry.model_copy(deep=True)
            self._by_hash[stored.prompt_hash] = stored
            self._hash_by_id[stored.id] = stored.prompt_hash
            return stored.model_copy(deep=True)

    async def get_by_hash(self, prompt_hash: str) -> CacheEntry | None:
        entry = self._by_hash.get(prompt_hash)
        return entry.model_copy(deep=True) if entry else None

    async def find_by_keywords(self, keywords: set[str], limit: int = 10) -> list[CacheEntry]:
        if not keywords:
            return []
        matches = [e for e in self._by_hash.values() if keywords.intersection(e.keywords)]
        # sorted() is stable: equal usage keeps insertion order
        matches = sorted(matches, key=lambda e: e.times_used, reverse=True)
        return [e.model_copy(deep=True) for e in matches[:limit]]

    async def increment_usage(self, cache_id: str) -> None:
        async with self._lock:
            entry = self._get_by_id(cache_id)
            entry.times_used += 1

    async def record_build(self, cache_id: str, success: bool) -> None:
        async with self._lock:
            entry = self._get_by_id(cache_id)
            if success:
                entry.successful_builds += 1
            else:
                entry.failed_builds += 1

    async def list_entries(self) -> list[CacheEntry]:
        return [e.model_copy(deep=True) for e in self._by_hash.values()]

    def _get_by_id(self, cache_id: str) -> CacheEntry:
        prompt_hash = self._hash_by_id.get(cache_id)
        if prompt_hash is None:
            raise KeyError(f"No cache entry with id {cache_id}")
        return self._by_hash[prompt_hash]
