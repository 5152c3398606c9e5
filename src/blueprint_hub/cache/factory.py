"""Construct the configured cache store and cache service from settings."""

from blueprint_hub.cache.memory import MemoryCache
from blueprint_hub.cache.service import BlueprintCache
from blueprint_hub.cache.store import BlueprintStore, InMemoryBlueprintStore
from blueprint_hub.config import Settings


def create_store(settings: Settings) -> BlueprintStore:
    """Instantiate the configured persistent backend.

    Raises ValueError for an unknown ``cache_backend``.
    """
    backend = settings.cache_backend.lower()

    if backend == "memory":
        return InMemoryBlueprintStore()

    if backend == "sqlite":
        from blueprint_hub.cache.sqlite_store import SqliteBlueprintStore

        return SqliteBlueprintStore(settings.cache_db_path)

    raise ValueError(f"Unsupported cache backend: {backend!r}")


def create_blueprint_cache(
    settings: Settings, store: BlueprintStore | None = None
) -> BlueprintCache:
    """Wire a BlueprintCache with its store and memory tier from settings."""
    return BlueprintCache(
        store if store is not None else create_store(settings),
        MemoryCache(
            max_size=settings.memory_cache_size,
            ttl_seconds=settings.memory_cache_ttl_seconds,
        ),
        min_similarity=settings.min_similarity,
        keyword_weight=settings.keyword_weight,
        candidate_limit=settings.candidate_limit,
    )
