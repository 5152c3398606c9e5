"""Blueprint cache: memory tier, persistent stores and the three-tier lookup service."""

from blueprint_hub.cache.background import BestEffortDispatcher
from blueprint_hub.cache.factory import create_blueprint_cache, create_store
from blueprint_hub.cache.memory import MemoryCache
from blueprint_hub.cache.service import BlueprintCache
from blueprint_hub.cache.store import BlueprintStore, InMemoryBlueprintStore

__all__ = [
    "BestEffortDispatcher",
    "BlueprintCache",
    "BlueprintStore",
    "InMemoryBlueprintStore",
    "MemoryCache",
    "create_blueprint_cache",
    "create_store",
]
