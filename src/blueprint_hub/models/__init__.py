"""Data models for blueprints, cache entries and curated templates."""

from blueprint_hub.models.blueprint import (
    BlockSpec,
    BlockType,
    Blueprint,
    DatabaseSpec,
    PageSpec,
    PropertySpec,
    PropertyType,
)
from blueprint_hub.models.cache import (
    CacheAnalytics,
    CacheEntry,
    CacheResult,
    CacheSource,
    CacheTier,
    MemoryCacheEntry,
    PopularTemplate,
)
from blueprint_hub.models.template import TemplateMetadata

__all__ = [
    "BlockSpec",
    "BlockType",
    "Blueprint",
    "DatabaseSpec",
    "PageSpec",
    "PropertySpec",
    "PropertyType",
    "CacheAnalytics",
    "CacheEntry",
    "CacheResult",
    "CacheSource",
    "CacheTier",
    "MemoryCacheEntry",
    "PopularTemplate",
    "TemplateMetadata",
]
