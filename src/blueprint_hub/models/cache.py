"""Cache entry and lookup result models."""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from blueprint_hub.models.blueprint import Blueprint


class CacheSource(str, Enum):
    """Where the blueprint handed to the caller came from."""

    CACHE = "cache"
    GENERATED = "generated"


class CacheTier(str, Enum):
    """Which lookup tier produced a hit."""

    MEMORY = "memory"
    EXACT = "exact"
    KEYWORD = "keyword"


class CacheEntry(BaseModel):
    """A persisted blueprint keyed by the hash of its normalized prompt."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    prompt_hash: str
    prompt_original: str
    prompt_normalized: str
    keywords: list[str] = []
    blueprint: Blueprint
    template_title: str
    template_category: str = "general"
    created_by: str | None = None
    times_used: int = Field(default=0, ge=0)
    successful_builds: int = Field(default=0, ge=0)
    failed_builds: int = Field(default=0, ge=0)
    avg_rating: float = 0.0
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class MemoryCacheEntry(BaseModel):
    """Value held by the in-process memory tier."""

    blueprint: Blueprint
    cache_id: str


class CacheResult(BaseModel):
    """Outcome of a cache lookup."""

    found: bool
    blueprint: Blueprint | None = None
    cache_id: str | None = None
    similarity: float | None = None
    source: CacheSource = CacheSource.GENERATED
    tier: CacheTier | None = None

    @classmethod
    def miss(cls) -> "CacheResult":
        return cls(found=False, source=CacheSource.GENERATED)


class PopularTemplate(BaseModel):
    title: str
    uses: int


class CacheAnalytics(BaseModel):
    """Aggregate usage figures for the admin dashboard."""

    total_cached: int
    total_hits: int
    hit_rate: int  # percent
    popular_templates: list[PopularTemplate] = []
