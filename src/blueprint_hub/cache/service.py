"""Three-tier blueprint cache sitting in front of the AI generator.

Lookup order, each tier short-circuiting on a hit:

1. Memory: exact prompt-hash hit in the process-local LRU.
2. Exact: prompt-hash point lookup in the persistent store.
3. Keyword: persistent entries sharing a canonical keyword with the prompt,
   most used first, scored with ``similarity``; the best one wins if it
   reaches ``min_similarity``.

Store failures never escape this module: a failed lookup is a miss, a failed
write leaves the blueprint usable but uncached, and counter updates run on
a best-effort side channel.
"""

import logging
import time

from blueprint_hub.cache.background import BestEffortDispatcher
from blueprint_hub.cache.memory import MemoryCache
from blueprint_hub.cache.store import BlueprintStore
from blueprint_hub.matching import (
    categorize_keywords,
    extract_keywords,
    normalize_prompt,
    prompt_hash,
    similarity,
)
from blueprint_hub.matching.similarity import DEFAULT_KEYWORD_WEIGHT
from blueprint_hub.models.blueprint import Blueprint
from blueprint_hub.models.cache import (
    CacheAnalytics,
    CacheEntry,
    CacheResult,
    CacheSource,
    CacheTier,
    MemoryCacheEntry,
    PopularTemplate,
)

logger = logging.getLogger(__name__)

DEFAULT_MIN_SIMILARITY = 0.65
DEFAULT_CANDIDATE_LIMIT = 10
_POPULAR_LIMIT = 5


def _preview(prompt: str) -> str:
    return prompt[:30]


class BlueprintCache:
    """Finds, stores and tracks usage of generated blueprints."""

    def __init__(
        self,
        store: BlueprintStore,
        memory: MemoryCache | None = None,
        *,
        min_similarity: float = DEFAULT_MIN_SIMILARITY,
        keyword_weight: float = DEFAULT_KEYWORD_WEIGHT,
        candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
        dispatcher: BestEffortDispatcher | None = None,
    ) -> None:
        self.store = store
        self.memory = memory or MemoryCache()
        self.min_similarity = min_similarity
        self.keyword_weight = keyword_weight
        self.candidate_limit = candidate_limit
        self._side_channel = dispatcher or BestEffortDispatcher()

    async def find_cached_blueprint(
        self, prompt: str, min_similarity: float | None = None
    ) -> CacheResult:
        """Look the prompt up across all three tiers. Never raises for store errors."""
        threshold = self.min_similarity if min_similarity is None else min_similarity
        started = time.perf_counter()
        key = prompt_hash(prompt)

        cached = self.memory.get(key)
        if cached is not None:
            logger.info(
                "Memory cache hit for %r (%.1fms)",
                _preview(prompt),
                (time.perf_counter() - started) * 1000,
            )
            return self._hit(cached.blueprint, cached.cache_id, 1.0, CacheTier.MEMORY)

        try:
            exact = await self.store.get_by_hash(key)
            if exact is not None:
                logger.info(
                    "Exact cache hit for %r (%.1fms)",
                    _preview(prompt),
                    (time.perf_counter() - started) * 1000,
                )
                self._remember(key, exact)
                return self._hit(exact.blueprint, exact.id, 1.0, CacheTier.EXACT)

            keywords = extract_keywords(prompt)
            if keywords:
                best, best_score = await self._best_keyword_candidate(prompt, keywords)
                if best is not None and best_score >= threshold:
                    logger.info(
                        "Similar blueprint found for %r: %r (%.1f%% match, %.1fms)",
                        _preview(prompt),
                        best.template_title,
                        best_score * 100,
                        (time.perf_counter() - started) * 1000,
                    )
                    self._remember(key, best)
                    return self._hit(best.blueprint, best.id, best_score, CacheTier.KEYWORD)
        except Exception:
            logger.error(
                "Cache lookup failed for %r, treating as miss", _preview(prompt), exc_info=True
            )
            return CacheResult.miss()

        logger.info(
            "No cache match for %r (%.1fms)",
            _preview(prompt),
            (time.perf_counter() - started) * 1000,
        )
        return CacheResult.miss()

    async def _best_keyword_candidate(
        self, prompt: str, keywords: set[str]
    ) -> tuple[CacheEntry | None, float]:
        candidates = await self.store.find_by_keywords(keywords, limit=self.candidate_limit)
        best: CacheEntry | None = None
        best_score = 0.0
        for candidate in candidates:
            score = similarity(prompt, candidate.prompt_original, self.keyword_weight)
            # Strict ">" keeps the first-seen (most used) candidate on ties
            if best is None or score > best_score:
                best, best_score = candidate, score
        return best, best_score

    def _remember(self, key: str, entry: CacheEntry) -> None:
        self.memory.put(key, MemoryCacheEntry(blueprint=entry.blueprint, cache_id=entry.id))

    def _hit(
        self, blueprint: Blueprint, cache_id: str, score: float, tier: CacheTier
    ) -> CacheResult:
        self._side_channel.dispatch(
            self.store.increment_usage(cache_id), f"increment usage for {cache_id}"
        )
        return CacheResult(
            found=True,
            blueprint=blueprint,
            cache_id=cache_id,
            similarity=score,
            source=CacheSource.CACHE,
            tier=tier,
        )

    async def cache_blueprint(
        self, prompt: str, blueprint: Blueprint, user_id: str | None = None
    ) -> str | None:
        """Store a freshly generated blueprint. Returns its cache id, or None on failure.

        First writer wins: if the normalized prompt is already cached the
        existing entry is kept and its id returned.
        """
        keywords = extract_keywords(prompt)
        entry = CacheEntry(
            prompt_hash=prompt_hash(prompt),
            prompt_original=prompt,
            prompt_normalized=normalize_prompt(prompt),
            keywords=sorted(keywords),
            blueprint=blueprint,
            template_title=blueprint.title,
            template_category=categorize_keywords(keywords),
            created_by=user_id,
            successful_builds=1,
        )
        try:
            stored = await self.store.upsert(entry, ignore_duplicates=True)
        except Exception:
            logger.error("Failed to cache blueprint %r", blueprint.title, exc_info=True)
            return None

        self._remember(stored.prompt_hash, stored)
        logger.info("Blueprint cached: %r (id: %s)", stored.template_title, stored.id)
        return stored.id

    async def preload(self, entries: list[CacheEntry]) -> tuple[int, list[str]]:
        """Seed the persistent store, skipping hashes that already exist.

        Returns (inserted, errors). Errors are per-entry messages; one bad
        entry does not stop the rest.
        """
        inserted = 0
        errors: list[str] = []
        for entry in entries:
            try:
                stored = await self.store.upsert(entry, ignore_duplicates=True)
            except Exception as exc:
                logger.warning("Preload failed for %r: %s", entry.prompt_original, exc)
                errors.append(f"{entry.prompt_original}: {exc}")
                continue
            if stored.id == entry.id:
                inserted += 1
        return inserted, errors

    def update_cache_stats(self, cache_id: str, success: bool) -> None:
        """Record a build outcome for ``cache_id`` without waiting for the store."""
        self._side_channel.dispatch(
            self.store.record_build(cache_id, success),
            f"record {'successful' if success else 'failed'} build for {cache_id}",
        )

    async def get_cache_analytics(self) -> CacheAnalytics | None:
        """Aggregate usage across the persistent store, or None if it is unavailable."""
        try:
            entries = await self.store.list_entries()
        except Exception:
            logger.error("Failed to load cache analytics", exc_info=True)
            return None

        total_cached = len(entries)
        total_hits = sum(e.times_used for e in entries)
        total_builds = sum(e.successful_builds for e in entries)
        hit_rate = (
            max(0, total_hits - total_cached) / total_builds if total_builds > 0 else 0.0
        )

        popular = sorted(
            (e for e in entries if e.times_used > 1), key=lambda e: e.times_used, reverse=True
        )[:_POPULAR_LIMIT]
        return CacheAnalytics(
            total_cached=total_cached,
            total_hits=total_hits,
            hit_rate=round(hit_rate * 100),
            popular_templates=[
                PopularTemplate(title=e.template_title, uses=e.times_used) for e in popular
            ],
        )

    async def drain(self) -> None:
        """Wait for pending side-channel writes."""
        await self._side_channel.drain()
