"""Prompt -> Blueprint resolution: cache first, generator on miss."""

import logging
from collections.abc import Awaitable, Callable

from pydantic import BaseModel

from blueprint_hub.cache.service import BlueprintCache
from blueprint_hub.errors import InvalidPromptError
from blueprint_hub.models.blueprint import Blueprint
from blueprint_hub.models.cache import CacheTier

logger = logging.getLogger(__name__)

Generate = Callable[[str], Awaitable[Blueprint]]


class BlueprintResolution(BaseModel):
    """A blueprint plus where it came from."""

    blueprint: Blueprint
    cached: bool
    cache_id: str | None = None
    similarity: float | None = None
    tier: CacheTier | None = None


async def resolve_blueprint(
    prompt: str, cache: BlueprintCache, generate: Generate
) -> BlueprintResolution:
    """Return a cached blueprint for ``prompt`` or generate and cache a new one.

    A failure to cache the generated blueprint is logged by the cache and
    leaves the result usable with ``cache_id=None``.

    Raises:
        InvalidPromptError: If the prompt is empty.
        BlueprintGenerationError: Propagated from ``generate``.
    """
    if not prompt or not prompt.strip():
        raise InvalidPromptError("Prompt is empty")

    result = await cache.find_cached_blueprint(prompt)
    if result.found and result.blueprint is not None:
        return BlueprintResolution(
            blueprint=result.blueprint,
            cached=True,
            cache_id=result.cache_id,
            similarity=result.similarity,
            tier=result.tier,
        )

    logger.info("Generating new blueprint for %r", prompt[:50])
    blueprint = await generate(prompt)
    cache_id = await cache.cache_blueprint(prompt, blueprint)
    return BlueprintResolution(blueprint=blueprint, cached=False, cache_id=cache_id)
