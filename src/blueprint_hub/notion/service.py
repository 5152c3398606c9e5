"""Build orchestration: builder run, duplicate link, cache stats, batch builds.

Wires the WorkspaceBuilder to link construction and to the blueprint
cache's build counters, and runs curated batch builds with a fixed delay
between builds to stay under Notion's rate limit.
"""

import asyncio
import logging

from blueprint_hub.cache.service import BlueprintCache
from blueprint_hub.errors import WorkspaceBuildError
from blueprint_hub.models.blueprint import Blueprint
from blueprint_hub.notion.builder import NOTION_CALL_ERRORS, WorkspaceBuilder
from blueprint_hub.notion.links import build_duplicate_link, fallback_page_url
from blueprint_hub.notion.models import BatchBuildItem, BuildResult

logger = logging.getLogger(__name__)

DEFAULT_BUILD_DELAY_SECONDS = 1.0


async def resolve_page_url(builder: WorkspaceBuilder, title: str, page_id: str) -> str:
    """Canonical page URL, or a slug-derived URL if Notion cannot be asked."""
    try:
        return await builder.retrieve_page_url(page_id)
    except (*NOTION_CALL_ERRORS, KeyError) as exc:
        logger.warning("Could not retrieve URL for %s, using slug fallback: %s", page_id, exc)
        return fallback_page_url(title, page_id)


async def build_workspace(
    builder: WorkspaceBuilder,
    blueprint: Blueprint,
    parent_page_id: str,
    cache: BlueprintCache | None = None,
    cache_id: str | None = None,
) -> BuildResult:
    """Build ``blueprint`` and return its URL and duplicate link.

    A build that fails partway still returns a result as long as the root
    page exists; ``failures`` lists what was skipped. Build outcomes are
    reported to ``cache`` (best-effort) when a ``cache_id`` is given.

    Raises:
        WorkspaceBuildError: If the root page could not be created.
    """
    try:
        report = await builder.build_with_report(blueprint, parent_page_id)
    except WorkspaceBuildError:
        if cache is not None and cache_id:
            cache.update_cache_stats(cache_id, success=False)
        raise

    notion_url = await resolve_page_url(builder, blueprint.title, report.root_page_id)
    duplicate_link = build_duplicate_link(notion_url)
    logger.info("Duplicate link for %r: %s", blueprint.title, duplicate_link)

    if cache is not None and cache_id:
        cache.update_cache_stats(cache_id, success=not report.failures)

    return BuildResult(
        root_page_id=report.root_page_id,
        notion_url=notion_url,
        duplicate_link=duplicate_link,
        title=blueprint.title,
        cache_id=cache_id,
        failures=report.failures,
    )


async def build_many(
    builder: WorkspaceBuilder,
    blueprints: list[tuple[str, Blueprint]],
    parent_page_id: str,
    delay_seconds: float = DEFAULT_BUILD_DELAY_SECONDS,
) -> list[BatchBuildItem]:
    """Build ``(id, blueprint)`` pairs one after another.

    One failed build is recorded and the batch moves on. ``delay_seconds``
    is slept between builds, not after the last one.
    """
    results: list[BatchBuildItem] = []
    for index, (item_id, blueprint) in enumerate(blueprints):
        if index > 0 and delay_seconds > 0:
            await asyncio.sleep(delay_seconds)
        try:
            result = await build_workspace(builder, blueprint, parent_page_id)
        except WorkspaceBuildError as exc:
            logger.error("Batch build failed for %s: %s", item_id, exc)
            results.append(
                BatchBuildItem(id=item_id, name=blueprint.title, success=False, error=str(exc))
            )
            continue
        results.append(
            BatchBuildItem(
                id=item_id,
                name=blueprint.title,
                success=True,
                page_id=result.root_page_id,
                duplicate_link=result.duplicate_link,
            )
        )

    logger.info(
        "Batch build complete: %d/%d succeeded",
        sum(1 for r in results if r.success),
        len(results),
    )
    return results
