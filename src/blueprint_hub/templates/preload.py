"""Cache pre-loading from curated templates.

Each curated template gets a handful of sample prompts; every prompt is
stored in the blueprint cache with the template's starter blueprint, so a
user asking for "track my daily habits" is served instantly.
"""

import logging
import re

from pydantic import BaseModel

from blueprint_hub.cache.service import BlueprintCache
from blueprint_hub.matching import extract_keywords, normalize_prompt, prompt_hash
from blueprint_hub.models.blueprint import (
    BlockSpec,
    BlockType,
    Blueprint,
    DatabaseSpec,
    PageSpec,
    PropertySpec,
    PropertyType,
)
from blueprint_hub.models.cache import CacheEntry
from blueprint_hub.models.template import TemplateMetadata
from blueprint_hub.templates.registry import TemplateRegistry

logger = logging.getLogger(__name__)

# Template id -> prompts that should resolve to it
TEMPLATE_PROMPTS: dict[str, list[str]] = {
    "habit-tracker": [
        "habit tracker",
        "track my daily habits",
        "habit tracking system",
        "build habits",
        "routine tracker",
    ],
    "project-tracker": [
        "project tracker",
        "project management",
        "manage my projects",
        "task and project tracker",
        "project management system",
    ],
    "goal-tracker": [
        "goal tracker",
        "track my goals",
        "goal setting system",
        "goals and milestones",
        "okr tracker",
    ],
    "daily-planner": [
        "daily planner",
        "plan my day",
        "daily schedule",
        "time blocking",
        "day planner",
    ],
    "meeting-notes": [
        "meeting notes",
        "meeting tracker",
        "track meetings",
        "meeting agenda",
        "meeting management",
    ],
    "budget-tracker": [
        "budget tracker",
        "track my budget",
        "expense tracker",
        "money management",
        "personal finance",
    ],
    "expense-tracker": [
        "expense tracker",
        "track expenses",
        "spending tracker",
        "expense management",
    ],
    "investment-tracker": [
        "investment tracker",
        "track investments",
        "portfolio tracker",
        "stock tracker",
    ],
    "workout-tracker": [
        "workout tracker",
        "gym tracker",
        "exercise log",
        "fitness tracker",
        "workout planner",
    ],
    "meal-planner": [
        "meal planner",
        "meal prep",
        "recipe tracker",
        "food planner",
        "nutrition tracker",
    ],
    "weight-tracker": [
        "weight tracker",
        "weight loss tracker",
        "fitness goals",
        "body measurements",
    ],
    "content-calendar": [
        "content calendar",
        "content planner",
        "social media calendar",
        "editorial calendar",
        "content schedule",
    ],
    "blog-manager": [
        "blog manager",
        "blog tracker",
        "article tracker",
        "blog post planner",
    ],
    "crm": [
        "crm",
        "customer tracker",
        "client management",
        "sales tracker",
        "lead tracker",
    ],
    "inventory-tracker": [
        "inventory tracker",
        "stock management",
        "product inventory",
        "warehouse tracker",
    ],
    "study-planner": [
        "study planner",
        "study tracker",
        "course tracker",
        "learning tracker",
        "class schedule",
    ],
    "book-tracker": [
        "book tracker",
        "reading list",
        "book log",
        "reading tracker",
    ],
    "travel-planner": [
        "travel planner",
        "trip planner",
        "vacation planner",
        "itinerary tracker",
    ],
    "journal": [
        "journal",
        "daily journal",
        "gratitude journal",
        "diary",
        "reflection journal",
    ],
}

_NON_WORD = re.compile(r"[^\w\s]")


class CacheablePrompt(BaseModel):
    template_id: str
    prompt: str


class PreloadStats(BaseModel):
    total: int
    inserted: int
    skipped: int
    errors: list[str] = []


def sample_blueprint(template: TemplateMetadata) -> Blueprint:
    """Starter blueprint for a curated template: one database and a dashboard page."""
    database_key = f"{template.id.replace('-', '_')}_main"
    return Blueprint(
        title=template.name,
        description=template.description,
        icon=template.icon,
        databases=[
            DatabaseSpec(
                key=database_key,
                title=_NON_WORD.sub("", template.name).strip(),
                description=f"Track your {template.name.lower()}",
                properties={
                    "Name": PropertySpec(type=PropertyType.TITLE),
                    "Status": PropertySpec(
                        type=PropertyType.SELECT,
                        options=["Not Started", "In Progress", "Done"],
                    ),
                    "Date": PropertySpec(type=PropertyType.DATE),
                    "Notes": PropertySpec(type=PropertyType.TEXT),
                },
            )
        ],
        pages=[
            PageSpec(
                title=f"{template.name} Dashboard",
                icon=template.icon,
                blocks=[
                    BlockSpec(type=BlockType.HEADING_1, content=f"Welcome to {template.name}"),
                    BlockSpec(type=BlockType.CALLOUT, content=template.description),
                    BlockSpec(type=BlockType.DIVIDER),
                    BlockSpec(type=BlockType.HEADING_2, content="Quick Start"),
                    BlockSpec(
                        type=BlockType.NUMBERED_LIST_ITEM,
                        content="Click on the database below to add your first entry",
                    ),
                    BlockSpec(
                        type=BlockType.NUMBERED_LIST_ITEM,
                        content="Customize the views to suit your workflow",
                    ),
                    BlockSpec(type=BlockType.DIVIDER),
                    BlockSpec(type=BlockType.HEADING_2, content="Your Data"),
                    BlockSpec(
                        type=BlockType.LINKED_DATABASE,
                        linked_database_source=database_key,
                    ),
                ],
            )
        ],
    )


def cacheable_prompts(registry: TemplateRegistry | None = None) -> list[CacheablePrompt]:
    """Every (template, prompt) pair whose template exists in ``registry``."""
    registry = registry or TemplateRegistry()
    return [
        CacheablePrompt(template_id=template_id, prompt=prompt)
        for template_id, prompts in TEMPLATE_PROMPTS.items()
        if registry.get(template_id) is not None
        for prompt in prompts
    ]


def preload_entry(template: TemplateMetadata, prompt: str) -> CacheEntry:
    """Cache entry for one sample prompt of ``template``."""
    return CacheEntry(
        prompt_hash=prompt_hash(prompt),
        prompt_original=prompt,
        prompt_normalized=normalize_prompt(prompt),
        keywords=sorted(extract_keywords(prompt)),
        blueprint=sample_blueprint(template),
        template_title=template.name,
        template_category=template.category.lower(),
        successful_builds=1,
    )


async def preload_cache(cache: BlueprintCache, registry: TemplateRegistry) -> PreloadStats:
    """Seed ``cache`` with every curated sample prompt. Existing hashes are left alone."""
    total = sum(len(p) for p in TEMPLATE_PROMPTS.values())
    entries: list[CacheEntry] = []
    skipped = 0
    for template_id, template_prompts in TEMPLATE_PROMPTS.items():
        template = registry.get(template_id)
        if template is None:
            skipped += len(template_prompts)
            continue
        entries.extend(preload_entry(template, prompt) for prompt in template_prompts)

    inserted, errors = await cache.preload(entries)
    skipped += len(entries) - inserted - len(errors)
    logger.info(
        "Cache preloaded: %d inserted, %d skipped, %d errors", inserted, skipped, len(errors)
    )
    return PreloadStats(total=total, inserted=inserted, skipped=skipped, errors=errors[:10])
