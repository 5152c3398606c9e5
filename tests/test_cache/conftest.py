"""Shared fixtures for cache tests."""

import pytest

from blueprint_hub.cache import BlueprintCache, InMemoryBlueprintStore, MemoryCache
from blueprint_hub.matching import extract_keywords, normalize_prompt, prompt_hash
from blueprint_hub.models.blueprint import (
    BlockSpec,
    Blueprint,
    DatabaseSpec,
    PageSpec,
    PropertySpec,
)
from blueprint_hub.models.cache import CacheEntry


class FakeTimer:
    """Manually advanced clock for TTL tests."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _make_blueprint(title: str = "Habit Tracker") -> Blueprint:
    return Blueprint(
        title=title,
        description=f"{title} workspace",
        icon="✅",
        databases=[
            DatabaseSpec(
                key="habits",
                title="Habits",
                properties={
                    "Name": PropertySpec(type="title"),
                    "Done": PropertySpec(type="checkbox"),
                },
            )
        ],
        pages=[
            PageSpec(
                title="Dashboard",
                blocks=[
                    BlockSpec(type="heading_1", content="Today"),
                    BlockSpec(type="linked_database", linked_database_source="habits"),
                ],
            )
        ],
    )


def _make_entry(prompt: str, title: str = "Habit Tracker", **overrides) -> CacheEntry:
    defaults = {
        "prompt_hash": prompt_hash(prompt),
        "prompt_original": prompt,
        "prompt_normalized": normalize_prompt(prompt),
        "keywords": sorted(extract_keywords(prompt)),
        "blueprint": _make_blueprint(title),
        "template_title": title,
    }
    defaults.update(overrides)
    return CacheEntry(**defaults)


@pytest.fixture
def timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture
def store() -> InMemoryBlueprintStore:
    return InMemoryBlueprintStore()


@pytest.fixture
async def cache(store: InMemoryBlueprintStore):
    cache = BlueprintCache(store, MemoryCache())
    yield cache
    await cache.drain()


@pytest.fixture
def make_blueprint():
    """Factory for a small valid Blueprint."""
    return _make_blueprint


@pytest.fixture
def make_entry():
    """Factory for a CacheEntry keyed by its prompt."""
    return _make_entry
