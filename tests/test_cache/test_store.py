"""Contract tests run against every persistent store backend."""

import pytest

from blueprint_hub.cache import InMemoryBlueprintStore
from blueprint_hub.cache.sqlite_store import SqliteBlueprintStore


@pytest.fixture(params=["memory", "sqlite"])
async def backend(request):
    if request.param == "memory":
        store = InMemoryBlueprintStore()
    else:
        store = SqliteBlueprintStore(":memory:")
    yield store
    await store.close()


async def test_upsert_then_get_by_hash(backend, make_entry):
    entry = make_entry("habit tracker")

    stored = await backend.upsert(entry)
    fetched = await backend.get_by_hash(entry.prompt_hash)

    assert stored.id == entry.id
    assert fetched is not None
    assert fetched.id == entry.id
    assert fetched.blueprint == entry.blueprint
    assert fetched.keywords == ["habit"]


async def test_get_by_hash_missing(backend):
    assert await backend.get_by_hash("deadbeef") is None


async def test_upsert_ignore_duplicates_keeps_first(backend, make_entry):
    first = make_entry("habit tracker", title="First")
    second = make_entry("Habit Tracker!", title="Second")

    await backend.upsert(first)
    stored = await backend.upsert(second, ignore_duplicates=True)

    assert stored.id == first.id
    assert stored.template_title == "First"
    assert len(await backend.list_entries()) == 1


async def test_upsert_overwrite_preserves_id_and_counters(backend, make_entry):
    first = make_entry("habit tracker", title="First")
    await backend.upsert(first)
    await backend.increment_usage(first.id)

    stored = await backend.upsert(make_entry("habit tracker", title="Second"), ignore_duplicates=False)

    assert stored.id == first.id
    assert stored.template_title == "Second"
    assert stored.times_used == 1


async def test_find_by_keywords_requires_overlap(backend, make_entry):
    await backend.upsert(make_entry("habit tracker"))
    await backend.upsert(make_entry("budget planner", title="Budget"))

    found = await backend.find_by_keywords({"budget"})

    assert [e.template_title for e in found] == ["Budget"]


async def test_find_by_keywords_empty_set(backend, make_entry):
    await backend.upsert(make_entry("habit tracker"))
    assert await backend.find_by_keywords(set()) == []


async def test_find_by_keywords_orders_by_usage_and_limits(backend, make_entry):
    low = make_entry("habit tracker", title="Low")
    high = make_entry("daily habits", title="High")
    other = make_entry("my routine", title="Other")
    for entry in (low, high, other):
        await backend.upsert(entry)
    for _ in range(3):
        await backend.increment_usage(high.id)
    await backend.increment_usage(other.id)

    found = await backend.find_by_keywords({"habit"}, limit=2)

    assert [e.template_title for e in found] == ["High", "Other"]


async def test_increment_usage_is_cumulative(backend, make_entry):
    entry = make_entry("habit tracker")
    await backend.upsert(entry)

    for _ in range(5):
        await backend.increment_usage(entry.id)

    fetched = await backend.get_by_hash(entry.prompt_hash)
    assert fetched.times_used == 5


async def test_record_build_counts_success_and_failure(backend, make_entry):
    entry = make_entry("habit tracker")
    await backend.upsert(entry)

    await backend.record_build(entry.id, success=True)
    await backend.record_build(entry.id, success=True)
    await backend.record_build(entry.id, success=False)

    fetched = await backend.get_by_hash(entry.prompt_hash)
    assert fetched.successful_builds == 2
    assert fetched.failed_builds == 1


async def test_unknown_id_raises_key_error(backend):
    with pytest.raises(KeyError):
        await backend.increment_usage("missing")
    with pytest.raises(KeyError):
        await backend.record_build("missing", success=True)


async def test_returned_entries_are_copies(backend, make_entry):
    entry = make_entry("habit tracker")
    await backend.upsert(entry)

    fetched = await backend.get_by_hash(entry.prompt_hash)
    fetched.times_used = 99

    again = await backend.get_by_hash(entry.prompt_hash)
    assert again.times_used == 0


def test_sqlite_store_creates_parent_directory(tmp_path):
    db_path = tmp_path / "nested" / "cache.db"
    store = SqliteBlueprintStore(db_path)
    assert db_path.exists()
    store._conn.close()
