"""Tests for the phased WorkspaceBuilder."""

import httpx
import pytest
from notion_client import errors as notion_errors

from blueprint_hub.errors import WorkspaceBuildError
from blueprint_hub.models.blueprint import Blueprint, BlockSpec, PageSpec


def _database_parent_calls(notion_client) -> list[dict]:
    """pages.create calls parented by a database (placeholder rows)."""
    return [
        c.kwargs
        for c in notion_client.pages.create.call_args_list
        if c.kwargs["parent"]["type"] == "database_id"
    ]


def _content_page_calls(notion_client, root_id: str) -> list[dict]:
    return [
        c.kwargs
        for c in notion_client.pages.create.call_args_list
        if c.kwargs["parent"] == {"type": "page_id", "page_id": root_id}
    ]


async def test_build_returns_root_page_id(builder, blueprint):
    assert await builder.build(blueprint, "parent-1") == "page-1"


async def test_root_page_created_first_with_description(builder, notion_client, blueprint):
    await builder.build(blueprint, "parent-1")

    root_call = notion_client.pages.create.call_args_list[0].kwargs
    assert root_call["parent"] == {"type": "page_id", "page_id": "parent-1"}
    assert root_call["properties"]["title"]["title"][0]["text"]["content"] == "Project Hub"
    assert root_call["icon"] == {"type": "emoji", "emoji": "\U0001f4cb"}
    assert root_call["children"][0]["type"] == "paragraph"
    assert root_call["children"][0]["paragraph"]["rich_text"][0]["text"]["content"] == (
        "Track projects and tasks."
    )


async def test_databases_created_under_root_in_order(builder, notion_client, blueprint):
    report = await builder.build_with_report(blueprint, "parent-1")

    calls = notion_client.databases.create.call_args_list
    assert [c.kwargs["title"][0]["text"]["content"] for c in calls] == ["Projects", "Tasks"]
    assert all(c.kwargs["parent"] == {"type": "page_id", "page_id": "page-1"} for c in calls)
    assert calls[0].kwargs["properties"]["Status"] == {
        "select": {"options": [{"name": "Active"}, {"name": "Done"}]}
    }
    assert report.database_ids == {"projects": "db-1", "tasks": "db-2"}


async def test_every_database_gets_a_placeholder_row(builder, notion_client, blueprint):
    report = await builder.build_with_report(blueprint, "parent-1")

    placeholders = _database_parent_calls(notion_client)
    assert [p["parent"]["database_id"] for p in placeholders] == ["db-1", "db-2"]
    assert placeholders[0]["properties"]["Name"]["title"][0]["text"]["content"] == (
        "\U0001f449 Click to see how to use Projects"
    )
    assert "Task" in placeholders[1]["properties"]
    assert report.placeholder_count == 2


async def test_linked_databases_resolve_to_created_ids(builder, notion_client, blueprint):
    """Every database exists before the page that links to it is created."""
    report = await builder.build_with_report(blueprint, "parent-1")

    (page_call,) = _content_page_calls(notion_client, report.root_page_id)
    links = [b for b in page_call["children"] if b["type"] == "link_to_page"]
    assert [b["link_to_page"]["database_id"] for b in links] == ["db-1", "db-2"]
    assert notion_client.databases.create.await_count == 2
    assert report.page_ids == ["page-4"]


async def test_placeholder_skipped_without_title_property(builder, notion_client, caplog):
    blueprint = Blueprint.model_validate(
        {
            "title": "Numbers",
            "databases": [
                {"key": "nums", "title": "Nums", "properties": {"Value": {"type": "number"}}}
            ],
            "pages": [],
        }
    )

    report = await builder.build_with_report(blueprint, "parent-1")

    assert _database_parent_calls(notion_client) == []
    assert report.placeholder_count == 0
    assert report.failures == []
    assert "No title property" in caplog.text


async def test_root_failure_aborts_build(builder, notion_client, blueprint):
    notion_client.pages.create.side_effect = notion_errors.RequestTimeoutError()

    with pytest.raises(WorkspaceBuildError, match="build failed"):
        await builder.build(blueprint, "parent-1")

    notion_client.databases.create.assert_not_awaited()


async def test_database_failure_is_recorded_and_build_continues(builder, notion_client, blueprint):
    original = notion_client.databases.create.side_effect

    async def flaky_create(**kwargs):
        if kwargs["title"][0]["text"]["content"] == "Projects":
            raise httpx.ConnectError("boom")
        return await original(**kwargs)

    notion_client.databases.create.side_effect = flaky_create

    report = await builder.build_with_report(blueprint, "parent-1")

    assert report.database_ids == {"tasks": "db-1"}
    assert [(f.kind, f.name) for f in report.failures] == [("database", "Projects")]
    (page_call,) = _content_page_calls(notion_client, report.root_page_id)
    fallback = [b for b in page_call["children"] if b["type"] == "paragraph"]
    assert fallback[0]["paragraph"]["rich_text"][0]["text"]["content"] == "[Database link]"


async def test_page_failure_is_recorded(builder, notion_client, blueprint):
    original = notion_client.pages.create.side_effect

    async def flaky_create(**kwargs):
        if kwargs["properties"].get("title", {}).get("title", [{}])[0].get("text", {}).get(
            "content"
        ) == "Dashboard":
            raise notion_errors.RequestTimeoutError()
        return await original(**kwargs)

    notion_client.pages.create.side_effect = flaky_create

    report = await builder.build_with_report(blueprint, "parent-1")

    assert report.page_ids == []
    assert [(f.kind, f.name) for f in report.failures] == [("page", "Dashboard")]


async def test_long_pages_are_appended_in_batches(builder, notion_client):
    blocks = [BlockSpec(type="paragraph", content=f"Line {i}") for i in range(250)]
    blueprint = Blueprint(title="Long", pages=[PageSpec(title="Notes", blocks=blocks)])

    await builder.build(blueprint, "parent-1")

    page_call = notion_client.pages.create.call_args_list[-1].kwargs
    assert len(page_call["children"]) == 100
    appends = notion_client.blocks.children.append.call_args_list
    assert [len(c.kwargs["children"]) for c in appends] == [100, 50]
    assert all(c.kwargs["block_id"] == "page-2" for c in appends)


async def test_retrieve_page_url(builder):
    assert await builder.retrieve_page_url("page-1") == "https://www.notion.so/Root-page-1"
