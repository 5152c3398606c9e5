"""Shared fixtures for Notion builder tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from blueprint_hub.models.blueprint import Blueprint
from blueprint_hub.notion.builder import WorkspaceBuilder


def _make_notion_client() -> MagicMock:
    """Mock AsyncClient recording calls in order; ids are handed out sequentially."""
    client = MagicMock()
    counter = {"page": 0, "db": 0}

    async def create_page(**kwargs):
        counter["page"] += 1
        return {"id": f"page-{counter['page']}", "url": f"https://www.notion.so/page-{counter['page']}"}

    async def create_database(**kwargs):
        counter["db"] += 1
        return {"id": f"db-{counter['db']}"}

    client.pages.create = AsyncMock(side_effect=create_page)
    client.pages.retrieve = AsyncMock(
        side_effect=lambda page_id: {"id": page_id, "url": f"https://www.notion.so/Root-{page_id}"}
    )
    client.databases.create = AsyncMock(side_effect=create_database)
    client.blocks.children.append = AsyncMock(return_value={})
    return client


@pytest.fixture
def notion_client() -> MagicMock:
    return _make_notion_client()


@pytest.fixture
def builder(notion_client) -> WorkspaceBuilder:
    return WorkspaceBuilder(notion_client)


@pytest.fixture
def blueprint() -> Blueprint:
    return Blueprint.model_validate(
        {
            "title": "Project Hub",
            "description": "Track projects and tasks.",
            "icon": "\U0001f4cb",
            "databases": [
                {
                    "key": "projects",
                    "title": "Projects",
                    "properties": {
                        "Name": {"type": "title"},
                        "Status": {"type": "select", "options": ["Active", "Done"]},
                    },
                },
                {
                    "key": "tasks",
                    "title": "Tasks",
                    "properties": {
                        "Task": {"type": "title"},
                        "Due": {"type": "date"},
                    },
                },
            ],
            "pages": [
                {
                    "title": "Dashboard",
                    "icon": "\U0001f3e0",
                    "blocks": [
                        {"type": "heading_1", "content": "Overview"},
                        {"type": "linked_database", "linked_database_source": "projects"},
                        {"type": "linked_database", "linked_database_source": "tasks"},
                    ],
                }
            ],
        }
    )
