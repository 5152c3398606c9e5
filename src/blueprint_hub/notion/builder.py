"""Phased Notion workspace builder.

Materializes a Blueprint under a parent page in three strictly ordered
phases:

1. Root page (title, icon, description paragraph). Failure aborts the build.
2. Databases in listed order, each followed by one placeholder row named via
   its title property. Ids are recorded by blueprint key for phase 3.
3. Content pages in listed order; linked_database blocks resolve against the
   ids recorded in phase 2.

Notion has no multi-object transactions, so phases 2 and 3 are best-effort:
a failed object is logged, recorded in the report and skipped. The builder
is not idempotent; building twice creates two workspaces.
"""

import logging

import httpx
from notion_client import AsyncClient
from notion_client import errors as notion_errors

from blueprint_hub.errors import WorkspaceBuildError
from blueprint_hub.models.blueprint import Blueprint, DatabaseSpec, PageSpec
from blueprint_hub.notion.blocks import (
    emoji_icon,
    paragraph_block,
    placeholder_blocks,
    rich_text,
    translate_blocks,
)
from blueprint_hub.notion.models import BuildFailure, BuildReport
from blueprint_hub.notion.properties import build_database_properties

logger = logging.getLogger(__name__)

_BLOCK_BATCH_SIZE = 100
_PLACEHOLDER_ICON = "\U0001f4a1"

# Errors that mean "this one object failed", not "the builder is broken"
NOTION_CALL_ERRORS = (
    notion_errors.HTTPResponseError,
    notion_errors.RequestTimeoutError,
    httpx.HTTPError,
)


class WorkspaceBuilder:
    """Builds blueprints into Notion through an injected AsyncClient."""

    def __init__(self, client: AsyncClient) -> None:
        self.client = client

    async def build(self, blueprint: Blueprint, parent_page_id: str) -> str:
        """Build ``blueprint`` under ``parent_page_id`` and return the root page id."""
        report = await self.build_with_report(blueprint, parent_page_id)
        return report.root_page_id

    async def build_with_report(self, blueprint: Blueprint, parent_page_id: str) -> BuildReport:
        """Build and return the root page id plus every per-object failure.

        Raises:
            WorkspaceBuildError: If the root page cannot be created.
        """
        logger.info("Building workspace %r under %s", blueprint.title, parent_page_id)

        # Phase 1: root page
        try:
            root = await self._create_page(
                parent={"type": "page_id", "page_id": parent_page_id},
                title=blueprint.title,
                icon=blueprint.icon,
                children=[paragraph_block(blueprint.description)],
            )
        except NOTION_CALL_ERRORS as exc:
            logger.error("Root page creation failed for %r", blueprint.title, exc_info=True)
            raise WorkspaceBuildError(f"build failed: could not create root page ({exc})") from exc

        report = BuildReport(root_page_id=root["id"])
        logger.info("Created root page %s", report.root_page_id)

        # Phase 2: databases; key -> id must be complete before any page is built
        database_ids: dict[str, str] = {}
        for database in blueprint.databases:
            try:
                database_id = await self._create_database(report.root_page_id, database)
            except NOTION_CALL_ERRORS as exc:
                self._record(report, "database", database.title, exc)
                continue
            database_ids[database.key] = database_id

            try:
                if await self._create_placeholder(database_id, database):
                    report.placeholder_count += 1
            except NOTION_CALL_ERRORS as exc:
                self._record(report, "placeholder", database.title, exc)
        report.database_ids = database_ids

        # Phase 3: content pages
        for page in blueprint.pages:
            try:
                page_id = await self._create_content_page(report.root_page_id, page, database_ids)
            except NOTION_CALL_ERRORS as exc:
                self._record(report, "page", page.title, exc)
                continue
            report.page_ids.append(page_id)

        logger.info(
            "Workspace %r built: %d databases, %d pages, %d failures",
            blueprint.title,
            len(report.database_ids),
            len(report.page_ids),
            len(report.failures),
            extra={"root_page_id": report.root_page_id},
        )
        return report

    async def retrieve_page_url(self, page_id: str) -> str:
        """Canonical URL of a page, as reported by Notion."""
        page = await self.client.pages.retrieve(page_id=page_id)
        return page["url"]

    async def _create_database(self, parent_page_id: str, database: DatabaseSpec) -> str:
        response = await self.client.databases.create(
            parent={"type": "page_id", "page_id": parent_page_id},
            title=rich_text(database.title),
            description=rich_text(database.description),
            properties=build_database_properties(database),
        )
        logger.info("Created database %r (%s)", database.title, response["id"])
        return response["id"]

    async def _create_placeholder(self, database_id: str, database: DatabaseSpec) -> bool:
        """Seed one starter row. Returns False when the database has no title property."""
        title_property = database.title_property()
        if title_property is None:
            logger.warning("No title property in %r, skipping placeholder", database.title)
            return False

        await self.client.pages.create(
            parent={"type": "database_id", "database_id": database_id},
            icon=emoji_icon(_PLACEHOLDER_ICON),
            properties={
                title_property: {
                    "title": rich_text(f"\U0001f449 Click to see how to use {database.title}")
                }
            },
            children=placeholder_blocks(database.title),
        )
        return True

    async def _create_content_page(
        self, parent_page_id: str, page: PageSpec, database_ids: dict[str, str]
    ) -> str:
        blocks = translate_blocks(page.blocks, database_ids)
        created = await self._create_page(
            parent={"type": "page_id", "page_id": parent_page_id},
            title=page.title,
            icon=page.icon,
            children=blocks,
        )
        logger.info("Created page %r (%s)", page.title, created["id"])
        return created["id"]

    async def _create_page(
        self, parent: dict, title: str, icon: str | None, children: list[dict]
    ) -> dict:
        """pages.create with the first 100 blocks, then append the rest in batches of 100."""
        kwargs: dict = {
            "parent": parent,
            "properties": {"title": {"title": rich_text(title)}},
            "children": children[:_BLOCK_BATCH_SIZE],
        }
        if icon:
            kwargs["icon"] = emoji_icon(icon)
        created = await self.client.pages.create(**kwargs)

        overflow = children[_BLOCK_BATCH_SIZE:]
        for i in range(0, len(overflow), _BLOCK_BATCH_SIZE):
            batch = overflow[i : i + _BLOCK_BATCH_SIZE]
            await self.client.blocks.children.append(block_id=created["id"], children=batch)
        return created

    @staticmethod
    def _record(report: BuildReport, kind: str, name: str, exc: Exception) -> None:
        logger.error(
            "Failed to create %s %r, continuing: %s",
            kind,
            name,
            exc,
            exc_info=True,
            extra={"root_page_id": report.root_page_id},
        )
        report.failures.append(BuildFailure(kind=kind, name=name, error=str(exc)))
