"""Notion output: workspace building and duplicate links."""

from blueprint_hub.notion.blocks import translate_block, translate_blocks
from blueprint_hub.notion.builder import WorkspaceBuilder
from blueprint_hub.notion.client import create_notion_client
from blueprint_hub.notion.links import build_duplicate_link, fallback_page_url, page_slug
from blueprint_hub.notion.models import BatchBuildItem, BuildFailure, BuildReport, BuildResult
from blueprint_hub.notion.properties import build_database_properties, build_property
from blueprint_hub.notion.service import build_many, build_workspace

__all__ = [
    "BatchBuildItem",
    "BuildFailure",
    "BuildReport",
    "BuildResult",
    "WorkspaceBuilder",
    "build_database_properties",
    "build_duplicate_link",
    "build_many",
    "build_property",
    "build_workspace",
    "create_notion_client",
    "fallback_page_url",
    "page_slug",
    "translate_block",
    "translate_blocks",
]
