"""Async Notion client construction.

The builder targets the classic database API (properties declared on the
database, rows parented by ``database_id``), so the client pins the
matching Notion-Version instead of the data-source API version.
"""

from notion_client import AsyncClient

NOTION_API_VERSION = "2022-06-28"


def create_notion_client(token: str) -> AsyncClient:
    """Return a new async Notion client authenticated with ``token``."""
    return AsyncClient(auth=token, notion_version=NOTION_API_VERSION)
