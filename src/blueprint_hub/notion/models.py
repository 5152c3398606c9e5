"""Result types for workspace builds.

Transient: nothing here is persisted by the builder itself.
"""

from pydantic import BaseModel


class BuildFailure(BaseModel):
    """A database, placeholder row or page that could not be created."""

    kind: str  # "database", "placeholder", "page"
    name: str
    error: str


class BuildReport(BaseModel):
    """What a single builder run produced."""

    root_page_id: str
    database_ids: dict[str, str] = {}
    page_ids: list[str] = []
    placeholder_count: int = 0
    failures: list[BuildFailure] = []


class BuildResult(BaseModel):
    """Returned to callers after a successful (possibly partial) build."""

    root_page_id: str
    notion_url: str
    duplicate_link: str
    title: str
    cache_id: str | None = None
    failures: list[BuildFailure] = []


class BatchBuildItem(BaseModel):
    """One entry of a batch build summary."""

    id: str
    name: str
    success: bool
    page_id: str | None = None
    duplicate_link: str | None = None
    error: str | None = None
