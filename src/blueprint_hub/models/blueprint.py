"""Blueprint model: the structured description of a workspace to build."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class PropertyType(str, Enum):
    """Database property kinds a blueprint may declare."""

    TITLE = "title"
    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    DATE = "date"
    CHECKBOX = "checkbox"
    URL = "url"
    EMAIL = "email"
    PHONE = "phone"
    STATUS = "status"


# Notion's own spellings, accepted on input
_PROPERTY_TYPE_ALIASES = {
    "rich_text": PropertyType.TEXT,
    "phone_number": PropertyType.PHONE,
}


class BlockType(str, Enum):
    """Content block kinds a blueprint page may contain."""

    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    PARAGRAPH = "paragraph"
    CALLOUT = "callout"
    DIVIDER = "divider"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    TO_DO = "to_do"
    QUOTE = "quote"
    LINKED_DATABASE = "linked_database"


class PropertySpec(BaseModel):
    """A typed database column. ``options`` only matters for select kinds."""

    type: PropertyType
    options: list[str] = []

    @field_validator("type", mode="before")
    @classmethod
    def _resolve_alias(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            return _PROPERTY_TYPE_ALIASES.get(value, value)
        return value


class DatabaseSpec(BaseModel):
    """A database to create under the root page, addressable by ``key``."""

    key: str
    title: str
    description: str | None = None
    properties: dict[str, PropertySpec] = {}

    def title_property(self) -> str | None:
        """Name of the first ``title`` property, or None if the database has none."""
        for name, prop in self.properties.items():
            if prop.type == PropertyType.TITLE:
                return name
        return None


class BlockSpec(BaseModel):
    """A single content block on a blueprint page."""

    type: BlockType
    content: str | None = None
    icon: str | None = None  # callout only
    linked_database_source: str | None = None  # linked_database only

    @field_validator("type", mode="before")
    @classmethod
    def _lowercase_type(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class PageSpec(BaseModel):
    """A content page created after all databases exist."""

    title: str
    icon: str | None = None
    blocks: list[BlockSpec] = []


class Blueprint(BaseModel):
    """A complete workspace description: root page, databases and pages."""

    title: str
    description: str = ""
    icon: str | None = None
    databases: list[DatabaseSpec] = Field(default_factory=list)
    pages: list[PageSpec] = Field(default_factory=list)

    def database_keys(self) -> set[str]:
        return {db.key for db in self.databases}

    def validate_references(self) -> list[str]:
        """Return a list of structural problems; empty when the blueprint is sound.

        Checks duplicate database keys, linked_database blocks whose source
        key does not exist, and databases with more than one title property.
        A database with no title property is not reported: the builder skips
        its placeholder row instead.
        """
        problems: list[str] = []
        seen: set[str] = set()
        for db in self.databases:
            if db.key in seen:
                problems.append(f"Duplicate database key: {db.key}")
            seen.add(db.key)
            title_count = sum(1 for p in db.properties.values() if p.type == PropertyType.TITLE)
            if title_count > 1:
                problems.append(f"Database {db.key} has {title_count} title properties")

        for page in self.pages:
            for block in page.blocks:
                if block.type != BlockType.LINKED_DATABASE:
                    continue
                if block.linked_database_source not in seen:
                    source = block.linked_database_source
                    problems.append(f"Page {page.title!r} links unknown database {source!r}")
        return problems
