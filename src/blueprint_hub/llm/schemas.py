"""LLM response schema for Gemini structured output.

Gemini's response_schema cannot express free-form mappings, so database
properties come back as a list of named properties and are folded into the
``Blueprint`` mapping by the generator.
"""

from pydantic import BaseModel, Field

from blueprint_hub.models.blueprint import BlockType, PropertyType


class LLMProperty(BaseModel):
    name: str = Field(description="Column name shown in Notion")
    type: PropertyType = Field(
        description="Property kind; exactly one per database must be 'title'"
    )
    options: list[str] = Field(
        default_factory=list,
        description="Choices for select and multi_select properties, empty otherwise",
    )


class LLMDatabase(BaseModel):
    key: str = Field(description="Unique snake_case identifier, e.g. 'tasks_db'")
    title: str
    description: str | None = None
    properties: list[LLMProperty] = Field(min_length=1)


class LLMBlock(BaseModel):
    type: BlockType
    content: str | None = Field(
        default=None, description="Block text; omit for divider and linked_database"
    )
    icon: str | None = Field(default=None, description="Emoji for callout blocks")
    linked_database_source: str | None = Field(
        default=None,
        description="For linked_database blocks: the key of a database defined in this blueprint",
    )


class LLMPage(BaseModel):
    title: str
    icon: str | None = None
    blocks: list[LLMBlock] = Field(min_length=1)


class LLMBlueprint(BaseModel):
    """Schema for Gemini structured output. Used as response_schema parameter."""

    title: str = Field(description="Short workspace name")
    description: str = Field(description="One or two sentences describing the workspace")
    icon: str | None = Field(default=None, description="A single emoji")
    databases: list[LLMDatabase] = Field(min_length=1, max_length=5)
    pages: list[LLMPage] = Field(min_length=1, max_length=5)
