"""Tests for the Gemini structured-output schema."""

import pytest
from pydantic import ValidationError

from blueprint_hub.llm.schemas import LLMBlock, LLMBlueprint, LLMDatabase, LLMPage, LLMProperty


def _database() -> LLMDatabase:
    return LLMDatabase(
        key="tasks_db",
        title="Tasks",
        properties=[LLMProperty(name="Name", type="title")],
    )


def _page() -> LLMPage:
    return LLMPage(title="Home", blocks=[LLMBlock(type="paragraph", content="Hi")])


def test_valid_blueprint():
    blueprint = LLMBlueprint(
        title="Tasks", description="Task list.", databases=[_database()], pages=[_page()]
    )
    assert blueprint.icon is None


def test_requires_at_least_one_database():
    with pytest.raises(ValidationError):
        LLMBlueprint(title="Tasks", description="Task list.", databases=[], pages=[_page()])


def test_at_most_five_pages():
    with pytest.raises(ValidationError):
        LLMBlueprint(
            title="Tasks",
            description="Task list.",
            databases=[_database()],
            pages=[_page() for _ in range(6)],
        )


def test_property_type_aliases_rejected_outside_domain_model():
    """The LLM schema offers only canonical names; aliases are a domain-model convenience."""
    with pytest.raises(ValidationError):
        LLMProperty(name="Notes", type="rich_text")


def test_unknown_block_type_rejected():
    with pytest.raises(ValidationError):
        LLMBlock(type="table")
