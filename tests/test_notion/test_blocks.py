"""Tests for BlockSpec -> Notion block translation."""

import pytest

from blueprint_hub.models.blueprint import BlockSpec, BlockType
from blueprint_hub.notion.blocks import (
    DATABASE_LINK_FALLBACK,
    DEFAULT_CALLOUT_ICON,
    placeholder_blocks,
    rich_text,
    translate_block,
    translate_blocks,
)


@pytest.mark.parametrize(
    "block_type",
    [
        BlockType.HEADING_1,
        BlockType.HEADING_2,
        BlockType.HEADING_3,
        BlockType.PARAGRAPH,
        BlockType.NUMBERED_LIST_ITEM,
        BlockType.BULLETED_LIST_ITEM,
        BlockType.QUOTE,
    ],
)
def test_text_blocks_carry_one_rich_text_run(block_type: BlockType):
    result = translate_block(BlockSpec(type=block_type, content="Hello"), {})

    assert result["type"] == block_type.value
    assert result[block_type.value]["rich_text"] == [
        {"type": "text", "text": {"content": "Hello"}}
    ]


def test_text_block_without_content_is_empty():
    result = translate_block(BlockSpec(type="paragraph"), {})
    assert result["paragraph"]["rich_text"] == []


def test_divider_has_no_content():
    result = translate_block(BlockSpec(type="divider", content="ignored"), {})
    assert result == {"object": "block", "type": "divider", "divider": {}}


def test_callout_default_icon():
    result = translate_block(BlockSpec(type="callout", content="Tip"), {})
    assert result["callout"]["icon"] == {"type": "emoji", "emoji": DEFAULT_CALLOUT_ICON}


def test_callout_custom_icon():
    result = translate_block(BlockSpec(type="callout", content="Tip", icon="\U0001f525"), {})
    assert result["callout"]["icon"]["emoji"] == "\U0001f525"


def test_to_do_is_unchecked():
    result = translate_block(BlockSpec(type="to_do", content="Ship it"), {})
    assert result["to_do"]["checked"] is False
    assert result["to_do"]["rich_text"][0]["text"]["content"] == "Ship it"


def test_linked_database_resolves_to_database_link():
    block = BlockSpec(type="linked_database", linked_database_source="tasks")

    result = translate_block(block, {"tasks": "db-123"})

    assert result["type"] == "link_to_page"
    assert result["link_to_page"] == {"type": "database_id", "database_id": "db-123"}


def test_linked_database_unknown_key_falls_back_to_paragraph():
    block = BlockSpec(type="linked_database", linked_database_source="missing")

    result = translate_block(block, {"tasks": "db-123"})

    assert result["type"] == "paragraph"
    assert result["paragraph"]["rich_text"][0]["text"]["content"] == DATABASE_LINK_FALLBACK


def test_block_type_is_case_insensitive():
    assert translate_block(BlockSpec(type="Heading_2", content="x"), {})["type"] == "heading_2"


def test_rich_text_splits_long_content():
    chunks = rich_text("a" * 4500)
    assert [len(c["text"]["content"]) for c in chunks] == [2000, 2000, 500]


def test_translate_blocks_preserves_order():
    blocks = [
        BlockSpec(type="heading_1", content="Title"),
        BlockSpec(type="divider"),
        BlockSpec(type="paragraph", content="Body"),
    ]
    assert [b["type"] for b in translate_blocks(blocks, {})] == ["heading_1", "divider", "paragraph"]


def test_placeholder_blocks():
    blocks = placeholder_blocks("Tasks")

    assert [b["type"] for b in blocks] == [
        "callout",
        "heading_2",
        "numbered_list_item",
        "numbered_list_item",
        "numbered_list_item",
    ]
    assert "Tasks" in blocks[0]["callout"]["rich_text"][0]["text"]["content"]
