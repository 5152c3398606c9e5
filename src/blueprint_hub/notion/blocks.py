"""Pure functions converting blueprint blocks into Notion block objects.

Handles the 2000-char rich_text limit. The caller handles the 100-block
batch limit.
"""

from blueprint_hub.models.blueprint import BlockSpec, BlockType

DEFAULT_CALLOUT_ICON = "\U0001f4a1"  # light bulb
DATABASE_LINK_FALLBACK = "[Database link]"


def _split_rich_text(text: str, limit: int = 2000) -> list[dict]:
    """Split text into rich_text objects respecting Notion's 2000-char limit.

    Empty or missing text yields an empty list (an empty block).
    """
    if not text:
        return []
    return [
        {"type": "text", "text": {"content": text[i : i + limit]}}
        for i in range(0, len(text), limit)
    ]


def rich_text(text: str | None) -> list[dict]:
    return _split_rich_text(text or "")


def emoji_icon(emoji: str | None) -> dict | None:
    return {"type": "emoji", "emoji": emoji} if emoji else None


def paragraph_block(text: str | None) -> dict:
    return {
        "object": "block",
        "type": "paragraph",
        "paragraph": {"rich_text": rich_text(text)},
    }


def text_block(block_type: str, text: str | None) -> dict:
    """A block whose body is a single rich_text run (headings, list items, quote)."""
    return {
        "object": "block",
        "type": block_type,
        block_type: {"rich_text": rich_text(text)},
    }


def callout_block(text: str | None, icon: str | None = None) -> dict:
    return {
        "object": "block",
        "type": "callout",
        "callout": {
            "rich_text": rich_text(text),
            "icon": emoji_icon(icon or DEFAULT_CALLOUT_ICON),
        },
    }


def divider_block() -> dict:
    return {"object": "block", "type": "divider", "divider": {}}


def to_do_block(text: str | None) -> dict:
    return {
        "object": "block",
        "type": "to_do",
        "to_do": {"rich_text": rich_text(text), "checked": False},
    }


def link_to_database_block(database_id: str) -> dict:
    return {
        "object": "block",
        "type": "link_to_page",
        "link_to_page": {"type": "database_id", "database_id": database_id},
    }


def translate_block(block: BlockSpec, database_ids: dict[str, str]) -> dict:
    """Translate one blueprint block.

    ``database_ids`` maps blueprint database keys to ids created earlier in
    the same build. A linked_database block whose key is not in it becomes a
    plain "[Database link]" paragraph instead of failing the page.
    """
    if block.type == BlockType.LINKED_DATABASE:
        database_id = database_ids.get(block.linked_database_source or "")
        if database_id:
            return link_to_database_block(database_id)
        return paragraph_block(DATABASE_LINK_FALLBACK)
    if block.type == BlockType.DIVIDER:
        return divider_block()
    if block.type == BlockType.CALLOUT:
        return callout_block(block.content, block.icon)
    if block.type == BlockType.TO_DO:
        return to_do_block(block.content)
    return text_block(block.type.value, block.content)


def translate_blocks(blocks: list[BlockSpec], database_ids: dict[str, str]) -> list[dict]:
    return [translate_block(block, database_ids) for block in blocks]


def placeholder_blocks(database_title: str) -> list[dict]:
    """Body of the starter row seeded into every new database."""
    return [
        callout_block(f"This is a placeholder to help you get started with {database_title}."),
        text_block("heading_2", "How to use:"),
        text_block("numbered_list_item", "Click '+ New' to add your first entry"),
        text_block("numbered_list_item", "Fill in the properties with your data"),
        text_block("numbered_list_item", "Delete this placeholder when ready"),
    ]
