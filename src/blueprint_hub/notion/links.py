"""Duplicate-link construction for built workspaces."""

import re

NOTION_BASE_URL = "https://www.notion.so"

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def page_slug(title: str) -> str:
    """Lowercase, non-alphanumeric runs -> "-", trimmed of leading/trailing "-"."""
    return _NON_ALNUM_RUN.sub("-", title.lower()).strip("-")


def fallback_page_url(title: str, page_id: str) -> str:
    """Page URL derived from title and id, for when the canonical URL is unavailable."""
    clean_id = page_id.replace("-", "")
    slug = page_slug(title)
    return f"{NOTION_BASE_URL}/{slug}-{clean_id}" if slug else f"{NOTION_BASE_URL}/{clean_id}"


def build_duplicate_link(page_url: str) -> str:
    """Append ``duplicate=true`` so visitors are offered a copy of the page."""
    separator = "&" if "?" in page_url else "?"
    return f"{page_url}{separator}duplicate=true"
