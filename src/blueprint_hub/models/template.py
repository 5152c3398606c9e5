"""Curated template metadata."""

from pydantic import BaseModel


class TemplateMetadata(BaseModel):
    """A hand-curated template listed in the gallery."""

    id: str
    name: str
    description: str
    category: str
    icon: str
    tags: list[str] = []
    is_pro: bool = False
    price: float = 0.0
    duplicate_link: str | None = None
