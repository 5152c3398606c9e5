from blueprint_hub.templates.preload import (
    TEMPLATE_PROMPTS,
    CacheablePrompt,
    PreloadStats,
    cacheable_prompts,
    preload_cache,
    sample_blueprint,
)
from blueprint_hub.templates.registry import CURATED_TEMPLATES, TemplateRegistry

__all__ = [
    "CURATED_TEMPLATES",
    "TEMPLATE_PROMPTS",
    "CacheablePrompt",
    "PreloadStats",
    "TemplateRegistry",
    "cacheable_prompts",
    "preload_cache",
    "sample_blueprint",
]
