"""Prompt matching: normalization, keyword extraction and similarity scoring."""

from blueprint_hub.matching.keywords import (
    KEYWORD_MAP,
    categorize_keywords,
    extract_keywords,
)
from blueprint_hub.matching.normalizer import normalize_prompt, prompt_hash
from blueprint_hub.matching.similarity import (
    content_words,
    keyword_similarity,
    similarity,
    word_similarity,
)

__all__ = [
    "KEYWORD_MAP",
    "categorize_keywords",
    "content_words",
    "extract_keywords",
    "keyword_similarity",
    "normalize_prompt",
    "prompt_hash",
    "similarity",
    "word_similarity",
]
