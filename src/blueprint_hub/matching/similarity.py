"""Prompt similarity: weighted blend of keyword and content-word Jaccard overlap."""

from blueprint_hub.matching.keywords import extract_keywords
from blueprint_hub.matching.normalizer import normalize_prompt

DEFAULT_KEYWORD_WEIGHT = 0.6
_MIN_WORD_LENGTH = 3


def jaccard(a: set[str], b: set[str]) -> float:
    """|a & b| / |a | b|, defined as 0.0 when both sets are empty."""
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def _fold_plural(word: str) -> str:
    # habits -> habit, tasks -> task; leaves "class", "status", "analysis" alone
    if len(word) > 3 and word.endswith("s") and not word.endswith(("ss", "us", "is")):
        return word[:-1]
    return word


def content_words(prompt: str) -> set[str]:
    """Normalized words longer than two characters, with plural endings folded."""
    return {
        _fold_plural(word)
        for word in normalize_prompt(prompt).split()
        if len(word) >= _MIN_WORD_LENGTH
    }


def keyword_similarity(prompt_a: str, prompt_b: str) -> float:
    return jaccard(extract_keywords(prompt_a), extract_keywords(prompt_b))


def word_similarity(prompt_a: str, prompt_b: str) -> float:
    return jaccard(content_words(prompt_a), content_words(prompt_b))


def similarity(
    prompt_a: str,
    prompt_b: str,
    keyword_weight: float = DEFAULT_KEYWORD_WEIGHT,
) -> float:
    """Score two prompts in [0, 1].

    ``keyword_weight`` of the score comes from canonical keyword overlap and
    the remainder from content-word overlap. When neither prompt yields any
    keyword the keyword component carries no signal, and the score is the
    content-word overlap alone. Symmetric and deterministic.
    """
    if not 0.0 <= keyword_weight <= 1.0:
        raise ValueError(f"keyword_weight must be within [0, 1], got {keyword_weight}")

    keywords_a, keywords_b = extract_keywords(prompt_a), extract_keywords(prompt_b)
    words_sim = jaccard(content_words(prompt_a), content_words(prompt_b))
    if not keywords_a and not keywords_b:
        return words_sim

    score = keyword_weight * jaccard(keywords_a, keywords_b) + (1.0 - keyword_weight) * words_sim
    return min(1.0, max(0.0, score))
