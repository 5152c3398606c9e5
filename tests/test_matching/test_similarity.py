"""Tests for prompt similarity scoring."""

import pytest

from blueprint_hub.matching import content_words, similarity
from blueprint_hub.matching.similarity import jaccard

PROMPTS = [
    "habit tracker",
    "track my daily habits",
    "budget tracker for my family",
    "workout planner",
    "something else entirely",
    "",
]


def test_jaccard_empty_sets_is_zero():
    assert jaccard(set(), set()) == 0.0


def test_jaccard_basic():
    assert jaccard({"a", "b"}, {"b", "c"}) == pytest.approx(1 / 3)


def test_content_words_drops_short_words_and_folds_plurals():
    assert content_words("track my daily habits") == {"track", "daily", "habit"}


def test_content_words_keeps_ss_us_is_endings():
    assert content_words("class status analysis") == {"class", "status", "analysis"}


@pytest.mark.parametrize("a", PROMPTS)
@pytest.mark.parametrize("b", PROMPTS)
def test_similarity_bounded_and_symmetric(a: str, b: str):
    score = similarity(a, b)
    assert 0.0 <= score <= 1.0
    assert score == similarity(b, a)


@pytest.mark.parametrize("prompt", [p for p in PROMPTS if p])
def test_similarity_with_itself_is_one(prompt: str):
    assert similarity(prompt, prompt) == pytest.approx(1.0)


def test_similarity_synonym_prompt_reaches_default_threshold():
    """Same canonical keyword, one shared content word: 0.6 * 1 + 0.4 * 1/4."""
    assert similarity("track my daily habits", "habit tracker") == pytest.approx(0.7)


def test_similarity_without_keywords_uses_words_only():
    assert similarity("purple elephant", "purple giraffe") == pytest.approx(1 / 3)


def test_similarity_without_keywords_ignores_keyword_weight():
    for weight in (0.0, 0.6, 1.0):
        assert similarity("purple elephant", "purple giraffe", weight) == pytest.approx(1 / 3)
    assert similarity("purple elephant", "purple elephants", keyword_weight=1.0) == 1.0


def test_similarity_disjoint_prompts():
    assert similarity("habit tracker", "budget planner") == 0.0


def test_similarity_keyword_weight_extremes():
    a, b = "track my daily habits", "habit tracker"
    assert similarity(a, b, keyword_weight=1.0) == pytest.approx(1.0)
    assert similarity(a, b, keyword_weight=0.0) == pytest.approx(0.25)


def test_similarity_rejects_out_of_range_weight():
    with pytest.raises(ValueError):
        similarity("a", "b", keyword_weight=1.5)
