"""Canonical keyword extraction over a fixed synonym taxonomy.

Keywords are a controlled vocabulary: tokens that match neither a canonical
keyword nor one of its synonyms are dropped.
"""

from blueprint_hub.matching.normalizer import normalize_prompt

# Canonical keyword -> synonyms. Edit here to extend the taxonomy.
KEYWORD_MAP: dict[str, tuple[str, ...]] = {
    "project": ("projects", "task", "tasks", "todo", "todos", "work", "kanban"),
    "habit": ("habits", "routine", "routines", "daily", "tracker", "streak"),
    "goal": ("goals", "objective", "objectives", "target", "targets", "okr", "milestone"),
    "budget": ("budgets", "money", "finance", "finances", "expense", "expenses", "income"),
    "workout": ("workouts", "exercise", "exercises", "fitness", "gym", "training", "health"),
    "meal": ("meals", "food", "recipe", "recipes", "cooking", "diet", "nutrition", "calories"),
    "crm": ("customer", "customers", "client", "clients", "sales", "leads", "pipeline"),
    "content": ("blog", "blogs", "writing", "article", "articles", "post", "posts", "editorial"),
    "study": ("studies", "learning", "course", "courses", "education", "class", "notes"),
    "travel": ("trip", "trips", "vacation", "vacations", "itinerary", "journey", "destination"),
    "reading": ("books", "book", "library"),
    "journal": ("journaling", "diary", "gratitude", "reflection", "mood"),
    "inventory": ("stock", "warehouse", "products", "catalog", "assets"),
    "meeting": ("meetings", "agenda", "notes", "minutes", "standup"),
    "sprint": ("sprints", "agile", "scrum", "backlog"),
}

# First match wins, in this order
CATEGORY_PRIORITY: list[tuple[tuple[str, ...], str]] = [
    (("project", "goal"), "productivity"),
    (("budget",), "finance"),
    (("workout", "meal"), "health"),
    (("crm",), "business"),
    (("content",), "content"),
    (("study",), "education"),
    (("travel",), "travel"),
]

DEFAULT_CATEGORY = "general"


def _build_token_index(keyword_map: dict[str, tuple[str, ...]]) -> dict[str, set[str]]:
    """Invert the taxonomy: token -> canonical keywords it maps to.

    A synonym may appear under several canonicals ("notes" is both study and
    meeting); it then contributes all of them.
    """
    index: dict[str, set[str]] = {}
    for canonical, synonyms in keyword_map.items():
        index.setdefault(canonical, set()).add(canonical)
        for synonym in synonyms:
            index.setdefault(synonym, set()).add(canonical)
    return index


_TOKEN_INDEX = _build_token_index(KEYWORD_MAP)


def extract_keywords(prompt: str) -> set[str]:
    """Map the prompt's tokens to canonical keywords. Empty set when nothing matches."""
    keywords: set[str] = set()
    for token in normalize_prompt(prompt).split():
        keywords |= _TOKEN_INDEX.get(token, set())
    return keywords


def categorize_keywords(keywords: set[str] | list[str]) -> str:
    """Coarse category for a keyword set, by first match against ``CATEGORY_PRIORITY``."""
    present = set(keywords)
    for candidates, category in CATEGORY_PRIORITY:
        if present.intersection(candidates):
            return category
    return DEFAULT_CATEGORY
