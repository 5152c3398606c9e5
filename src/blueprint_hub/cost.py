"""Token usage extraction, cost calculation, and structured cost logging.

Centralizes Gemini pricing constants (single source of truth) and provides
utilities for extracting token usage from Gemini responses, calculating
costs, and logging structured usage data. Also estimates what cache hits
saved in generation spend for the admin analytics view.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Gemini 3 Flash pricing -- single source of truth
INPUT_PRICE_PER_TOKEN = 0.50 / 1_000_000  # $0.50 per 1M input tokens
OUTPUT_PRICE_PER_TOKEN = 3.00 / 1_000_000  # $3.00 per 1M output tokens

# Rough average spend of one blueprint generation, used for savings estimates
ESTIMATED_GENERATION_COST_USD = 0.002


@dataclass
class TokenUsage:
    """Token counts and calculated cost for a single Gemini API call."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    cost_usd: float


def extract_usage(response: object) -> TokenUsage:
    """Extract token usage from a Gemini GenerateContentResponse.

    Safely handles None values in usage_metadata by defaulting to 0.
    """
    metadata = getattr(response, "usage_metadata", None)
    prompt_tokens = getattr(metadata, "prompt_token_count", 0) or 0
    completion_tokens = getattr(metadata, "candidates_token_count", 0) or 0
    total_tokens = prompt_tokens + completion_tokens
    cost_usd = (prompt_tokens * INPUT_PRICE_PER_TOKEN) + (
        completion_tokens * OUTPUT_PRICE_PER_TOKEN
    )

    return TokenUsage(
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
        total_tokens=total_tokens,
        cost_usd=cost_usd,
    )


def log_usage(prompt: str, usage: TokenUsage) -> None:
    """Emit one INFO log with all usage fields as structured extra data."""
    # Lazy import to avoid circular dependency (cost -> llm -> generator -> cost)
    from blueprint_hub.llm.prompts import GEMINI_MODEL

    logger.info(
        "Gemini blueprint generation complete",
        extra={
            "prompt": prompt[:100],
            "model": GEMINI_MODEL,
            "prompt_tokens": usage.prompt_tokens,
            "completion_tokens": usage.completion_tokens,
            "total_tokens": usage.total_tokens,
            "cost_usd": round(usage.cost_usd, 6),
        },
    )


def estimate_savings(total_hits: int, total_cached: int) -> dict:
    """Generation calls (and dollars) avoided by cache hits."""
    calls_saved = max(0, total_hits - total_cached)
    return {
        "api_calls_saved": calls_saved,
        "cost_saved_usd": round(calls_saved * ESTIMATED_GENERATION_COST_USD, 2),
    }
