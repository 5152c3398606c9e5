"""LLM processing: blueprint generation via Gemini.

Public API:
    generate_blueprint(client, prompt) -> (Blueprint, cost_usd)
        Turns a free-text workspace request into a validated Blueprint
        via Gemini structured output with retry logic.
"""

from blueprint_hub.llm.client import create_gemini_client
from blueprint_hub.llm.generator import generate_blueprint, to_blueprint
from blueprint_hub.llm.schemas import LLMBlueprint

__all__ = [
    "create_gemini_client",
    "generate_blueprint",
    "to_blueprint",
    "LLMBlueprint",
]
