"""Blueprint generator: free-text prompt -> validated Blueprint via Gemini.

Handles Gemini API calls with tenacity retry logic, validates the structured
response via Pydantic, folds it into the domain ``Blueprint`` and rejects
blueprints whose cross-references are broken, so nothing broken is ever
cached.
"""

import logging

import httpx
from google import genai
from google.genai import types
from google.genai.errors import APIError, ClientError, ServerError
from pydantic import ValidationError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from blueprint_hub.cost import extract_usage, log_usage
from blueprint_hub.errors import BlueprintGenerationError, InvalidPromptError
from blueprint_hub.llm.prompts import GEMINI_MODEL, SYSTEM_PROMPT, build_user_content
from blueprint_hub.llm.schemas import LLMBlueprint
from blueprint_hub.models.blueprint import (
    BlockSpec,
    Blueprint,
    DatabaseSpec,
    PageSpec,
    PropertySpec,
)

logger = logging.getLogger(__name__)


def _is_retryable(error: BaseException) -> bool:
    """Determine if a Gemini API error is transient and worth retrying.

    Returns True for server errors (5xx) and rate limits (429).
    Returns False for permanent client errors (400, 401, 403).
    """
    if isinstance(error, ServerError):
        return True
    if isinstance(error, ClientError) and error.code == 429:
        return True
    return False


@retry(
    retry=retry_if_exception(_is_retryable),
    wait=wait_exponential_jitter(initial=1, max=30, jitter=2),
    stop=stop_after_attempt(4),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def _call_gemini(client: genai.Client, user_content: str) -> object:
    """Call Gemini with structured output, retrying on transient errors.

    Returns the raw GenerateContentResponse (caller extracts .parsed and
    usage_metadata).
    """
    response = await client.aio.models.generate_content(
        model=GEMINI_MODEL,
        contents=user_content,
        config=types.GenerateContentConfig(
            system_instruction=SYSTEM_PROMPT,
            response_mime_type="application/json",
            response_schema=LLMBlueprint,
            temperature=0.7,
        ),
    )
    return response


def to_blueprint(llm_result: LLMBlueprint) -> Blueprint:
    """Fold the LLM's list-shaped properties into the domain Blueprint."""
    return Blueprint(
        title=llm_result.title,
        description=llm_result.description,
        icon=llm_result.icon,
        databases=[
            DatabaseSpec(
                key=db.key,
                title=db.title,
                description=db.description,
                properties={
                    prop.name: PropertySpec(type=prop.type, options=prop.options)
                    for prop in db.properties
                },
            )
            for db in llm_result.databases
        ],
        pages=[
            PageSpec(
                title=page.title,
                icon=page.icon,
                blocks=[
                    BlockSpec(
                        type=block.type,
                        content=block.content,
                        icon=block.icon,
                        linked_database_source=block.linked_database_source,
                    )
                    for block in page.blocks
                ],
            )
            for page in llm_result.pages
        ],
    )


async def generate_blueprint(client: genai.Client, prompt: str) -> tuple[Blueprint, float]:
    """Generate a Blueprint for ``prompt``.

    Returns:
        Tuple of (Blueprint, cost_usd) where cost_usd is the Gemini API cost.

    Raises:
        InvalidPromptError: If the prompt is empty.
        BlueprintGenerationError: On API failure, schema validation failure,
            or a blueprint with broken database references.
    """
    if not prompt or not prompt.strip():
        raise InvalidPromptError("Prompt is empty")

    try:
        response = await _call_gemini(client, build_user_content(prompt))
    except ValidationError as exc:
        logger.error("Gemini response failed schema validation for %r", prompt[:50], exc_info=True)
        raise BlueprintGenerationError("generation failed: invalid response") from exc
    except APIError as exc:
        logger.error("Gemini API error generating blueprint for %r", prompt[:50], exc_info=True)
        raise BlueprintGenerationError("generation failed") from exc
    except httpx.HTTPError as exc:
        logger.error(
            "Gemini transport error generating blueprint for %r", prompt[:50], exc_info=True
        )
        raise BlueprintGenerationError("generation failed") from exc

    llm_result = response.parsed
    if llm_result is None:
        raise BlueprintGenerationError("generation failed: empty response")

    usage = extract_usage(response)
    log_usage(prompt, usage)

    blueprint = to_blueprint(llm_result)
    problems = blueprint.validate_references()
    if problems:
        logger.warning(
            "Generated blueprint rejected: %s",
            "; ".join(problems),
            extra={"prompt": prompt[:100]},
        )
        raise BlueprintGenerationError(f"generation failed: {problems[0]}")

    return blueprint, usage.cost_usd
