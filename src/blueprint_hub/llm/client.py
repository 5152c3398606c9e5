"""Gemini client construction.

Uses a 60-second HTTP timeout. Does NOT configure HttpRetryOptions --
tenacity handles retries at the application level to avoid double-retry
behavior. The client is created once at startup and passed to the
generator explicitly.
"""

from google import genai
from google.genai import types


def create_gemini_client(api_key: str) -> genai.Client:
    """Return a new Gemini client for ``api_key``."""
    return genai.Client(
        api_key=api_key,
        http_options=types.HttpOptions(timeout=60_000),
    )
