"""Prompt normalization and fingerprinting.

Every prompt is normalized before it is hashed or compared, so that
"Habit Tracker!" and "habit   tracker" share one fingerprint.
"""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_prompt(prompt: str) -> str:
    """Lowercase, drop everything but ``[a-z0-9]`` and whitespace, collapse whitespace, trim."""
    text = _NON_ALNUM.sub("", prompt.lower())
    return _WHITESPACE.sub(" ", text).strip()


def prompt_hash(prompt: str) -> str:
    """Return the 8+ hex digit fingerprint of the normalized prompt.

    32-bit rolling hash (h = h*31 + code point, wrapped to signed 32 bits),
    absolute value, zero-padded hex. Not cryptographic: it is a lookup key
    for the exact-match tier, and collisions are tolerated.
    """
    h = 0
    for ch in normalize_prompt(prompt):
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return format(abs(h), "08x")
