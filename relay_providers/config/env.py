"""API key environment variables per provider.

``ENV_MAP`` names the canonical variable of each provider. ``ENV_ALIASES``
lists every accepted variable in lookup order (canonical first); gemini, for
example, also reads ``GOOGLE_API_KEY`` like the google-generativeai SDK does.

Lookups never raise: unknown providers and unset or placeholder values
resolve to ``None`` and the caller decides what a missing key means.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical provider → env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "ark": "ARK_API_KEY",
    "qianfan": "QIANFAN_API_KEY",
    # GOOGLE_API_KEY is accepted as an alias (google-generativeai reads it too).
    "gemini": "GEMINI_API_KEY",
}


# Provider → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "ark": ("ARK_API_KEY", "VOLC_ARK_API_KEY"),
    "qianfan": ("QIANFAN_API_KEY", "QIANFAN_BEARER_TOKEN"),
}


_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "example", "your_", "xxx")


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a template value rather than a credential.

    Matches (case-insensitive, surrounding spaces ignored) any of
    ``_PLACEHOLDER_MARKERS`` or a ``test_`` prefix. ``None`` is not a
    placeholder; it is simply unset.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return any(marker in v for marker in _PLACEHOLDER_MARKERS) or v.startswith("test_")


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical API-key variable for ``provider`` (case-insensitive)."""
    return ENV_MAP.get(provider.lower()) if provider else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable API-key variable names, canonical first, then aliases."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for ``provider`` from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first candidate holding a real
        (non-placeholder) value; ``(None, None)`` when nothing usable is set.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
