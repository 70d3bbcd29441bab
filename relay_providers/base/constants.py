"""Base shared constants for provider adapters.

Central location to avoid scattering magic strings and default numbers.

Security
--------
This module contains only generic sentinel strings and numeric defaults.
There are no credentials or tokens embedded.

# pragma: allowlist secret
"""
from __future__ import annotations

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

# Missing SDK sentinel message (formatted with the SDK distribution name)
SDK_NOT_INSTALLED = "{sdk} SDK not installed"

# OpenAI-style tool_choice wire values
TOOL_CHOICE_NONE = "none"
TOOL_CHOICE_AUTO = "auto"
TOOL_CHOICE_REQUIRED = "required"
FORCED_WITHOUT_TOOLS = "tool choice is forced but tool is not provided"

# Default HTTP behaviour (seconds / attempts)
DEFAULT_HTTP_TIMEOUT = 60.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_DELAY_BASE = 2.0

__all__ = [
    "MISSING_API_KEY_ERROR",
    "SDK_NOT_INSTALLED",
    "TOOL_CHOICE_NONE",
    "TOOL_CHOICE_AUTO",
    "TOOL_CHOICE_REQUIRED",
    "FORCED_WITHOUT_TOOLS",
    "DEFAULT_HTTP_TIMEOUT",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_DELAY_BASE",
]
