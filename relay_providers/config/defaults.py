"""relay_providers.config.defaults
===============================

Central place for small, stable default values used by the provider
adapters. These defaults can be overridden via environment variables or
external configuration, but provide sensible fallbacks for local development
and tests.

This module intentionally avoids importing from other provider packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# OpenAI defaults (the SDK uses api.openai.com when base_url is omitted).
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"

# Volcengine Ark (OpenAI-compatible endpoint). The model is an endpoint id
# created on the Ark console, so there is no usable default.
ARK_DEFAULT_BASE_URL = "https://ark.cn-beijing.volces.com/api/v3"
ARK_DEFAULT_MAX_RETRIES = 2
ARK_DEFAULT_TIMEOUT = 600.0

# Baidu Qianfan (OpenAI-compatible v2 endpoint)
QIANFAN_DEFAULT_MODEL = "ernie-3.5-8k"
QIANFAN_DEFAULT_BASE_URL = "https://qianfan.baidubce.com/v2"
QIANFAN_DEFAULT_TEMPERATURE = 0.95
QIANFAN_DEFAULT_TOP_P = 0.7
QIANFAN_DEFAULT_PARALLEL_TOOL_CALLS = True

# Gemini defaults
GEMINI_DEFAULT_MODEL = "gemini-1.5-flash"


__all__ = [
    "OPENAI_DEFAULT_MODEL",
    "ARK_DEFAULT_BASE_URL",
    "ARK_DEFAULT_MAX_RETRIES",
    "ARK_DEFAULT_TIMEOUT",
    "QIANFAN_DEFAULT_MODEL",
    "QIANFAN_DEFAULT_BASE_URL",
    "QIANFAN_DEFAULT_TEMPERATURE",
    "QIANFAN_DEFAULT_TOP_P",
    "QIANFAN_DEFAULT_PARALLEL_TOOL_CALLS",
    "GEMINI_DEFAULT_MODEL",
]
