"""Initialization dataclass for OpenAI-style chat models.

Encapsulates the connection parameters shared by every adapter built on
``OpenAIStyleChatModel``. No I/O occurs here; this is a pure data container.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY_BASE


@dataclass(frozen=True)
class _ProviderInit:
    """Initialization bundle for ``OpenAIStyleChatModel``.

    Attributes:
        api_key: Credential string used by SDK clients.
        base_url: Provider base URL for the OpenAI-compatible API.
        logger_name: Structured logger name (e.g., ``relay_providers.ark``).
        sdk_sentinel: SDK client class; ``None`` when the SDK is not importable.
        timeout: Per-request HTTP timeout in seconds.
        max_retries: Retries of the request/stream-open phase (attempts - 1).
        retry_delay_base: Exponential backoff base between attempts.
    """

    api_key: Optional[str]
    base_url: Optional[str]
    logger_name: str
    sdk_sentinel: Any | None
    timeout: float = DEFAULT_HTTP_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay_base: float = DEFAULT_RETRY_DELAY_BASE


__all__ = ["_ProviderInit"]
