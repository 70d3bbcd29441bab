"""Volcengine Ark chat model adapter.

Ark exposes an OpenAI-compatible Chat Completions endpoint, so the adapter
reuses ``OpenAIStyleChatModel`` with the ``openai`` SDK pointed at the Ark
base URL. Ark differences handled here:

- tool-call fragments carry their position in the delta list as index;
- the response/chunk ``id`` and ``reasoning_content`` are surfaced as message
  extras (see ``ark.extra``);
- a response without choices raises ``EmptyResponseError``.

There is no default model: Ark addresses models by endpoint id, which must
be configured (``model=`` or ``ARK_MODEL``).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from ..base.callbacks import CallbackManager
from ..base.concat import ConcatRegistry
from ..base.errors import EmptyResponseError
from ..base.models import Message
from ..base.openai_style_parts import (
    OpenAIStyleChatModel,
    _ProviderInit,
    find_first_choice,
    resolve_chat_response,
    resolve_stream_chunk,
)
from ..base.options import ChatOptions
from ..config import get_provider_config
from .extra import ark_extras, reasoning_of, register_ark_extras

try:
    from openai import OpenAI as _OpenAIClient  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    _OpenAIClient = None  # type: ignore

__all__ = ["ArkChatModel"]


def _with_extras(message: Message, request_id: Optional[str], reasoning: Optional[str]) -> Message:
    extra = ark_extras(request_id, reasoning)
    if not extra:
        return message
    return replace(message, extra={**message.extra, **extra})


class ArkChatModel(OpenAIStyleChatModel):
    """Chat model for Volcengine Ark (Doubao and hosted third-party models)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        top_p: Optional[float] = None,
        stop: Optional[list[str]] = None,
        request_params: Optional[dict] = None,
        callbacks: Optional[CallbackManager] = None,
        registry: Optional[ConcatRegistry] = None,
    ) -> None:
        cfg = get_provider_config(
            "ark",
            {
                "api_key": api_key,
                "base_url": base_url,
                "model": model,
                "timeout": timeout,
                "max_retries": max_retries,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "top_p": top_p,
                "stop": stop,
                "request_params": request_params,
            },
        )
        init = _ProviderInit(
            api_key=cfg.get("api_key"),
            base_url=cfg.get("base_url"),
            logger_name="relay_providers.ark",
            sdk_sentinel=_OpenAIClient,
            timeout=cfg["timeout"],
            max_retries=cfg["max_retries"],
        )
        super().__init__(init, defaults=ChatOptions.from_config(cfg), callbacks=callbacks, registry=registry)
        register_ark_extras(self.concat_registry)

    @property
    def provider_name(self) -> str:
        return "ark"

    def _resolve_chunk(self, chunk: Any) -> Optional[Message]:
        message = resolve_stream_chunk(chunk, index_from_position=True)
        if message is None:
            return None
        choice = find_first_choice(getattr(chunk, "choices", None))
        reasoning = reasoning_of(getattr(choice, "delta", None)) if choice is not None else None
        return _with_extras(message, getattr(chunk, "id", None), reasoning)

    def _resolve_response(self, resp: Any) -> Message:
        message = resolve_chat_response(
            resp,
            provider=self.provider_name,
            index_from_position=True,
            empty_error=EmptyResponseError(provider=self.provider_name),
        )
        choice = find_first_choice(getattr(resp, "choices", None))
        reasoning = reasoning_of(getattr(choice, "message", None))
        return _with_extras(message, getattr(resp, "id", None), reasoning)
