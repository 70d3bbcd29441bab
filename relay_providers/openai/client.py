"""OpenAI chat model adapter built on OpenAIStyleChatModel.

Request building, retry of the request/stream-open phase and the background
stream producer are inherited from ``OpenAIStyleChatModel``. This module adds
the OpenAI-specific stream conversion:

- empty-frame buffering: a resolved delta with neither content nor tool
  calls (role-only frame, finish-reason frame, usage-only frame) is held and
  merged into the next delta instead of being emitted on its own; a held
  delta is flushed when the stream ends;
- tool-call fragments that omit ``index`` inherit the last index seen in the
  stream (``0`` before any index was seen). Some OpenAI-compatible servers
  omit the index on one fragment of a call. The patch only fits that
  quirk: if the first fragment of a second parallel call arrives without an
  index, it is folded into the previous call and its id and name are lost.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from ..base.callbacks import CallbackManager
from ..base.concat import ConcatRegistry, concat_messages
from ..base.models import Message
from ..base.openai_style_parts import OpenAIStyleChatModel, _ProviderInit, resolve_stream_chunk
from ..base.options import ChatOptions
from ..config import get_provider_config

try:
    from openai import OpenAI as _OpenAIClient  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    _OpenAIClient = None  # type: ignore

__all__ = ["OpenAIChatModel"]


class _BufferedChunkConverter:
    """Stateful converter for one OpenAI stream.

    Not thread-safe; one instance is created per stream and only the
    producer thread calls it.
    """

    def __init__(self, registry: ConcatRegistry) -> None:
        self._registry = registry
        self._pending: Optional[Message] = None
        self._last_index = 0

    def __call__(self, chunk: Any) -> Optional[Message]:
        message = resolve_stream_chunk(chunk)
        if message is None:
            return None
        message = self._patch_tool_call_indexes(message)
        if self._pending is not None:
            message = concat_messages([self._pending, message], self._registry)
        if not message.has_payload():
            self._pending = message
            return None
        self._pending = None
        return message

    def flush(self) -> Optional[Message]:
        pending, self._pending = self._pending, None
        return pending

    def _patch_tool_call_indexes(self, message: Message) -> Message:
        if not message.tool_calls:
            return message
        patched = []
        for tc in message.tool_calls:
            if tc.index is None:
                tc = replace(tc, index=self._last_index)
            else:
                self._last_index = tc.index
            patched.append(tc)
        return replace(message, tool_calls=patched)


class OpenAIChatModel(OpenAIStyleChatModel):
    """Chat model for the OpenAI Chat Completions API (and compatible servers).

    Settings not passed explicitly come from ``get_provider_config("openai")``
    (defaults, config file, ``OPENAI_*`` environment variables).
    """

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
            "openai",
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
            logger_name="relay_providers.openai",
            sdk_sentinel=_OpenAIClient,
            **{k: cfg[k] for k in ("timeout", "max_retries") if cfg.get(k) is not None},
        )
        super().__init__(init, defaults=ChatOptions.from_config(cfg), callbacks=callbacks, registry=registry)

    @property
    def provider_name(self) -> str:
        return "openai"

    def _make_converter(self):
        return _BufferedChunkConverter(self.concat_registry)
