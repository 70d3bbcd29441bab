"""Baidu Qianfan chat model adapter.

Qianfan v2 speaks the OpenAI Chat Completions protocol; requests go through
the ``openai`` SDK pointed at ``https://qianfan.baidubce.com/v2``.

Differences from plain OpenAI:
- a response (or stream chunk) may carry an ``error`` object instead of
  choices; it becomes a ``ProtocolError``;
- stream deltas omit the role, every delta is an assistant delta;
- tool-call index is the position in the delta list;
- default sampling: temperature 0.95, top_p 0.7, parallel tool calls on.
"""

from __future__ import annotations

from typing import Any, Optional

from ..base.callbacks import CallbackManager
from ..base.concat import ConcatRegistry
from ..base.errors import ProtocolError
from ..base.models import Message, RoleType
from ..base.openai_style_parts import (
    OpenAIStyleChatModel,
    _ProviderInit,
    resolve_chat_response,
    resolve_stream_chunk,
)
from ..base.options import ChatOptions
from ..config import get_provider_config

try:
    from openai import OpenAI as _OpenAIClient  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    _OpenAIClient = None  # type: ignore

__all__ = ["QianfanChatModel"]


def _field(obj: Any, name: str) -> Any:
    # Unknown response fields arrive as plain dicts on SDK models.
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def check_response_error(payload: Any, *, provider: str = "qianfan") -> None:
    """Raise ``ProtocolError`` when ``payload`` carries a Qianfan error object."""
    err = _field(payload, "error")
    if not err:
        return
    raise ProtocolError(
        "resp with err: code=%s, msg=%s, type=%s"
        % (_field(err, "code") or "", _field(err, "message") or "", _field(err, "type") or ""),
        provider=provider,
    )


class QianfanChatModel(OpenAIStyleChatModel):
    """Chat model for Baidu Qianfan (ERNIE and hosted models)."""

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
        parallel_tool_calls: Optional[bool] = None,
        request_params: Optional[dict] = None,
        callbacks: Optional[CallbackManager] = None,
        registry: Optional[ConcatRegistry] = None,
    ) -> None:
        cfg = get_provider_config(
            "qianfan",
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
                "parallel_tool_calls": parallel_tool_calls,
                "request_params": request_params,
            },
        )
        init = _ProviderInit(
            api_key=cfg.get("api_key"),
            base_url=cfg.get("base_url"),
            logger_name="relay_providers.qianfan",
            sdk_sentinel=_OpenAIClient,
            **{k: cfg[k] for k in ("timeout", "max_retries") if cfg.get(k) is not None},
        )
        extra_params = {}
        if cfg.get("parallel_tool_calls") is not None:
            extra_params["parallel_tool_calls"] = bool(cfg["parallel_tool_calls"])
        super().__init__(
            init,
            defaults=ChatOptions.from_config(cfg, **extra_params),
            callbacks=callbacks,
            registry=registry,
        )

    @property
    def provider_name(self) -> str:
        return "qianfan"

    def _resolve_chunk(self, chunk: Any) -> Optional[Message]:
        check_response_error(chunk, provider=self.provider_name)
        return resolve_stream_chunk(chunk, index_from_position=True, role=RoleType.ASSISTANT)

    def _resolve_response(self, resp: Any) -> Message:
        check_response_error(resp, provider=self.provider_name)
        return resolve_chat_response(resp, provider=self.provider_name, index_from_position=True)
