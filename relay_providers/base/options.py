"""Call options for chat models and their resolution against adapter defaults.

Adapters hold a :class:`ChatOptions` of defaults built from provider config.
Each ``generate``/``stream`` call may pass its own ``ChatOptions``; fields set
on the call override the defaults and ``request_params`` are merged key by
key, so callers can pass provider-specific request fields (``seed``,
``presence_penalty``, ...) without widening this type.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .models import ToolChoice, ToolInfo


@dataclass
class ChatOptions:
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    stop: Optional[List[str]] = None
    tools: Optional[List[ToolInfo]] = None
    tool_choice: Optional[ToolChoice] = None
    request_params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], **request_params: Any) -> "ChatOptions":
        """Build adapter defaults from a merged provider config mapping.

        Unknown config keys are ignored; ``request_params`` seeds the
        provider-specific request fields.
        """
        stop = cfg.get("stop")
        return cls(
            model=cfg.get("model"),
            temperature=cfg.get("temperature"),
            max_tokens=cfg.get("max_tokens"),
            top_p=cfg.get("top_p"),
            stop=list(stop) if stop else None,
            request_params={**dict(cfg.get("request_params") or {}), **request_params},
        )


_OVERRIDABLE = ("model", "temperature", "max_tokens", "top_p", "stop", "tools", "tool_choice")


def resolve_options(defaults: ChatOptions, call: Optional[ChatOptions] = None) -> ChatOptions:
    """Return ``defaults`` overridden by every non-``None`` field of ``call``.

    Raises:
        ValueError: when no model name is set after resolution.
    """
    resolved = replace(defaults, request_params=dict(defaults.request_params))
    if call is not None:
        for name in _OVERRIDABLE:
            value = getattr(call, name)
            if value is not None:
                setattr(resolved, name, value)
        resolved.request_params.update(call.request_params)
    if not resolved.model:
        raise ValueError("chat model request with empty model")
    return resolved


__all__ = ["ChatOptions", "resolve_options"]
