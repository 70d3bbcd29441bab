"""
Response resolvers for OpenAI-compatible Chat Completions APIs.

Convert SDK chunk/response objects into canonical :class:`Message` values.
Attribute access goes through ``getattr`` so SDK objects, dict-less fakes and
``SimpleNamespace`` test doubles are handled alike.

Chunk resolution rule: only the choice with ``index == 0`` is considered. A
chunk without such a choice but with ``usage`` still yields a usage-only
message (the terminal usage chunk of ``stream_options.include_usage``); a
chunk with neither yields ``None`` and is skipped.
"""

from __future__ import annotations

import typing as _t

from ..errors import ProtocolError, RelayError
from ..models import (
    FunctionCall,
    LogProb,
    LogProbs,
    Message,
    ResponseMeta,
    RoleType,
    TokenUsage,
    ToolCall,
    TopLogProb,
    to_role,
)


def to_token_usage(usage: _t.Any) -> TokenUsage | None:
    if usage is None:
        return None
    return TokenUsage(
        prompt_tokens=getattr(usage, "prompt_tokens", None) or 0,
        completion_tokens=getattr(usage, "completion_tokens", None) or 0,
        total_tokens=getattr(usage, "total_tokens", None) or 0,
    )


def _to_top_log_probs(items: _t.Any) -> list[TopLogProb]:
    return [
        TopLogProb(token=item.token, logprob=item.logprob, bytes=getattr(item, "bytes", None))
        for item in items or []
    ]


def to_log_probs(logprobs: _t.Any) -> LogProbs | None:
    """Convert ``choice.logprobs`` (``content`` entries) into :class:`LogProbs`."""
    if logprobs is None:
        return None
    return LogProbs(
        content=[
            LogProb(
                token=entry.token,
                logprob=entry.logprob,
                bytes=getattr(entry, "bytes", None),
                top_logprobs=_to_top_log_probs(getattr(entry, "top_logprobs", None)),
            )
            for entry in getattr(logprobs, "content", None) or []
        ]
    )


def to_message_tool_calls(tool_calls: _t.Any, *, index_from_position: bool = False) -> list[ToolCall]:
    """Convert SDK tool calls (or stream fragments) into :class:`ToolCall` values.

    With ``index_from_position`` the list position becomes the index; otherwise
    the SDK ``index`` attribute is kept and may be ``None``.
    """
    out: list[ToolCall] = []
    for position, tc in enumerate(tool_calls or []):
        fn = getattr(tc, "function", None)
        out.append(
            ToolCall(
                index=position if index_from_position else getattr(tc, "index", None),
                id=getattr(tc, "id", None) or "",
                type=getattr(tc, "type", None) or "function",
                function=FunctionCall(
                    name=getattr(fn, "name", None) or "",
                    arguments=getattr(fn, "arguments", None) or "",
                ),
            )
        )
    return out


def find_first_choice(choices: _t.Any) -> _t.Any:
    """Return the choice with ``index == 0`` or ``None``."""
    for choice in choices or []:
        if getattr(choice, "index", 0) == 0:
            return choice
    return None


def resolve_stream_chunk(
    chunk: _t.Any,
    *,
    index_from_position: bool = False,
    role: RoleType | None = None,
) -> Message | None:
    """Resolve one stream chunk into a delta message, or ``None`` to skip it.

    ``role`` forces the delta role (for providers whose deltas omit it).
    """
    usage = to_token_usage(getattr(chunk, "usage", None))
    choice = find_first_choice(getattr(chunk, "choices", None))
    if choice is None:
        if usage is None:
            return None
        return Message(response_meta=ResponseMeta(usage=usage))
    delta = getattr(choice, "delta", None)
    return Message(
        role=role or to_role(getattr(delta, "role", None)),
        content=getattr(delta, "content", None) or "",
        tool_calls=to_message_tool_calls(getattr(delta, "tool_calls", None), index_from_position=index_from_position),
        response_meta=ResponseMeta(
            finish_reason=getattr(choice, "finish_reason", None) or "",
            usage=usage,
            logprobs=to_log_probs(getattr(choice, "logprobs", None)),
        ),
    )


def resolve_chat_response(
    resp: _t.Any,
    *,
    provider: str,
    index_from_position: bool = False,
    empty_error: RelayError | None = None,
) -> Message:
    """Resolve a non-streaming response into the index-0 choice message.

    Raises:
        ProtocolError: no choices (or ``empty_error`` when given), no index-0
            choice, or a message with neither content nor tool calls.
    """
    choices = getattr(resp, "choices", None) or []
    if not choices:
        raise empty_error or ProtocolError("received empty choices from API response", provider=provider)
    choice = find_first_choice(choices)
    if choice is None:
        raise ProtocolError("invalid response format: choice with index 0 not found", provider=provider)
    msg = getattr(choice, "message", None)
    content = getattr(msg, "content", None) or ""
    tool_calls = to_message_tool_calls(getattr(msg, "tool_calls", None), index_from_position=index_from_position)
    if not content and not tool_calls:
        raise ProtocolError("unexpected message with empty content and tool calls", provider=provider)
    return Message(
        role=to_role(getattr(msg, "role", None)) or RoleType.ASSISTANT,
        content=content,
        tool_calls=tool_calls,
        name=getattr(msg, "name", None) or "",
        tool_call_id=getattr(msg, "tool_call_id", None) or "",
        response_meta=ResponseMeta(
            finish_reason=getattr(choice, "finish_reason", None) or "",
            usage=to_token_usage(getattr(resp, "usage", None)),
            logprobs=to_log_probs(getattr(choice, "logprobs", None)),
        ),
    )


__all__ = [
    "to_token_usage",
    "to_log_probs",
    "to_message_tool_calls",
    "find_first_choice",
    "resolve_stream_chunk",
    "resolve_chat_response",
]
