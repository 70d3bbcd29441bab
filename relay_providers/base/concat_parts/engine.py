"""
Message concatenation engine.

Reduces an ordered sequence of message deltas belonging to one logical
response into a single message. The reduction is associative and
order-preserving: ``concat([a, b, c]) == concat([concat([a, b]), c])``.
Adapters rely on this when they pre-merge buffered deltas before emission.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from ..errors import ConcatError
from ..models import ExtraValue, LogProbs, Message, ResponseMeta, RoleType
from .extra_rules import check_same_kind, default_concat
from .registry import ConcatRegistry
from .tool_calls import concat_tool_calls


def concat_response_meta(metas: Sequence[ResponseMeta]) -> Optional[ResponseMeta]:
    """Merge response metadata.

    Finish reason: first non-empty. Usage: last non-``None`` (overwrite, not
    sum). Log-probs: content entries appended in order.
    """
    if not metas:
        return None
    finish_reason = ""
    usage = None
    logprobs: Optional[LogProbs] = None
    for meta in metas:
        finish_reason = finish_reason or meta.finish_reason
        if meta.usage is not None:
            usage = meta.usage
        if meta.logprobs is not None:
            if logprobs is None:
                logprobs = LogProbs()
            logprobs.content.extend(meta.logprobs.content)
    return ResponseMeta(
        finish_reason=finish_reason,
        usage=replace(usage) if usage is not None else None,
        logprobs=logprobs,
    )


class MessageConcatenator:
    """Concatenation engine bound to one :class:`ConcatRegistry`."""

    def __init__(self, registry: Optional[ConcatRegistry] = None) -> None:
        self._registry = registry if registry is not None else ConcatRegistry()

    @property
    def registry(self) -> ConcatRegistry:
        return self._registry

    def concat(self, messages: Sequence[Message]) -> Message:
        """Merge ``messages`` (in arrival order) into a new message.

        Raises:
            ConcatError: on empty input, a ``None`` entry, conflicting
                non-empty roles, or mixed extra kinds under one key.
        """
        if not messages:
            raise ConcatError("cannot concat empty message list")

        role: Optional[RoleType] = None
        name = ""
        tool_call_id = ""
        contents: List[str] = []
        tool_calls = []
        metas: List[ResponseMeta] = []
        extras: Dict[str, List[ExtraValue]] = {}

        for pos, msg in enumerate(messages):
            if msg is None:
                raise ConcatError(f"cannot concat messages: entry {pos} is None")
            if msg.role is not None:
                if role is None:
                    role = msg.role
                elif msg.role != role:
                    raise ConcatError(
                        f"cannot concat messages with different roles: {role.value!r} and {msg.role.value!r}"
                    )
            name = name or msg.name
            tool_call_id = tool_call_id or msg.tool_call_id
            if msg.content:
                contents.append(msg.content)
            tool_calls.extend(msg.tool_calls)
            if msg.response_meta is not None:
                metas.append(msg.response_meta)
            for key, value in msg.extra.items():
                extras.setdefault(key, []).append(value)

        return Message(
            role=role,
            content="".join(contents),
            tool_calls=concat_tool_calls(tool_calls),
            name=name,
            tool_call_id=tool_call_id,
            response_meta=concat_response_meta(metas),
            extra=self._concat_extra(extras),
        )

    def _concat_extra(self, extras: Dict[str, List[ExtraValue]]) -> Dict[str, ExtraValue]:
        out: Dict[str, ExtraValue] = {}
        for key, values in extras.items():
            check_same_kind(key, values)
            if len(values) == 1:
                out[key] = values[0]
                continue
            func = self._registry.get(key)
            merged = func(values) if func is not None else default_concat(values)
            if not isinstance(merged, ExtraValue):
                raise ConcatError(f"concat function for extra {key!r} returned {type(merged).__name__}")
            out[key] = merged
        return out


def concat_messages(messages: Sequence[Message], registry: Optional[ConcatRegistry] = None) -> Message:
    """Concatenate message deltas into one message (see :class:`MessageConcatenator`)."""
    return MessageConcatenator(registry).concat(messages)


__all__ = ["MessageConcatenator", "concat_messages", "concat_response_meta"]
