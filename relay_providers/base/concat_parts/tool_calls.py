"""Tool call fragment merging."""
from __future__ import annotations

from typing import Dict, List, Sequence

from ..models import FunctionCall, ToolCall


def _clone(call: ToolCall) -> ToolCall:
    return ToolCall(
        index=call.index,
        id=call.id,
        type=call.type,
        function=FunctionCall(name=call.function.name, arguments=call.function.arguments),
        extra=dict(call.extra),
    )


def concat_tool_calls(calls: Sequence[ToolCall]) -> List[ToolCall]:
    """Merge tool call fragments into complete calls.

    Fragments sharing an ``index`` are merged in arrival order: arguments are
    joined and ``id``, ``type`` and ``function.name`` keep the first non-empty
    value. Output order is the order in which each index first appeared.
    Calls without an index are kept unchanged at their arrival position.
    Input objects are never mutated.
    """
    merged: List[ToolCall] = []
    positions: Dict[int, int] = {}
    for call in calls:
        if call.index is None:
            merged.append(_clone(call))
            continue
        pos = positions.get(call.index)
        if pos is None:
            positions[call.index] = len(merged)
            merged.append(_clone(call))
            continue
        target = merged[pos]
        target.id = target.id or call.id
        target.type = target.type or call.type
        target.function.name = target.function.name or call.function.name
        target.function.arguments += call.function.arguments
        for key, value in call.extra.items():
            target.extra.setdefault(key, value)
    return merged


__all__ = ["concat_tool_calls"]
