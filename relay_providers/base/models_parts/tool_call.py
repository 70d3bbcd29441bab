"""
Tool call DTOs.

A ``ToolCall`` is a model request to invoke a tool. In streaming responses a
single logical call arrives as several fragments sharing the same ``index``;
the concatenation engine joins their ``function.arguments`` in arrival order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class FunctionCall:
    """Function name and (possibly partial) JSON arguments text."""

    name: str = ""
    arguments: str = ""


@dataclass
class ToolCall:
    """A (possibly partial) tool invocation requested by the model.

    Attributes:
        index: Position of the call within the message. Used to correlate
            fragments across chunks; may be ``None`` for providers that omit it.
        id: Provider-assigned call identifier (usually only on the first fragment).
        type: Tool type, ``"function"`` for every provider supported here.
        function: Function name and arguments fragment.
        extra: Provider-specific side data attached to the call.
    """

    index: Optional[int] = None
    id: str = ""
    type: str = "function"
    function: FunctionCall = field(default_factory=FunctionCall)
    extra: Dict[str, Any] = field(default_factory=dict)


__all__ = ["FunctionCall", "ToolCall"]
