"""
Message DTO used across chat model adapters.

Defines the canonical `Message`: the unit of model input and output, and of
each streamed delta. A delta carries only the new content of one chunk; a
sequence of deltas is merged back into one message by
``relay_providers.base.concat.concat_messages``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .extra import ExtraValue
from .response_meta import ResponseMeta
from .role import RoleType
from .tool_call import ToolCall


@dataclass
class Message:
    """A chat message or streamed message delta.

    Summary:
        Provider adapters map SDK-specific shapes into this DTO. Messages are
        treated as immutable once produced: the concatenation engine always
        builds a new instance instead of mutating its inputs.

    Attributes:
        role: Author role; ``None`` for deltas that omit it.
        content: Text content; may be empty when ``tool_calls`` is present.
        tool_calls: Ordered tool invocations (or fragments, for deltas).
        name: Optional author name.
        tool_call_id: For ``tool`` messages, the id of the call being answered.
        response_meta: Finish reason, usage and log-probs for model output.
        extra: Provider-specific side channel of tagged values.
    """

    role: Optional[RoleType] = None
    content: str = ""
    tool_calls: List[ToolCall] = field(default_factory=list)
    name: str = ""
    tool_call_id: str = ""
    response_meta: Optional[ResponseMeta] = None
    extra: Dict[str, ExtraValue] = field(default_factory=dict)

    def has_payload(self) -> bool:
        """Return True if the message carries content or tool calls."""
        return bool(self.content) or bool(self.tool_calls)

    def get_extra(self, key: str) -> Optional[ExtraValue]:
        return self.extra.get(key)


def system_message(content: str) -> Message:
    return Message(role=RoleType.SYSTEM, content=content)


def user_message(content: str) -> Message:
    return Message(role=RoleType.USER, content=content)


def assistant_message(content: str, tool_calls: Optional[List[ToolCall]] = None) -> Message:
    return Message(role=RoleType.ASSISTANT, content=content, tool_calls=list(tool_calls or []))


def tool_message(content: str, tool_call_id: str, name: str = "") -> Message:
    """Build the message returning a tool's result to the model."""
    return Message(role=RoleType.TOOL, content=content, tool_call_id=tool_call_id, name=name)


__all__ = [
    "Message",
    "system_message",
    "user_message",
    "assistant_message",
    "tool_message",
]
