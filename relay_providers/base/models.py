"""
Canonical message model public surface.

This module re-exports the one-class-per-file implementations under
``relay_providers.base.models_parts``: messages and their deltas, tool calls,
token usage, log-probabilities, tagged extras and tool definitions.
"""

from .models_parts.role import RoleType, to_role
from .models_parts.tool_call import FunctionCall, ToolCall
from .models_parts.token_usage import TokenUsage
from .models_parts.log_probs import LogProb, LogProbs, TopLogProb
from .models_parts.response_meta import ResponseMeta
from .models_parts.extra import ExtraKind, ExtraValue
from .models_parts.message import (
    Message,
    assistant_message,
    system_message,
    tool_message,
    user_message,
)
from .models_parts.tool_choice import ToolChoice
from .models_parts.tool_info import ToolInfo

__all__ = [
    "RoleType",
    "to_role",
    "FunctionCall",
    "ToolCall",
    "TokenUsage",
    "LogProb",
    "LogProbs",
    "TopLogProb",
    "ResponseMeta",
    "ExtraKind",
    "ExtraValue",
    "Message",
    "assistant_message",
    "system_message",
    "tool_message",
    "user_message",
    "ToolChoice",
    "ToolInfo",
]
