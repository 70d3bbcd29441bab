"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`relay_providers.base.models_parts` if needed, while `relay_providers.base.models`
remains the primary stable import path.
"""

from .role import RoleType, to_role
from .tool_call import FunctionCall, ToolCall
from .token_usage import TokenUsage
from .log_probs import LogProb, LogProbs, TopLogProb
from .response_meta import ResponseMeta
from .extra import ExtraKind, ExtraValue
from .message import Message, assistant_message, system_message, tool_message, user_message
from .tool_choice import ToolChoice
from .tool_info import ToolInfo

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
