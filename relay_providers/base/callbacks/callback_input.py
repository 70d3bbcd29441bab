"""Input payload handed to callback handlers when a model call starts."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from ..models import Message, ToolInfo

if TYPE_CHECKING:
    from ..options import ChatOptions


@dataclass
class CallbackInput:
    """Messages, bound tools and the resolved options of one model call."""

    messages: List[Message] = field(default_factory=list)
    tools: List[ToolInfo] = field(default_factory=list)
    config: Optional["ChatOptions"] = None


__all__ = ["CallbackInput"]
