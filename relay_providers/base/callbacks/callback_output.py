"""Output payload handed to callback handlers (whole message or one stream delta)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..models import Message, TokenUsage

if TYPE_CHECKING:
    from ..options import ChatOptions


@dataclass
class CallbackOutput:
    message: Message
    config: Optional["ChatOptions"] = None
    token_usage: Optional[TokenUsage] = None

    @classmethod
    def from_message(cls, message: Message, config: Optional["ChatOptions"] = None) -> "CallbackOutput":
        """Build an output whose ``token_usage`` is taken from the message metadata."""
        meta = message.response_meta
        return cls(message=message, config=config, token_usage=meta.usage if meta is not None else None)


__all__ = ["CallbackOutput"]
