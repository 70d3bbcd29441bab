"""Response metadata attached to model output messages."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .log_probs import LogProbs
from .token_usage import TokenUsage


@dataclass
class ResponseMeta:
    """Finish reason, usage and log-probabilities for a response or delta.

    Attributes:
        finish_reason: Provider finish reason; typically set only on the last delta.
        usage: Token usage snapshot; streams usually report it once, in a
            terminal sentinel chunk.
        logprobs: Optional token log-probabilities.
    """

    finish_reason: str = ""
    usage: Optional[TokenUsage] = None
    logprobs: Optional[LogProbs] = None


__all__ = ["ResponseMeta"]
