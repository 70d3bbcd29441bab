"""
Log-probability DTOs.

Mirrors the OpenAI ``logprobs.content`` structure. Streaming chunks each carry
the entries for their own tokens; concatenation appends them in order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class TopLogProb:
    token: str
    logprob: float
    bytes: Optional[List[int]] = None


@dataclass
class LogProb:
    """Log probability of one output token and its most likely alternatives."""

    token: str
    logprob: float
    bytes: Optional[List[int]] = None
    top_logprobs: List[TopLogProb] = field(default_factory=list)


@dataclass
class LogProbs:
    content: List[LogProb] = field(default_factory=list)


__all__ = ["TopLogProb", "LogProb", "LogProbs"]
