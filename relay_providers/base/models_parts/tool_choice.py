"""Tool choice policy requested from the model."""
from __future__ import annotations

from enum import Enum


class ToolChoice(str, Enum):
    """How the model may use bound tools.

    - ``FORBIDDEN``: never call a tool.
    - ``ALLOWED``: the model decides.
    - ``FORCED``: the model must call at least one tool.
    """

    FORBIDDEN = "forbidden"
    ALLOWED = "allowed"
    FORCED = "forced"


__all__ = ["ToolChoice"]
