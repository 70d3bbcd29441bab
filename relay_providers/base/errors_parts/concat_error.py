"""Error raised by the message concatenation engine."""
from __future__ import annotations

from .error_code import ErrorCode
from .relay_error import RelayError


class ConcatError(RelayError):
    """Messages could not be merged (empty input or conflicting fields)."""

    code = ErrorCode.CONCAT


__all__ = ["ConcatError"]
