"""
Panic error captured at a background producer boundary.

A stream producer thread must never let an unanticipated exception escape;
it converts it into a ``PanicError`` carrying the original payload and the
formatted stack, and delivers it as the stream's terminal value.
"""
from __future__ import annotations

import traceback
from typing import Any

from .error_code import ErrorCode
from .relay_error import RelayError


class PanicError(RelayError):
    """Unexpected failure recovered from a stream producer."""

    code = ErrorCode.PANIC

    def __init__(self, info: Any, stack: str) -> None:
        super().__init__(info)
        self.info = info
        self.stack = stack

    @classmethod
    def from_exception(cls, exc: BaseException) -> "PanicError":
        """Build a panic error from ``exc`` with its formatted traceback."""
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        panic = cls(exc, stack)
        panic.__cause__ = exc
        return panic

    def __str__(self) -> str:
        return f"panic error: {self.info}, \nstack: {self.stack}"


__all__ = ["PanicError"]
