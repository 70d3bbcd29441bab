"""
Protocol / shape errors raised while resolving native provider payloads.

Converters raise these instead of failing on attribute access so that a
malformed response becomes a descriptive terminal stream value.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .relay_error import RelayError


class ProtocolError(RelayError):
    """The provider returned a response with an unexpected shape."""

    code = ErrorCode.PROTOCOL

    def __init__(self, message: str, *, provider: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider

    def __str__(self) -> str:
        if self.provider:
            return f"[{self.provider}] {self.message}"
        return self.message


class EmptyResponseError(ProtocolError):
    """The provider returned no choices at all."""

    def __init__(self, *, provider: Optional[str] = None) -> None:
        super().__init__("empty response from model", provider=provider)


__all__ = ["ProtocolError", "EmptyResponseError"]
