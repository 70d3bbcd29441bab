"""
Tagged values for the ``Message.extra`` side channel.

Providers attach side data (request identifiers, reasoning text, ...) to
messages under string keys. Each value is an :class:`ExtraValue` whose
``kind`` selects how it concatenates when stream deltas are merged, so the
engine never has to guess from the runtime type of an opaque object.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ExtraKind(str, Enum):
    """Discriminator for :class:`ExtraValue`.

    Default concatenation per kind:

    - ``REASONING`` / ``TEXT``: strings joined in order.
    - ``REQUEST_ID`` / ``OPAQUE``: last non-empty value wins.
    - ``INTEGER``: last non-zero value wins.
    - ``JSON``: last non-``None`` value wins.
    """

    REQUEST_ID = "request_id"
    REASONING = "reasoning"
    TEXT = "text"
    INTEGER = "integer"
    JSON = "json"
    OPAQUE = "opaque"


_STR_KINDS = (ExtraKind.REQUEST_ID, ExtraKind.REASONING, ExtraKind.TEXT)


@dataclass(frozen=True)
class ExtraValue:
    """A single tagged extra value.

    Construct through the classmethods (``ExtraValue.reasoning("...")``)
    rather than the raw constructor; the payload type is validated per kind.
    """

    kind: ExtraKind
    value: Any

    def __post_init__(self) -> None:
        if self.kind in _STR_KINDS and not isinstance(self.value, str):
            raise TypeError(f"extra of kind {self.kind.value} requires str, got {type(self.value).__name__}")
        if self.kind is ExtraKind.INTEGER and (
            isinstance(self.value, bool) or not isinstance(self.value, int)
        ):
            raise TypeError(f"extra of kind integer requires int, got {type(self.value).__name__}")
        if self.kind is ExtraKind.OPAQUE and not isinstance(self.value, (bytes, bytearray)):
            raise TypeError(f"extra of kind opaque requires bytes, got {type(self.value).__name__}")

    @classmethod
    def request_id(cls, value: str) -> "ExtraValue":
        return cls(ExtraKind.REQUEST_ID, value)

    @classmethod
    def reasoning(cls, value: str) -> "ExtraValue":
        return cls(ExtraKind.REASONING, value)

    @classmethod
    def text(cls, value: str) -> "ExtraValue":
        return cls(ExtraKind.TEXT, value)

    @classmethod
    def integer(cls, value: int) -> "ExtraValue":
        return cls(ExtraKind.INTEGER, value)

    @classmethod
    def json(cls, value: Any) -> "ExtraValue":
        return cls(ExtraKind.JSON, value)

    @classmethod
    def opaque(cls, value: bytes) -> "ExtraValue":
        return cls(ExtraKind.OPAQUE, bytes(value))

    def is_empty(self) -> bool:
        """Return True when the payload is the kind's zero value."""
        if self.kind is ExtraKind.INTEGER:
            return self.value == 0
        if self.kind is ExtraKind.JSON:
            return self.value is None
        return len(self.value) == 0


__all__ = ["ExtraKind", "ExtraValue"]
