"""Message author roles."""
from __future__ import annotations

from enum import Enum


class RoleType(str, Enum):
    """Role of the message author.

    Streamed deltas frequently omit the role; such messages carry ``None``
    instead of a member of this enum.
    """

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


def to_role(value: object) -> "RoleType | None":
    """Map a provider role string onto :class:`RoleType`.

    Empty or unknown values map to ``None`` so that deltas without a role do
    not conflict with the role carried by other deltas of the same stream.
    """
    if isinstance(value, RoleType):
        return value
    if not value:
        return None
    try:
        return RoleType(str(value).lower())
    except ValueError:
        return None


__all__ = ["RoleType", "to_role"]
