"""Default concatenation rules for tagged extra values."""
from __future__ import annotations

from typing import List

from ..errors import ConcatError
from ..models import ExtraKind, ExtraValue

_JOINED_KINDS = (ExtraKind.REASONING, ExtraKind.TEXT)


def check_same_kind(key: str, values: List[ExtraValue]) -> ExtraKind:
    """Return the shared kind of ``values`` or raise ``ConcatError``."""
    kind = values[0].kind
    for value in values[1:]:
        if value.kind is not kind:
            raise ConcatError(
                f"cannot concat extra {key!r}: mixed kinds {kind.value!r} and {value.kind.value!r}"
            )
    return kind


def default_concat(values: List[ExtraValue]) -> ExtraValue:
    """Merge values of one kind using the kind's default rule.

    Text-like kinds are joined in order; every other kind keeps the last
    non-empty value (falling back to the last value when all are empty).
    """
    kind = values[0].kind
    if kind in _JOINED_KINDS:
        return ExtraValue(kind, "".join(v.value for v in values))
    for value in reversed(values):
        if not value.is_empty():
            return value
    return values[-1]


def last_non_empty(values: List[ExtraValue]) -> ExtraValue:
    """Concat function keeping the last non-empty value (request identifiers)."""
    for value in reversed(values):
        if not value.is_empty():
            return value
    return values[-1]


__all__ = ["check_same_kind", "default_concat", "last_non_empty"]
