"""Ark-specific ``Message.extra`` entries.

Two keys are attached to Ark output:

- ``ark-request-id``: the response identifier (``id`` of the response or of
  each stream chunk). Every chunk of one stream repeats the same id, so the
  merge rule keeps the last non-empty value.
- ``ark-reasoning-content``: the model's reasoning text (``reasoning_content``
  of deepseek-r1 style endpoints). Reasoning fragments are joined in order
  by the default rule of the ``reasoning`` kind.
"""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..base.concat import ConcatRegistry, last_non_empty
from ..base.models import ExtraKind, ExtraValue, Message

ARK_REQUEST_ID_KEY = "ark-request-id"
ARK_REASONING_CONTENT_KEY = "ark-reasoning-content"


def concat_ark_request_ids(values: List[ExtraValue]) -> ExtraValue:
    return last_non_empty(values)


def register_ark_extras(registry: ConcatRegistry) -> None:
    """Register the request-id merge rule; safe to call once per adapter."""
    registry.register(ARK_REQUEST_ID_KEY, concat_ark_request_ids)


def ark_extras(request_id: Optional[str], reasoning: Optional[str]) -> dict:
    """Build the extra mapping for one message or delta; empty values are omitted."""
    extra = {}
    if request_id:
        extra[ARK_REQUEST_ID_KEY] = ExtraValue.request_id(request_id)
    if reasoning:
        extra[ARK_REASONING_CONTENT_KEY] = ExtraValue.reasoning(reasoning)
    return extra


def reasoning_of(payload: Any) -> Optional[str]:
    """Read ``reasoning_content`` from an SDK message/delta, if the server sent it."""
    value = getattr(payload, "reasoning_content", None)
    return value if isinstance(value, str) else None


def get_ark_request_id(msg: Message) -> str:
    """Return the Ark request id carried by ``msg`` ("" when absent)."""
    value = msg.get_extra(ARK_REQUEST_ID_KEY)
    if value is None or value.kind is not ExtraKind.REQUEST_ID:
        return ""
    return value.value


def get_reasoning_content(msg: Message) -> Tuple[str, bool]:
    """Return ``(reasoning_text, found)`` for ``msg``."""
    value = msg.get_extra(ARK_REASONING_CONTENT_KEY)
    if value is None or value.kind is not ExtraKind.REASONING:
        return "", False
    return value.value, True


__all__ = [
    "ARK_REQUEST_ID_KEY",
    "ARK_REASONING_CONTENT_KEY",
    "concat_ark_request_ids",
    "register_ark_extras",
    "ark_extras",
    "reasoning_of",
    "get_ark_request_id",
    "get_reasoning_content",
]
