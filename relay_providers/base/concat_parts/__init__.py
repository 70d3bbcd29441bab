"""Concatenation engine parts (registry, default rules, tool call merge, engine)."""

from .registry import ConcatRegistry, ExtraConcatFunc
from .extra_rules import default_concat, last_non_empty
from .tool_calls import concat_tool_calls
from .engine import MessageConcatenator, concat_messages, concat_response_meta

__all__ = [
    "ConcatRegistry",
    "ExtraConcatFunc",
    "default_concat",
    "last_non_empty",
    "concat_tool_calls",
    "MessageConcatenator",
    "concat_messages",
    "concat_response_meta",
]
