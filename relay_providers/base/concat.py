"""Message concatenation public surface.

Re-exports the engine and registry from ``relay_providers.base.concat_parts``.
Typical use::

    registry = ConcatRegistry()
    final = concat_messages(list(reader), registry=registry)
"""

from .concat_parts.registry import ConcatRegistry, ExtraConcatFunc
from .concat_parts.extra_rules import default_concat, last_non_empty
from .concat_parts.tool_calls import concat_tool_calls
from .concat_parts.engine import MessageConcatenator, concat_messages, concat_response_meta

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
