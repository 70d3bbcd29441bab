"""Base class for model-call callback handlers.

Provides no-op implementations for every hook so implementers override only
what they need. Hooks run on the caller's thread (``on_start``, ``on_end``,
``on_error``) and must be fast; stream consumers should hand their reader to a
thread of their own.
"""

from __future__ import annotations

from ..logging import LogContext
from ..streaming import StreamReader
from .callback_input import CallbackInput
from .callback_output import CallbackOutput


class CallbackHandler:
    """Observer of model calls.

    Failure modes:
    - Exceptions raised by a hook are logged by the manager and never reach
      the caller or break the primary stream.
    """

    def on_start(self, ctx: LogContext, payload: CallbackInput) -> None:
        """Called before the provider request is sent."""

    def on_end(self, ctx: LogContext, payload: CallbackOutput) -> None:
        """Called after ``generate`` returned a message."""

    def on_error(self, ctx: LogContext, error: BaseException) -> None:
        """Called when ``generate`` fails or a stream cannot be opened."""

    def on_end_with_stream_output(self, ctx: LogContext, reader: StreamReader[CallbackOutput]) -> None:
        """Receive this handler's own copy of a stream.

        The handler owns ``reader`` and must close it. The default
        implementation closes it at once.
        """
        reader.close()


__all__ = ["CallbackHandler"]
