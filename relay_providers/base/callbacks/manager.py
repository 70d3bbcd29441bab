"""Callback manager fanning model-call events out to handlers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..logging import LogContext, get_logger, normalized_log_event
from ..models import Message
from ..streaming import StreamReader
from .callback_input import CallbackInput
from .callback_output import CallbackOutput
from .handler_base import CallbackHandler

_logger = get_logger("relay_providers.callbacks")


@dataclass
class CallbackManager:
    """Ordered collection of handlers invoked around each model call.

    Attributes:
        handlers: Handlers executed in order for every hook.
    """

    handlers: List[CallbackHandler] = field(default_factory=list)

    def add(self, handler: CallbackHandler) -> "CallbackManager":
        self.handlers.append(handler)
        return self

    def on_start(self, ctx: LogContext, payload: CallbackInput) -> None:
        for handler in self.handlers:
            self._call(handler, "on_start", ctx, payload)

    def on_end(self, ctx: LogContext, payload: CallbackOutput) -> None:
        for handler in self.handlers:
            self._call(handler, "on_end", ctx, payload)

    def on_error(self, ctx: LogContext, error: BaseException) -> None:
        for handler in self.handlers:
            self._call(handler, "on_error", ctx, error)

    def on_end_with_stream_output(
        self,
        ctx: LogContext,
        reader: StreamReader[Message],
        to_output: Optional[Callable[[Message], CallbackOutput]] = None,
    ) -> StreamReader[Message]:
        """Give each handler a copy of ``reader`` and return the caller's copy.

        With no handlers ``reader`` is returned unchanged. Each handler copy is
        mapped through ``to_output`` (``CallbackOutput.from_message`` by
        default).
        """
        if not self.handlers:
            return reader
        convert = to_output or CallbackOutput.from_message
        copies = reader.copy(len(self.handlers) + 1)
        for handler, copy in zip(self.handlers, copies[1:]):
            handler_reader = copy.convert(convert)
            if not self._call(handler, "on_end_with_stream_output", ctx, handler_reader):
                handler_reader.close()
        return copies[0]

    def _call(self, handler: CallbackHandler, hook: str, ctx: LogContext, arg) -> bool:
        try:
            getattr(handler, hook)(ctx, arg)
        except Exception as exc:  # noqa: BLE001 - handler failures must not reach the caller
            normalized_log_event(
                _logger,
                "callbacks.handler.error",
                ctx,
                phase=hook,
                attempt=None,
                error_code=exc.__class__.__name__,
                emitted=None,
                tokens=None,
                handler=handler.__class__.__name__,
                error=str(exc)[:260],
            )
            return False
        return True


__all__ = ["CallbackManager"]
