"""Callback handler emitting normalized log events for model calls.

Streams are drained on a daemon thread from the handler's own copy, merged
with the concatenation engine and reported once with their token usage.
"""
from __future__ import annotations

from threading import Lock, Thread, current_thread
import time
from typing import List, Optional, Set

from ..concat import ConcatRegistry, concat_messages
from ..errors import RelayError
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import Message
from ..streaming import StreamReader
from .callback_input import CallbackInput
from .callback_output import CallbackOutput
from .handler_base import CallbackHandler


class LoggingCallbackHandler(CallbackHandler):
    def __init__(self, logger=None, registry: Optional[ConcatRegistry] = None) -> None:
        self._logger = logger or get_logger("relay_providers.callbacks.logging")
        self._registry = registry
        self._threads: Set[Thread] = set()
        self._threads_lock = Lock()

    def on_start(self, ctx: LogContext, payload: CallbackInput) -> None:
        normalized_log_event(
            self._logger,
            "chat.adapter.start",
            ctx,
            phase="start",
            attempt=None,
            emitted=None,
            tokens=None,
            message_count=len(payload.messages),
            tool_count=len(payload.tools),
        )

    def on_end(self, ctx: LogContext, payload: CallbackOutput) -> None:
        normalized_log_event(
            self._logger,
            "chat.adapter.end",
            ctx,
            phase="finalize",
            attempt=None,
            emitted=True,
            tokens=payload.token_usage.to_dict() if payload.token_usage else None,
        )

    def on_error(self, ctx: LogContext, error: BaseException) -> None:
        normalized_log_event(
            self._logger,
            "chat.adapter.error",
            ctx,
            phase="finalize",
            attempt=None,
            error_code=_error_code(error),
            emitted=False,
            tokens=None,
            error=str(error)[:260],
        )

    def on_end_with_stream_output(self, ctx: LogContext, reader: StreamReader[CallbackOutput]) -> None:
        thread = Thread(target=self._tracked_drain, args=(ctx, reader), name="relay-callback-log", daemon=True)
        with self._threads_lock:
            self._threads.add(thread)
        thread.start()

    @property
    def active_drains(self) -> int:
        """Number of stream drains still running."""
        with self._threads_lock:
            return len(self._threads)

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for stream drains started so far (used by tests and shutdown)."""
        with self._threads_lock:
            pending = list(self._threads)
        for thread in pending:
            thread.join(timeout)

    def _tracked_drain(self, ctx: LogContext, reader: StreamReader[CallbackOutput]) -> None:
        try:
            self.drain(ctx, reader)
        finally:
            with self._threads_lock:
                self._threads.discard(current_thread())

    def drain(self, ctx: LogContext, reader: StreamReader[CallbackOutput]) -> None:
        """Consume ``reader`` to the end and emit one terminal event."""
        t0 = time.perf_counter()
        messages: List[Message] = []
        error: Optional[BaseException] = None
        with reader:
            try:
                for output in reader:
                    messages.append(output.message)
            except Exception as exc:  # noqa: BLE001 - reported in the terminal event
                error = exc
        merged: Optional[Message] = None
        if error is None and messages:
            try:
                merged = concat_messages(messages, self._registry)
            except RelayError as exc:
                error = exc
        usage = merged.response_meta.usage if merged is not None and merged.response_meta else None
        normalized_log_event(
            self._logger,
            "stream.adapter.end" if error is None else "stream.adapter.error",
            ctx,
            phase="finalize",
            attempt=None,
            error_code=_error_code(error) if error is not None else None,
            emitted=bool(messages),
            tokens=usage.to_dict() if usage is not None else None,
            emitted_count=len(messages),
            total_duration_ms=(time.perf_counter() - t0) * 1000.0,
            error=str(error)[:260] if error is not None else None,
        )


def _error_code(error: BaseException) -> str:
    code = getattr(error, "code", None)
    value = getattr(code, "value", None)
    return value if isinstance(value, str) else error.__class__.__name__


__all__ = ["LoggingCallbackHandler"]
