"""Stream producer helper functions (within streaming package)."""

from __future__ import annotations

from contextlib import ExitStack, suppress
from typing import Any, Callable, Optional
import time

from ..errors import RelayError
from ..logging import LogContext, normalized_log_event
from ..models import Message
from .stream_writer import StreamWriter
from .streaming_metrics import StreamMetrics


def register_stream_cleanup(stream, stack: ExitStack) -> None:
    """Register best-effort cleanup callbacks for the native stream."""
    close_fn = getattr(stream, "close", None)
    if callable(close_fn):
        def _safe_close():  # noqa: D401 - simple internal callback
            with suppress(Exception):
                close_fn()
        stack.callback(_safe_close)


def stream_prefix(provider: str) -> str:
    """Return the ``[provider][Stream]`` prefix used on mid-stream transport errors."""
    return f"[{provider}][Stream]"


def deliver(
    writer: StreamWriter[Message],
    message: Message,
    metrics: StreamMetrics,
    t0: float,
) -> bool:
    """Send one converted message and update metrics.

    Returns ``True`` when the reader is gone and the producer should stop.
    """
    if metrics.emitted == 0:
        metrics.time_to_first_chunk_ms = (time.perf_counter() - t0) * 1000.0
    metrics.observe(message)
    closed = writer.send(message)
    if not closed:
        metrics.emitted += 1
    return closed


def flush_converter(converter: Callable[[Any], Optional[Message]]) -> Optional[Message]:
    """Call ``converter.flush()`` when the converter buffers messages."""
    flush = getattr(converter, "flush", None)
    if callable(flush):
        return flush()
    return None


def finalize_stream(
    *,
    logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    t0: float,
    error: Optional[RelayError] = None,
    reader_closed: bool = False,
) -> None:
    """Emit the consolidated terminal log event of one producer run."""
    metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
    code = getattr(error, "code", None)
    normalized_log_event(
        logger,
        "stream.producer.end" if error is None else "stream.producer.error",
        ctx,
        phase="finalize",
        attempt=None,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        error_code=code.value if code is not None else None,
        emitted_count=metrics.emitted,
        time_to_first_chunk_ms=metrics.time_to_first_chunk_ms,
        total_duration_ms=metrics.total_duration_ms,
        finish_reason=metrics.finish_reason,
        reader_closed=reader_closed or None,
        error=str(error)[:260] if error is not None else None,
    )


__all__ = [
    "register_stream_cleanup",
    "stream_prefix",
    "deliver",
    "flush_converter",
    "finalize_stream",
]
