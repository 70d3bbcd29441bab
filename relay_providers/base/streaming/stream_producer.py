"""Background producer turning a native SDK stream into a :class:`StreamReader`."""
from __future__ import annotations

from contextlib import ExitStack
from threading import Thread
from typing import Any, Callable, Iterable, Optional, Tuple
import time

from ..errors import PanicError, RelayError, wrap_transport_error
from ..logging import LogContext, get_logger
from ..models import Message
from .producer_helpers import (
    deliver,
    finalize_stream,
    flush_converter,
    register_stream_cleanup,
    stream_prefix,
)
from .stream_reader import StreamReader, pipe
from .stream_writer import StreamWriter
from .streaming_metrics import StreamMetrics

Converter = Callable[[Any], Optional[Message]]


class StreamProducer:
    """Pump a native chunk iterable through a converter into a pipe.

    Exactly one daemon thread is started per :meth:`start` call. The thread
    owns the native stream: it iterates it, converts chunks, and closes it on
    every exit path. Consumers only ever see the returned reader.

    Converter contract:
        ``converter(chunk)`` returns a :class:`Message` to deliver, ``None``
        to skip the chunk, or raises a :class:`RelayError` which is delivered
        as the terminal error. An optional ``converter.flush()`` is called at
        clean end of stream and may return one last message.
    """

    def __init__(
        self,
        *,
        stream: Iterable[Any],
        converter: Converter,
        provider_name: str,
        model: str,
        ctx: Optional[LogContext] = None,
        logger=None,
        error_prefix: Optional[str] = None,
        capacity: int = 1,
    ) -> None:
        self.provider_name = provider_name
        self.model = model
        self.ctx = ctx or LogContext(provider=provider_name, model=model)
        self.metrics = StreamMetrics()
        self._stream = stream
        self._converter = converter
        self._logger = logger or get_logger("relay_providers.stream")
        self._prefix = error_prefix if error_prefix is not None else stream_prefix(provider_name)
        self._capacity = capacity

    def start(self) -> StreamReader[Message]:
        reader, writer = pipe(self._capacity)
        thread = Thread(
            target=self.run,
            args=(writer,),
            name=f"relay-{self.provider_name}-stream",
            daemon=True,
        )
        thread.start()
        return reader

    def run(self, writer: StreamWriter[Message]) -> None:
        """Execute the producer loop; runs on the producer thread."""
        t0 = time.perf_counter()
        error: Optional[RelayError] = None
        reader_closed = False
        with ExitStack() as stack:
            # LIFO: the native stream is closed before the writer.
            stack.callback(writer.close)
            register_stream_cleanup(self._stream, stack)
            try:
                error, reader_closed = self._pump(writer, t0)
            except Exception as exc:  # noqa: BLE001 - last-resort boundary of the producer thread
                error = PanicError.from_exception(exc)
                reader_closed = writer.send(None, error)
        finalize_stream(
            logger=self._logger,
            ctx=self.ctx,
            metrics=self.metrics,
            t0=t0,
            error=error,
            reader_closed=reader_closed,
        )

    def _pump(self, writer: StreamWriter[Message], t0: float) -> Tuple[Optional[RelayError], bool]:
        try:
            iterator = iter(self._stream)
        except Exception as exc:  # noqa: BLE001 - transport failure
            return self._fail(writer, exc)
        while True:
            try:
                chunk = next(iterator)
            except StopIteration:
                break
            except Exception as exc:  # noqa: BLE001 - transport failure
                return self._fail(writer, exc)
            try:
                message = self._converter(chunk)
            except RelayError as exc:
                return exc, writer.send(None, exc)
            if message is None:
                continue
            if deliver(writer, message, self.metrics, t0):
                return None, True
        try:
            message = flush_converter(self._converter)
        except RelayError as exc:
            return exc, writer.send(None, exc)
        if message is not None and deliver(writer, message, self.metrics, t0):
            return None, True
        return None, False

    def _fail(self, writer: StreamWriter[Message], exc: Exception) -> Tuple[RelayError, bool]:
        error = wrap_transport_error(exc, provider=self.provider_name, model=self.model, prefix=self._prefix)
        return error, writer.send(None, error)


__all__ = ["StreamProducer", "Converter"]
