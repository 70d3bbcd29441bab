"""Consumer side of a :func:`pipe` plus fan-out and mapping helpers."""
from __future__ import annotations

from threading import Lock
from typing import Any, Callable, Generic, Iterable, Iterator, List, Tuple, TypeVar

from .channel import Item, _Channel
from .fanout import _CopySource, _FanOut, _Node
from .stream_errors import EndOfStream
from .stream_sources import _ChannelSource, _ConvertSource, _IterableSource, _Source
from .stream_writer import StreamWriter

T = TypeVar("T")
U = TypeVar("U")


class StreamReader(Generic[T]):
    """Pull-based reader over a sequence of ``(value, error)`` items.

    ``recv`` returns the next value, raises the error carried by the item, or
    raises :class:`EndOfStream` once the producer has finished. Readers are
    single-consumer: use :meth:`copy` to hand the same stream to several
    consumers. Always :meth:`close` a reader when done with it, including on
    early abandonment, so the producer can stop and release its resources.
    """

    def __init__(self, source: _Source) -> None:
        self._source = source
        self._closed = False
        self._lock = Lock()

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> "StreamReader[T]":
        """Build a reader yielding ``items`` in order, then end-of-stream."""
        return cls(_IterableSource(items))

    def _recv_item(self) -> Item:
        if self._closed:
            raise EndOfStream()
        return self._source.recv_item()

    def recv(self) -> T:
        value, error = self._recv_item()
        if error is not None:
            raise error
        return value

    def close(self) -> None:
        """Release the reader. Idempotent; later ``recv`` calls end the stream."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._source.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def copy(self, n: int) -> List["StreamReader[T]"]:
        """Split this reader into ``n`` independent readers.

        Every copy observes the full item sequence, including errors, at its
        own pace. The original reader must not be used afterwards; it is closed
        once all copies are closed. ``copy(1)`` returns ``[self]``.
        """
        if n < 1:
            raise ValueError(f"copy count must be >= 1, got {n}")
        if n == 1:
            return [self]
        fanout = _FanOut(self, n)
        head = _Node()
        return [StreamReader(_CopySource(fanout, head)) for _ in range(n)]

    def convert(self, fn: Callable[[T], U]) -> "StreamReader[U]":
        """Return a reader applying ``fn`` to each value.

        ``fn`` may raise :class:`NoValue` to drop an item. Any other exception
        it raises is delivered as that item's error. Closing the returned
        reader closes this one.
        """
        return StreamReader(_ConvertSource(self, fn))

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                value = self.recv()
            except EndOfStream:
                return
            yield value

    def __enter__(self) -> "StreamReader[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def pipe(capacity: int = 1) -> Tuple[StreamReader[Any], StreamWriter[Any]]:
    """Create a linked ``(reader, writer)`` pair over a bounded buffer."""
    channel = _Channel(capacity)
    return StreamReader(_ChannelSource(channel)), StreamWriter(channel)


__all__ = ["StreamReader", "pipe"]
