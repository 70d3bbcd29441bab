"""Item sources backing :class:`StreamReader` instances.

A source yields ``(value, error)`` pairs from ``recv_item`` and raises
:class:`EndOfStream` once exhausted. Readers wrap exactly one source.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Optional, Protocol

from .channel import Item, _Channel
from .stream_errors import EndOfStream, NoValue

if TYPE_CHECKING:
    from .stream_reader import StreamReader


class _Source(Protocol):  # pragma: no cover - structural protocol
    def recv_item(self) -> Item: ...

    def close(self) -> None: ...


class _ChannelSource:
    def __init__(self, channel: _Channel) -> None:
        self._channel = channel

    def recv_item(self) -> Item:
        return self._channel.recv()

    def close(self) -> None:
        self._channel.close_recv()


class _IterableSource:
    """Source over an in-memory iterable of values (no errors)."""

    def __init__(self, items: Iterable[Any]) -> None:
        self._iter: Optional[Iterator[Any]] = iter(items)

    def recv_item(self) -> Item:
        if self._iter is None:
            raise EndOfStream()
        try:
            return next(self._iter), None
        except StopIteration:
            self._iter = None
            raise EndOfStream() from None

    def close(self) -> None:
        self._iter = None


class _ConvertSource:
    """Maps values of a parent reader; a mapper raising ``NoValue`` drops the item."""

    def __init__(self, parent: "StreamReader[Any]", fn: Callable[[Any], Any]) -> None:
        self._parent = parent
        self._fn = fn

    def recv_item(self) -> Item:
        while True:
            value, error = self._parent._recv_item()
            if error is not None:
                return None, error
            try:
                return self._fn(value), None
            except NoValue:
                continue
            except Exception as exc:  # noqa: BLE001 - mapper failure becomes the item's error
                return None, exc

    def close(self) -> None:
        self._parent.close()


__all__ = ["_Source", "_ChannelSource", "_IterableSource", "_ConvertSource"]
