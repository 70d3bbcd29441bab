"""Bounded single-producer channel backing :func:`pipe`.

Holds ``(value, error)`` pairs in a deque guarded by one condition variable.
The condition is the only synchronisation point between the producer thread
and its consumer.
"""
from __future__ import annotations

from collections import deque
from threading import Condition
from typing import Any, Deque, Optional, Tuple

from .stream_errors import EndOfStream

Item = Tuple[Any, Optional[BaseException]]


class _Channel:
    """Capacity-bounded FIFO with independent sender and receiver closure."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"pipe capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._items: Deque[Item] = deque()
        self._cond = Condition()
        self._send_closed = False
        self._recv_closed = False

    def send(self, value: Any, error: Optional[BaseException]) -> bool:
        """Enqueue an item, blocking while the buffer is full.

        Returns True (without enqueueing) when the receiver is gone or the
        sender side was already closed.
        """
        with self._cond:
            while len(self._items) >= self._capacity and not self._recv_closed:
                self._cond.wait()
            if self._recv_closed or self._send_closed:
                return True
            self._items.append((value, error))
            self._cond.notify_all()
            return False

    def recv(self) -> Item:
        """Dequeue the next item, blocking until one arrives or the sender closes."""
        with self._cond:
            while not self._items and not self._send_closed and not self._recv_closed:
                self._cond.wait()
            if self._items and not self._recv_closed:
                item = self._items.popleft()
                self._cond.notify_all()
                return item
            raise EndOfStream()

    def close_send(self) -> None:
        with self._cond:
            self._send_closed = True
            self._cond.notify_all()

    def close_recv(self) -> None:
        with self._cond:
            self._recv_closed = True
            self._items.clear()
            self._cond.notify_all()

    @property
    def recv_closed(self) -> bool:
        return self._recv_closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)


__all__ = ["_Channel", "Item"]
