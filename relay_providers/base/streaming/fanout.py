"""Fan-out of one reader into independently paced copies.

Items are fetched from the parent lazily by whichever copy reaches them
first and kept in a singly linked list. Each copy holds a pointer to its next
node, so a node is garbage once every copy has moved past it. Each node has
its own lock: a copy waiting on the parent for a new item never blocks a copy
that is still reading older items.
"""
from __future__ import annotations

from threading import Lock
from typing import TYPE_CHECKING, Any, Optional, Tuple

from .channel import Item
from .stream_errors import EndOfStream

if TYPE_CHECKING:
    from .stream_reader import StreamReader

_END = object()


class _Node:
    __slots__ = ("lock", "ready", "item", "next")

    def __init__(self) -> None:
        self.lock = Lock()
        self.ready = False
        self.item: Any = None
        self.next: Optional["_Node"] = None


class _FanOut:
    """Shared state of one ``copy(n)`` call."""

    def __init__(self, parent: "StreamReader[Any]", n: int) -> None:
        self._parent = parent
        self._open = n
        self._lock = Lock()

    def fetch(self, node: _Node) -> Tuple[Any, Optional[_Node]]:
        with node.lock:
            if not node.ready:
                try:
                    node.item = self._parent._recv_item()
                except EndOfStream:
                    node.item = _END
                node.next = _Node()
                node.ready = True
        return node.item, node.next

    def release(self) -> None:
        """Called once per closed copy; closes the parent after the last one."""
        with self._lock:
            self._open -= 1
            last = self._open == 0
        if last:
            self._parent.close()


class _CopySource:
    def __init__(self, fanout: _FanOut, head: _Node) -> None:
        self._fanout = fanout
        self._node: Optional[_Node] = head
        self._closed = False

    def recv_item(self) -> Item:
        node = self._node
        if self._closed or node is None:
            raise EndOfStream()
        item, nxt = self._fanout.fetch(node)
        if item is _END:
            raise EndOfStream()
        self._node = nxt
        return item

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._node = None
        self._fanout.release()


__all__ = ["_FanOut", "_CopySource", "_Node"]
