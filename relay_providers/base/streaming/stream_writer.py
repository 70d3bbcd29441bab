"""Producer side of a :func:`pipe`."""
from __future__ import annotations

from typing import Generic, Optional, TypeVar

from .channel import _Channel

T = TypeVar("T")


class StreamWriter(Generic[T]):
    """Sends ``(value, error)`` pairs to the linked :class:`StreamReader`."""

    def __init__(self, channel: _Channel) -> None:
        self._channel = channel

    def send(self, value: Optional[T], error: Optional[BaseException] = None) -> bool:
        """Send one item, blocking while the buffer is full.

        Returns:
            ``True`` when the reader has been closed (the item was not
            delivered and the producer should stop), ``False`` otherwise.
        """
        return self._channel.send(value, error)

    def close(self) -> None:
        """Signal that no more items will be sent. Idempotent."""
        self._channel.close_send()


__all__ = ["StreamWriter"]
