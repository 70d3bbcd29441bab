"""Terminal conditions of the stream pipe."""
from __future__ import annotations


class EndOfStream(EOFError):
    """Raised by ``StreamReader.recv`` once no more values will arrive.

    This is the clean terminal condition of a stream; it is raised again on
    every subsequent ``recv`` call.
    """


class NoValue(Exception):
    """Raised by a ``StreamReader.convert`` mapper to drop the current item."""


__all__ = ["EndOfStream", "NoValue"]
