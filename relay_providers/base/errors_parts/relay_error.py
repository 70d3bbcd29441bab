"""Root exception type for the relay providers package."""
from __future__ import annotations


class RelayError(Exception):
    """Base class for every error raised or streamed by this package.

    Concrete subclasses expose a normalized ``code`` (:class:`ErrorCode`) so
    log emitters and callers can branch on the failure category without
    ``isinstance`` ladders.
    """


__all__ = ["RelayError"]
