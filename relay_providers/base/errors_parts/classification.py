"""Map native SDK exceptions onto :class:`ErrorCode` values.

The openai SDK exposes ``status_code`` on its HTTP errors, google-api-core
exceptions expose ``code``, and plain network failures only carry a message.
``classify_exception`` tries those sources in that order.
:func:`wrap_transport_error` is the one place where a native exception
becomes a :class:`ProviderError`.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderError
from .relay_error import RelayError

_STATUS_ATTRS = ("status_code", "status", "code")


def _as_status(value: object) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool) and 100 <= value < 600:
        return value
    return None


def _extract_status(exc: Exception) -> Optional[int]:
    """HTTP status carried by ``exc`` itself or by ``exc.response``; ``None`` if absent."""
    for attr in _STATUS_ATTRS:
        status = _as_status(getattr(exc, attr, None))
        if status is not None:
            return status
    return _as_status(getattr(getattr(exc, "response", None), "status_code", None))


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


_PATTERN_GROUPS = (
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("auth", "api key", "unauthorized", "forbidden")),
    (ErrorCode.UNSUPPORTED, ("unsupported", "not supported")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
    (ErrorCode.CONFLICT, ("conflict", "already exists")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "temporarily down")),
    (ErrorCode.VALIDATION, ("validation", "invalid", "malformed")),
    (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
    (ErrorCode.TRANSIENT, ("connection reset", "connection aborted", "remote end closed")),
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    """Substring heuristic mapping for non-HTTP exceptions."""
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in _PATTERN_GROUPS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: Exception) -> ErrorCode:
    """Return the :class:`ErrorCode` for ``exc``.

    Package errors keep their own code. Otherwise timeouts win, then the HTTP
    status, then message keywords; anything else is ``UNKNOWN``.
    """
    if isinstance(exc, RelayError):
        code = getattr(exc, "code", None)
        if isinstance(code, ErrorCode):
            return code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


def wrap_transport_error(
    exc: Exception,
    *,
    provider: str,
    model: Optional[str] = None,
    prefix: str = "",
) -> RelayError:
    """Wrap a native SDK exception into a :class:`ProviderError`.

    Package errors are returned untouched so a wrapped error is never wrapped
    twice. ``prefix`` is prepended to the message (``"[qianfan][Stream]"``).
    """
    if isinstance(exc, RelayError):
        return exc
    code = classify_exception(exc)
    message = f"{prefix} {exc}".strip() if prefix else str(exc)
    return ProviderError(
        code=code,
        message=message,
        provider=provider,
        model=model,
        retryable=code in RETRYABLE_CODES,
        raw=exc,
    )


__all__ = [
    "classify_exception",
    "wrap_transport_error",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
