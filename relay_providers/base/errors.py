"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``relay_providers.base.errors_parts`` to keep a stable import path:

- transport failures: :class:`ProviderError`
- unexpected payload shapes: :class:`ProtocolError` / :class:`EmptyResponseError`
- failures recovered at a stream producer boundary: :class:`PanicError`
- concatenation failures: :class:`ConcatError`
"""

from .errors_parts.error_code import ErrorCode, RETRYABLE_CODES
from .errors_parts.relay_error import RelayError
from .errors_parts.provider_error import ProviderError
from .errors_parts.protocol_error import EmptyResponseError, ProtocolError
from .errors_parts.panic_error import PanicError
from .errors_parts.concat_error import ConcatError
from .errors_parts.classification import classify_exception, wrap_transport_error

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "RelayError",
    "ProviderError",
    "ProtocolError",
    "EmptyResponseError",
    "PanicError",
    "ConcatError",
    "classify_exception",
    "wrap_transport_error",
]
