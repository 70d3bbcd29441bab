"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `relay_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, RETRYABLE_CODES
from .relay_error import RelayError
from .provider_error import ProviderError
from .protocol_error import EmptyResponseError, ProtocolError
from .panic_error import PanicError
from .concat_error import ConcatError
from .classification import classify_exception, wrap_transport_error

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
