"""Callback (observability) hooks around model calls."""

from .callback_input import CallbackInput
from .callback_output import CallbackOutput
from .handler_base import CallbackHandler
from .manager import CallbackManager
from .registry import get_callback_manager, set_global_callbacks
from .logging_handler import LoggingCallbackHandler

__all__ = [
    "CallbackInput",
    "CallbackOutput",
    "CallbackHandler",
    "CallbackManager",
    "get_callback_manager",
    "set_global_callbacks",
    "LoggingCallbackHandler",
]
