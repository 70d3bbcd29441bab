"""Global callback manager registry.

Adapters use the manager passed to their constructor; when none is given they
fall back to this process-wide default (empty unless set).
"""

from __future__ import annotations

from .manager import CallbackManager

_GLOBAL_MANAGER: CallbackManager = CallbackManager()


def set_global_callbacks(manager: CallbackManager) -> None:
    """Set the global callback manager used by adapters without an explicit one."""

    global _GLOBAL_MANAGER
    _GLOBAL_MANAGER = manager


def get_callback_manager() -> CallbackManager:
    """Return the global callback manager (no handlers by default)."""

    return _GLOBAL_MANAGER


__all__ = ["set_global_callbacks", "get_callback_manager"]
