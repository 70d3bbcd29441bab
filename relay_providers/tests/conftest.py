"""Pytest configuration for the relay_providers test suite.

Every test runs with provider environment variables cleared, the config
cache reset and an empty global callback manager, so adapters only see what
a test sets explicitly.
"""

from __future__ import annotations

import logging
import os
from typing import Iterator

import pytest

from relay_providers.base.callbacks import CallbackManager, set_global_callbacks
from relay_providers.base.logging import get_logger
from relay_providers.config import reset_config_cache

_PROVIDER_ENV_PREFIXES = ("OPENAI_", "ARK_", "VOLC_ARK_", "QIANFAN_", "GEMINI_", "GOOGLE_")


class ListHandler(logging.Handler):
    """Capture log messages into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - exercised via tests
        self.messages.append(record.getMessage())


@pytest.fixture(autouse=True)
def isolated_provider_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    for name in list(os.environ):
        if name.startswith(_PROVIDER_ENV_PREFIXES) or name == "RELAY_CONFIG_FILE":
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    set_global_callbacks(CallbackManager())
    yield
    reset_config_cache()
    set_global_callbacks(CallbackManager())


@pytest.fixture()
def capture_logger():
    """Return a function swapping a package logger's handlers for a ``ListHandler``."""
    swapped = []

    def _attach(name: str) -> ListHandler:
        logger = get_logger(name)
        handler = ListHandler()
        swapped.append((logger, list(logger.handlers)))
        logger.handlers[:] = [handler]
        return handler

    yield _attach
    for logger, handlers in swapped:
        logger.handlers[:] = handlers
