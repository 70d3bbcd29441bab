"""Chat model factory.

Purpose
-------
Centralize provider-agnostic creation of chat model adapters. Adapters are
imported lazily using ``importlib`` so that creating an OpenAI adapter never
imports google-generativeai (and vice versa).

Every adapter created by one factory shares the factory's
:class:`ConcatRegistry` and callback manager. Adapters register their extra
concatenation rules on that registry while being constructed, so output of
any of them can be merged with ``factory.concat`` or ``concat_messages``
using the same registry.

Failure modes
-------------
- Unknown provider names, import failures, missing classes and constructor
  argument errors raise :class:`UnknownProviderError`. Errors raised by an
  adapter's own validation (for example a ``ValueError`` on a conflicting
  concat rule) propagate unchanged.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .callbacks import CallbackManager
from .chat_model import BaseChatModel
from .concat import ConcatRegistry, concat_messages
from .dto.adapter_params import AdapterParams
from .models import Message


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or its adapter cannot be built."""


class ProviderFactory:
    """Create chat model adapters by canonical name (``"openai"``, ``"ark"``...)."""

    # Map canonical provider names to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "relay_providers.openai.client", "class": "OpenAIChatModel"},
        "ark": {"module": "relay_providers.ark.client", "class": "ArkChatModel"},
        "qianfan": {"module": "relay_providers.qianfan.client", "class": "QianfanChatModel"},
        "gemini": {"module": "relay_providers.gemini.client", "class": "GeminiChatModel"},
    }
    # Providers whose adapters take no base URL; AdapterParams.base_url is dropped for them
    _WITHOUT_BASE_URL = frozenset({"gemini"})

    def __init__(
        self,
        registry: Optional[ConcatRegistry] = None,
        callbacks: Optional[CallbackManager] = None,
    ) -> None:
        self._registry = registry if registry is not None else ConcatRegistry()
        self._callbacks = callbacks

    @property
    def registry(self) -> ConcatRegistry:
        return self._registry

    def create(
        self,
        provider: str,
        *,
        params: Optional[AdapterParams] = None,
        **kwargs: Any,
    ) -> BaseChatModel:
        """Create a chat model adapter.

        Parameters
        ----------
        provider:
            Canonical provider name (case-insensitive).
        params:
            Optional :class:`AdapterParams`; explicit ``kwargs`` win over it.
        **kwargs:
            Adapter constructor keyword arguments.

        Raises
        ------
        UnknownProviderError
            Unknown provider, import failure, missing adapter class, or
            invalid constructor arguments.
        """
        name = (provider or "").lower().strip()
        if params is not None and name in self._WITHOUT_BASE_URL:
            params = params.model_copy(update={"base_url": None})
        merged = self._coerce_params(params, kwargs)
        merged.setdefault("registry", self._registry)
        if self._callbacks is not None:
            merged.setdefault("callbacks", self._callbacks)

        entry = self._PROVIDERS.get(name)
        if not entry:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = entry["module"], entry["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(**merged)  # type: ignore[call-arg]
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc

    def concat(self, messages: Any) -> Message:
        """Merge deltas from any adapter of this factory with the shared registry."""
        return concat_messages(list(messages), self._registry)

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the canonical provider names in deterministic order."""
        return tuple(cls._PROVIDERS.keys())

    @staticmethod
    def _coerce_params(params: Optional[AdapterParams], kwargs: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge ``AdapterParams`` with explicit ``kwargs``; ``kwargs`` win.

        ``request_params`` mappings are shallow-merged, with kwargs winning
        conflicting keys.
        """
        if params is None:
            return dict(kwargs)
        merged = params.to_kwargs()
        if "request_params" in merged and "request_params" in kwargs:
            rp = dict(merged["request_params"])
            rp.update(kwargs["request_params"] or {})
            merged["request_params"] = rp
            kwargs = {k: v for k, v in kwargs.items() if k != "request_params"}
        merged.update(kwargs)
        return merged


_DEFAULT_FACTORY: Optional[ProviderFactory] = None


def default_factory() -> ProviderFactory:
    """Return the process-wide factory (created on first use)."""
    global _DEFAULT_FACTORY
    if _DEFAULT_FACTORY is None:
        _DEFAULT_FACTORY = ProviderFactory()
    return _DEFAULT_FACTORY


def create(provider: str, **kwargs: Any) -> BaseChatModel:
    """Create an adapter through the process-wide :func:`default_factory`."""
    return default_factory().create(provider, **kwargs)


__all__ = ["ProviderFactory", "UnknownProviderError", "default_factory", "create"]
