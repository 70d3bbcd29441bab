"""
Registry of per-key concatenation functions for ``Message.extra``.

A registry instance is created once per composition root (for example by the
provider factory) and handed to every adapter and to the concatenation
engine. Adapters register the merge rule for their own extra keys while they
are being constructed; afterwards the registry is only read.
"""
from __future__ import annotations

from threading import Lock
from typing import Callable, Dict, Iterator, List, Optional

from ..models import ExtraValue

ExtraConcatFunc = Callable[[List[ExtraValue]], ExtraValue]


class ConcatRegistry:
    """Mapping of extra key to the function merging that key's values.

    Registration is idempotent for the same function object; registering a
    different function for a key already taken raises ``ValueError``.
    Lookups take no lock.
    """

    def __init__(self) -> None:
        self._funcs: Dict[str, ExtraConcatFunc] = {}
        self._lock = Lock()

    def register(self, key: str, func: ExtraConcatFunc) -> None:
        """Register ``func`` as the concatenation rule for extra ``key``."""
        if not key:
            raise ValueError("extra key must be non-empty")
        with self._lock:
            existing = self._funcs.get(key)
            if existing is None:
                self._funcs[key] = func
                return
            if existing is func:
                return
        raise ValueError(f"concat function already registered for extra key {key!r}")

    def get(self, key: str) -> Optional[ExtraConcatFunc]:
        return self._funcs.get(key)

    def keys(self) -> List[str]:
        return list(self._funcs)

    def __contains__(self, key: object) -> bool:
        return key in self._funcs

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._funcs))

    def __len__(self) -> int:
        return len(self._funcs)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"ConcatRegistry(keys={sorted(self._funcs)!r})"


__all__ = ["ConcatRegistry", "ExtraConcatFunc"]
