"""Structured logging context carried through one adapter call."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Fields attached to every event of one ``generate``/``stream`` call.

    ``request_id`` / ``response_id`` are filled when a provider reports them
    (the Ark response id, for example); ``extra`` holds any other key.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def with_extra(self, **extra: Any) -> "LogContext":
        """Return a copy with ``extra`` merged over the current extras."""
        return replace(self, extra={**self.extra, **extra})

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to a mapping; ``None`` values are dropped, extras are inlined."""
        data: Dict[str, Any] = {
            "provider": self.provider,
            "model": self.model,
            "request_id": self.request_id,
            "response_id": self.response_id,
        }
        data.update(self.extra)
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
