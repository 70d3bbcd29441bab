"""Typed parameter object for chat model adapter construction.

Purpose
-------
Capture the constructor arguments shared by every adapter so call sites
(factory, application wiring) can pass one validated object instead of long
keyword lists. Provider-specific arguments travel in ``extra`` and are
forwarded as keyword arguments.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, NonNegativeInt, PositiveFloat


class AdapterParams(BaseModel):
    """Common chat model adapter parameters.

    Unset (``None``) fields are not forwarded, so the adapter falls back to
    ``get_provider_config`` for them.

    Attributes
    ----------
    provider:
        Canonical provider name; informational, never forwarded.
    model:
        Default model identifier (Ark: endpoint id).
    api_key:
        Credential passed to the SDK client.
    base_url:
        API base URL override (proxies, private deployments). The factory
        drops it for gemini, which takes no base URL.
    timeout:
        Per-request HTTP timeout in seconds.
    max_retries:
        Retries of the request/stream-open phase.
    extra:
        Provider-specific constructor arguments (``parallel_tool_calls`` for
        qianfan, ...).
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout: Optional[PositiveFloat] = None
    max_retries: Optional[NonNegativeInt] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    stop: Optional[List[str]] = None
    request_params: Dict[str, Any] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)

    def to_kwargs(self) -> Dict[str, Any]:
        """Return constructor keyword arguments (unset fields omitted)."""
        data = self.model_dump(exclude_none=True, exclude={"provider", "extra"})
        if not data.get("request_params"):
            data.pop("request_params", None)
        data.update(self.extra)
        return data


__all__ = ["AdapterParams"]
