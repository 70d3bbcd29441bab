"""Streaming metrics data structures.

Collected by :class:`StreamProducer` for a single provider stream and emitted
once in the terminal log event.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models import Message


@dataclass
class StreamMetrics:
    """Collected streaming metrics for a single provider invocation.

    ``emitted`` counts messages delivered to the reader.
    ``time_to_first_chunk_ms`` is measured from the producer start to the
    first delivered message. Token fields mirror the last usage report seen
    on the stream, which providers send on the final chunk.
    """

    emitted: int = 0
    time_to_first_chunk_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    finish_reason: Optional[str] = None

    def observe(self, message: Message) -> None:
        """Fold usage and finish reason of a delivered message into the metrics."""
        meta = message.response_meta
        if meta is None:
            return
        if meta.finish_reason:
            self.finish_reason = meta.finish_reason
        if meta.usage is not None:
            apply_token_usage(
                self,
                prompt=meta.usage.prompt_tokens,
                completion=meta.usage.completion_tokens,
                total=meta.usage.total_tokens,
            )

    @property
    def tokens(self) -> Optional[Dict[str, Any]]:
        if self.prompt_tokens is None and self.completion_tokens is None and self.total_tokens is None:
            return None
        return build_token_usage(self.prompt_tokens, self.completion_tokens, self.total_tokens)


def build_token_usage(prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> Dict[str, Optional[int]]:
    """Return a canonical token usage mapping."""
    derived_total = total
    if derived_total is None and (prompt is not None and completion is not None):
        derived_total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": derived_total}


def apply_token_usage(metrics: StreamMetrics, *, prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> None:
    """Populate token usage fields on a :class:`StreamMetrics` instance."""
    metrics.prompt_tokens = prompt
    metrics.completion_tokens = completion
    metrics.total_tokens = total if total else (
        (prompt + completion) if (prompt is not None and completion is not None) else None
    )


__all__ = [
    "StreamMetrics",
    "apply_token_usage",
    "build_token_usage",
]
