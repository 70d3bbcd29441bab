"""Token usage accounting DTO."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass
class TokenUsage:
    """Prompt/completion/total token counts reported by a provider."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        """Return the canonical ``{"prompt", "completion", "total"}`` mapping used in logs."""
        return {
            "prompt": self.prompt_tokens,
            "completion": self.completion_tokens,
            "total": self.total_tokens,
        }


__all__ = ["TokenUsage"]
