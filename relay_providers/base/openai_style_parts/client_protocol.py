"""Protocol definition for OpenAI-style chat completions clients.

Describes the minimal client surface required by ``OpenAIStyleChatModel``
without tying the base class to a concrete SDK implementation. Tests supply
``types.SimpleNamespace`` fakes with the same shape.
"""

from __future__ import annotations

from typing import Protocol


class _ChatCompletionsClient(Protocol):
    """Client exposing ``chat.completions.create(**params)``.

    With ``stream=True`` the call returns an iterable of chunks that may also
    expose ``close()``; otherwise a response with ``choices[i].message``.
    """

    class _ChatNS(Protocol):  # pragma: no cover - structural hint only
        class _CompletionsNS(Protocol):
            def create(self, **params):  # noqa: D401 - SDK parity
                """Start a chat completion request (streaming or non-streaming)."""
                ...

        completions: _CompletionsNS

    chat: _ChatNS


__all__ = ["_ChatCompletionsClient"]
