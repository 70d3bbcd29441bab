"""Shared machinery for chat models reached through OpenAI-compatible APIs.

Re-exports provide a stable import surface for provider packages.
"""

from .base import OpenAIStyleChatModel
from .client_protocol import _ChatCompletionsClient
from .provider_init import _ProviderInit
from .request_builder import build_chat_params, build_stream_params, to_openai_message, to_openai_tool_choice, to_openai_tools
from .response_resolver import (
    find_first_choice,
    resolve_chat_response,
    resolve_stream_chunk,
    to_log_probs,
    to_message_tool_calls,
    to_token_usage,
)

__all__ = [
    "OpenAIStyleChatModel",
    "_ChatCompletionsClient",
    "_ProviderInit",
    "build_chat_params",
    "build_stream_params",
    "to_openai_message",
    "to_openai_tool_choice",
    "to_openai_tools",
    "find_first_choice",
    "resolve_chat_response",
    "resolve_stream_chunk",
    "to_log_probs",
    "to_message_tool_calls",
    "to_token_usage",
]
