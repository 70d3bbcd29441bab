"""
Volcengine Ark provider package.

Exports:
- ArkChatModel: chat model adapter for the Ark OpenAI-compatible endpoint
- get_ark_request_id / get_reasoning_content: readers for Ark message extras
"""

from .client import ArkChatModel
from .extra import (
    ARK_REASONING_CONTENT_KEY,
    ARK_REQUEST_ID_KEY,
    get_ark_request_id,
    get_reasoning_content,
)

__all__ = [
    "ArkChatModel",
    "ARK_REQUEST_ID_KEY",
    "ARK_REASONING_CONTENT_KEY",
    "get_ark_request_id",
    "get_reasoning_content",
]
