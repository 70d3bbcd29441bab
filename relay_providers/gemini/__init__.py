"""
Google Gemini provider package.

Exports:
- GeminiChatModel: chat model adapter over google-generativeai
"""

from .client import GeminiChatModel

__all__ = ["GeminiChatModel"]
