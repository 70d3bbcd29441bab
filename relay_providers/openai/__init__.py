"""
OpenAI provider package.

Exports:
- OpenAIChatModel: chat model adapter for OpenAI-compatible Chat Completions
"""

from .client import OpenAIChatModel

__all__ = ["OpenAIChatModel"]
