"""
Baidu Qianfan provider package.

Exports:
- QianfanChatModel: chat model adapter for the Qianfan v2 OpenAI-compatible API
"""

from .client import QianfanChatModel

__all__ = ["QianfanChatModel"]
