"""GeminiChatModel adapter.

Uses the google-generativeai (``google.generativeai``) SDK: a
``GenerativeModel`` is built per call with the resolved generation config,
tools and system instruction, earlier turns become the chat history and the
last message is sent through ``ChatSession.send_message``.

Streaming runs the SDK iterator on the shared background producer; opening
the stream (``send_message(..., stream=True)`` issues the request) is
retried for retryable failures, mid-stream failures are terminal.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

try:
    import google.generativeai as genai  # type: ignore
except Exception:  # pragma: no cover
    genai = None  # type: ignore

from ..base.callbacks import CallbackManager
from ..base.chat_model import BaseChatModel
from ..base.concat import ConcatRegistry
from ..base.constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_MAX_RETRIES, MISSING_API_KEY_ERROR, SDK_NOT_INSTALLED
from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext
from ..base.models import Message
from ..base.options import ChatOptions
from ..base.streaming import StreamProducer, StreamReader, stream_prefix
from ..config import get_provider_config
from .conversion import (
    resolve_response,
    resolve_stream_chunk,
    split_messages,
    to_gemini_tools,
    to_generation_config,
    to_tool_config,
)


class GeminiChatModel(BaseChatModel):
    """Chat model for Google Gemini through the Generative Language API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        top_p: Optional[float] = None,
        stop: Optional[list[str]] = None,
        request_params: Optional[dict] = None,
        callbacks: Optional[CallbackManager] = None,
        registry: Optional[ConcatRegistry] = None,
    ) -> None:
        cfg = get_provider_config(
            "gemini",
            {
                "api_key": api_key,
                "model": model,
                "timeout": timeout,
                "max_retries": max_retries,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "top_p": top_p,
                "stop": stop,
                "request_params": request_params,
            },
        )
        super().__init__(
            defaults=ChatOptions.from_config(cfg),
            callbacks=callbacks,
            registry=registry,
            logger_name="relay_providers.gemini",
            max_retries=cfg.get("max_retries", DEFAULT_MAX_RETRIES),
        )
        self._api_key = cfg.get("api_key")
        self._timeout = cfg.get("timeout", DEFAULT_HTTP_TIMEOUT)
        self._configured = False

    @property
    def provider_name(self) -> str:
        return "gemini"

    # ----- SDK -----
    def _sdk(self):
        """Return the configured SDK module.

        Raises:
            ProviderError: SDK not installed (unsupported) or no API key (auth).
        """
        if genai is None:
            raise ProviderError(
                code=ErrorCode.UNSUPPORTED,
                message=SDK_NOT_INSTALLED.format(sdk="google-generativeai"),
                provider=self.provider_name,
                model=self.default_model,
            )
        if not self._api_key:
            raise ProviderError(
                code=ErrorCode.AUTH,
                message=MISSING_API_KEY_ERROR,
                provider=self.provider_name,
                model=self.default_model,
            )
        if not self._configured:
            genai.configure(api_key=self._api_key)
            self._configured = True
        return genai

    def _start_chat(self, messages: List[Message], options: ChatOptions):
        """Build the model and chat session; return ``(session, last_content)``."""
        system_instruction, contents = split_messages(messages)
        tools = to_gemini_tools(options.tools or [])
        sdk = self._sdk()
        gen_model = sdk.GenerativeModel(
            model_name=options.model,
            generation_config=to_generation_config(options) or None,
            tools=tools or None,
            tool_config=to_tool_config(options.tool_choice, tools),
            system_instruction=system_instruction,
        )
        return gen_model.start_chat(history=contents[:-1]), contents[-1]

    def _request_options(self) -> Dict[str, Any]:
        return {"timeout": float(self._timeout)} if self._timeout else {}

    # ----- calls -----
    def _generate(self, messages: List[Message], options: ChatOptions, ctx: LogContext) -> Message:
        session, content = self._start_chat(messages, options)
        resp = self._call_with_retry(
            lambda: session.send_message(content, request_options=self._request_options()),
            ctx,
            phase="generate",
            prefix=f"[{self.provider_name}][Generate]",
        )
        return resolve_response(resp)

    def _stream(self, messages: List[Message], options: ChatOptions, ctx: LogContext) -> StreamReader[Message]:
        session, content = self._start_chat(messages, options)
        prefix = stream_prefix(self.provider_name)
        native = self._call_with_retry(
            lambda: session.send_message(content, stream=True, request_options=self._request_options()),
            ctx,
            phase="stream.start",
            prefix=prefix,
        )
        producer = StreamProducer(
            stream=native,
            converter=resolve_stream_chunk,
            provider_name=self.provider_name,
            model=options.model,
            ctx=ctx,
            logger=self._logger,
            error_prefix=prefix,
        )
        return producer.start()


__all__ = ["GeminiChatModel"]
