"""OpenAIStyleChatModel: shared adapter for OpenAI-compatible Chat Completions APIs.

Purpose:
- Provide the request/stream orchestration common to every provider reached
  through the ``openai`` SDK (OpenAI itself, Volcengine Ark, Baidu Qianfan).
  Subclasses only adjust chunk/response resolution.

External dependencies:
- The ``openai`` SDK client created by ``_make_client``. This module performs
  no network I/O itself; it orchestrates calls into the SDK.

Retry strategy:
- Only the request phase (non-streaming call, or opening the stream before
  any chunk arrives) is retried, through ``BaseChatModel._call_with_retry``
  and for retryable error codes. The SDK client is built with ``max_retries=0`` so
  attempts are not multiplied. Mid-stream failures are terminal.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from ..callbacks import CallbackManager
from ..chat_model import BaseChatModel
from ..concat import ConcatRegistry
from ..constants import MISSING_API_KEY_ERROR, SDK_NOT_INSTALLED
from ..errors import ErrorCode, ProviderError
from ..logging import LogContext
from ..models import Message
from ..options import ChatOptions
from ..streaming import StreamProducer, StreamReader, stream_prefix
from .client_protocol import _ChatCompletionsClient
from .provider_init import _ProviderInit
from .request_builder import build_chat_params, build_stream_params
from .response_resolver import resolve_chat_response, resolve_stream_chunk


class OpenAIStyleChatModel(BaseChatModel):
    """Reusable base class for OpenAI-compatible chat models.

    Subclasses set ``provider_name`` and may override:
    - ``_resolve_chunk(chunk)``: one stream chunk to a delta (``None`` = skip).
    - ``_resolve_response(resp)``: a complete response to a message.
    - ``_make_converter()``: per-stream converter, for stateful conversion.
    - ``_make_client()``: SDK client construction.
    """

    def __init__(
        self,
        init: _ProviderInit,
        *,
        defaults: ChatOptions,
        callbacks: Optional[CallbackManager] = None,
        registry: Optional[ConcatRegistry] = None,
    ) -> None:
        super().__init__(
            defaults=defaults,
            callbacks=callbacks,
            registry=registry,
            logger_name=init.logger_name,
            max_retries=init.max_retries,
            retry_delay_base=init.retry_delay_base,
        )
        self._init = init
        self._api_key = init.api_key
        self._base_url = init.base_url
        self._sdk_sentinel = init.sdk_sentinel

    # ----- SDK client -----
    def _make_client(self) -> _ChatCompletionsClient:
        """Create the SDK client; HTTP retries are disabled in favour of ``retry``."""
        self._check_prereqs()
        return self._sdk_sentinel(
            api_key=self._api_key,
            base_url=self._base_url,
            timeout=self._init.timeout,
            max_retries=0,
        )

    def _check_prereqs(self) -> None:
        if self._sdk_sentinel is None:
            raise ProviderError(
                code=ErrorCode.UNSUPPORTED,
                message=SDK_NOT_INSTALLED.format(sdk="openai"),
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

    # ----- conversion hooks -----
    def _resolve_chunk(self, chunk: Any) -> Optional[Message]:
        return resolve_stream_chunk(chunk)

    def _resolve_response(self, resp: Any) -> Message:
        return resolve_chat_response(resp, provider=self.provider_name)

    def _make_converter(self) -> Callable[[Any], Optional[Message]]:
        """Return the converter for one stream (stateless by default)."""
        return self._resolve_chunk

    # ----- calls -----
    def _generate(self, messages: List[Message], options: ChatOptions, ctx: LogContext) -> Message:
        params = build_chat_params(messages, options)
        client = self._make_client()
        resp = self._invoke(client, params, ctx, phase="generate", prefix=f"[{self.provider_name}][Generate]")
        return self._resolve_response(resp)

    def _stream(self, messages: List[Message], options: ChatOptions, ctx: LogContext) -> StreamReader[Message]:
        params = build_stream_params(messages, options)
        client = self._make_client()
        prefix = stream_prefix(self.provider_name)
        native = self._invoke(client, params, ctx, phase="stream.start", prefix=prefix)
        producer = StreamProducer(
            stream=native,
            converter=self._make_converter(),
            provider_name=self.provider_name,
            model=params["model"],
            ctx=ctx,
            logger=self._logger,
            error_prefix=prefix,
        )
        return producer.start()

    def _invoke(self, client: _ChatCompletionsClient, params: dict, ctx: LogContext, *, phase: str, prefix: str) -> Any:
        """Call ``chat.completions.create`` under the retry policy."""
        return self._call_with_retry(lambda: client.chat.completions.create(**params), ctx, phase=phase, prefix=prefix)


__all__ = ["OpenAIStyleChatModel"]
