"""Chat model contract shared by every provider adapter.

``BaseChatModel`` owns what does not depend on the provider wire format:
option resolution, tool binding, the callback lifecycle and the
concatenation registry. Subclasses implement ``_generate`` and ``_stream``.

Callback lifecycle per call:
- ``on_start`` before the provider request;
- ``generate``: ``on_end`` with the returned message, or ``on_error``;
- ``stream``: ``on_error`` when the stream cannot be opened, otherwise every
  handler receives its own copy of the delta stream through
  ``on_end_with_stream_output`` and the caller gets the remaining copy.
"""
from __future__ import annotations

import copy
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from .callbacks import CallbackInput, CallbackManager, CallbackOutput, get_callback_manager
from .concat import ConcatRegistry, concat_messages
from .constants import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY_BASE
from .errors import ProviderError, RelayError, wrap_transport_error
from .logging import LogContext, get_logger, normalized_log_event
from .models import Message, ToolChoice, ToolInfo
from .options import ChatOptions, resolve_options
from .resilience.retry import RetryConfig, retry
from .streaming import StreamReader

T = TypeVar("T")


class BaseChatModel:
    """Provider-independent surface of a chat model adapter.

    Subclasses must set ``provider_name`` and implement:
    - ``_generate(messages, options, ctx) -> Message``
    - ``_stream(messages, options, ctx) -> StreamReader[Message]``
    """

    provider_name: str = ""

    def __init__(
        self,
        *,
        defaults: ChatOptions,
        callbacks: Optional[CallbackManager] = None,
        registry: Optional[ConcatRegistry] = None,
        logger_name: Optional[str] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay_base: float = DEFAULT_RETRY_DELAY_BASE,
    ) -> None:
        self._defaults = defaults
        self._tools: List[ToolInfo] = []
        self._tool_choice: Optional[ToolChoice] = None
        self._callbacks = callbacks
        self._registry = registry if registry is not None else ConcatRegistry()
        self._logger = get_logger(logger_name or f"relay_providers.{self.provider_name}")
        self._max_retries = max_retries
        self._retry_delay_base = retry_delay_base

    # ----- properties -----
    @property
    def concat_registry(self) -> ConcatRegistry:
        """Registry of extra-key concatenation functions used for this model's output."""
        return self._registry

    @property
    def callbacks(self) -> CallbackManager:
        return self._callbacks if self._callbacks is not None else get_callback_manager()

    @property
    def default_model(self) -> Optional[str]:
        return self._defaults.model

    @property
    def tools(self) -> List[ToolInfo]:
        return list(self._tools)

    @property
    def tool_choice(self) -> Optional[ToolChoice]:
        return self._tool_choice

    # ----- tool binding -----
    def bind_tools(self, tools: Sequence[ToolInfo]) -> None:
        """Bind ``tools`` to this instance; the model may choose to call them."""
        self._tools = _check_tools(tools)
        self._tool_choice = ToolChoice.ALLOWED

    def bind_forced_tools(self, tools: Sequence[ToolInfo]) -> None:
        """Bind ``tools`` to this instance; the model must call one of them."""
        self._tools = _check_tools(tools)
        self._tool_choice = ToolChoice.FORCED

    def with_tools(self, tools: Sequence[ToolInfo]) -> "BaseChatModel":
        """Return a copy with ``tools`` bound (choice: allowed); this instance is unchanged."""
        bound = _check_tools(tools)
        clone = copy.copy(self)
        clone._tools = bound
        clone._tool_choice = ToolChoice.ALLOWED
        return clone

    # ----- calls -----
    def resolve(self, options: Optional[ChatOptions] = None) -> ChatOptions:
        """Resolve call options against defaults and bound tools."""
        defaults = copy.copy(self._defaults)
        if self._tools:
            defaults.tools = list(self._tools)
        if self._tool_choice is not None:
            defaults.tool_choice = self._tool_choice
        return resolve_options(defaults, options)

    def generate(self, messages: Iterable[Message], options: Optional[ChatOptions] = None) -> Message:
        """Send one request and return the complete response message."""
        msgs = list(messages)
        manager = self.callbacks
        ctx = LogContext(provider=self.provider_name, model=self._defaults.model)
        try:
            opts = self.resolve(options)
            ctx.model = opts.model
            manager.on_start(ctx, CallbackInput(messages=msgs, tools=list(opts.tools or []), config=opts))
            message = self._generate(msgs, opts, ctx)
        except Exception as exc:
            manager.on_error(ctx, exc)
            raise
        manager.on_end(ctx, CallbackOutput.from_message(message, opts))
        return message

    def stream(self, messages: Iterable[Message], options: Optional[ChatOptions] = None) -> StreamReader[Message]:
        """Open a stream and return a reader of message deltas.

        Returns as soon as the native stream is open. The caller must close the
        reader when done, including on early abandonment.
        """
        msgs = list(messages)
        manager = self.callbacks
        ctx = LogContext(provider=self.provider_name, model=self._defaults.model)
        try:
            opts = self.resolve(options)
            ctx.model = opts.model
            manager.on_start(ctx, CallbackInput(messages=msgs, tools=list(opts.tools or []), config=opts))
            reader = self._stream(msgs, opts, ctx)
        except Exception as exc:
            manager.on_error(ctx, exc)
            raise
        return manager.on_end_with_stream_output(
            ctx, reader, lambda message: CallbackOutput.from_message(message, opts)
        )

    def concat(self, messages: Iterable[Message]) -> Message:
        """Merge stream deltas using this model's concatenation registry."""
        return concat_messages(list(messages), self._registry)

    # ----- request phase -----
    def _call_with_retry(self, call: Callable[[], T], ctx: LogContext, *, phase: str, prefix: str) -> T:
        """Run ``call`` under the retry policy, classifying raw SDK failures.

        Any exception raised by ``call`` becomes a :class:`ProviderError`
        (message prefixed with ``prefix``); retryable codes are retried up to
        ``max_retries`` times.
        """

        @retry(self._build_retry_config(ctx, phase=phase))
        def _attempt() -> T:
            try:
                return call()
            except RelayError:
                raise
            except Exception as e:  # noqa: BLE001 - classified below
                raise wrap_transport_error(e, provider=self.provider_name, model=ctx.model, prefix=prefix) from e

        return _attempt()

    def _build_retry_config(self, ctx: LogContext, phase: Optional[str] = None) -> RetryConfig:
        def _attempt_logger(*, attempt: int, max_attempts: int, delay, error: ProviderError | None):  # type: ignore[override]
            normalized_log_event(
                self._logger,
                "retry.attempt",
                ctx,
                phase=(phase or "retry"),
                attempt=attempt,
                max_attempts=max_attempts,
                delay=delay,
                error_code=(error.code.value if error else None),
                will_retry=bool(error and delay is not None and error.code in config.retryable_codes),
                tokens=None,
                emitted=None,
            )

        config = RetryConfig(
            max_attempts=max(1, int(self._max_retries) + 1),
            delay_base=float(self._retry_delay_base),
            attempt_logger=_attempt_logger,
        )
        return config

    # ----- abstract surface -----
    def _generate(self, messages: List[Message], options: ChatOptions, ctx: LogContext) -> Message:  # pragma: no cover - abstract
        raise NotImplementedError

    def _stream(
        self, messages: List[Message], options: ChatOptions, ctx: LogContext
    ) -> StreamReader[Message]:  # pragma: no cover - abstract
        raise NotImplementedError


def _check_tools(tools: Sequence[ToolInfo]) -> List[ToolInfo]:
    bound = list(tools or [])
    if not bound:
        raise ValueError("no tools to bind")
    for tool in bound:
        if not isinstance(tool, ToolInfo):
            raise TypeError(f"tool must be a ToolInfo, got {type(tool).__name__}")
    return bound


__all__ = ["BaseChatModel"]
