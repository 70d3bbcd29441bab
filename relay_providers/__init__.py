"""relay_providers package

Chat model adapters for OpenAI-compatible APIs, Volcengine Ark, Baidu
Qianfan and Google Gemini behind one ``generate`` / ``stream`` surface.

Public API (re-exported):
    - Version: ``__version__``
    - Factory: :func:`create`, :class:`ProviderFactory`, :class:`AdapterParams`
    - Messages: :class:`Message`, :class:`ToolInfo`, :class:`ChatOptions`, ...
    - Streams: :class:`StreamReader`, :func:`pipe`, :func:`concat_messages`
    - Errors: :class:`RelayError` and its subclasses, :class:`ErrorCode`

Example::

    from relay_providers import create, user_message

    model = create("openai", model="gpt-4o-mini")
    with model.stream([user_message("hi")]) as reader:
        answer = model.concat(reader)
"""

from typing import Any, Optional

from .base.callbacks import CallbackHandler, CallbackManager, LoggingCallbackHandler, set_global_callbacks
from .base.concat import ConcatRegistry, concat_messages
from .base.dto import AdapterParams
from .base.errors import (
    ConcatError,
    EmptyResponseError,
    ErrorCode,
    PanicError,
    ProtocolError,
    ProviderError,
    RelayError,
)
from .base.factory import ProviderFactory, UnknownProviderError, default_factory
from .base.models import (
    ExtraValue,
    Message,
    RoleType,
    ToolCall,
    ToolChoice,
    ToolInfo,
    assistant_message,
    system_message,
    tool_message,
    user_message,
)
from .base.options import ChatOptions
from .base.streaming import StreamReader, pipe

__version__ = "0.1.0"


def create(provider_name: str, *, params: Optional[AdapterParams] = None, **kwargs: Any):
    """Instantiate a chat model adapter through the process-wide factory.

    Parameters
    ----------
    provider_name:
        Canonical provider name (``"openai"``, ``"ark"``, ``"qianfan"``,
        ``"gemini"``).
    params:
        Optional :class:`AdapterParams`; explicit ``kwargs`` take precedence.
    **kwargs:
        Adapter constructor keyword arguments.

    Raises
    ------
    UnknownProviderError
        Unknown provider or invalid constructor arguments.
    """
    return default_factory().create(provider_name, params=params, **kwargs)


__all__ = [
    "__version__",
    "create",
    "ProviderFactory",
    "UnknownProviderError",
    "AdapterParams",
    "Message",
    "RoleType",
    "ToolCall",
    "ToolInfo",
    "ToolChoice",
    "ExtraValue",
    "ChatOptions",
    "system_message",
    "user_message",
    "assistant_message",
    "tool_message",
    "StreamReader",
    "pipe",
    "ConcatRegistry",
    "concat_messages",
    "CallbackHandler",
    "CallbackManager",
    "LoggingCallbackHandler",
    "set_global_callbacks",
    "ErrorCode",
    "RelayError",
    "ProviderError",
    "ProtocolError",
    "EmptyResponseError",
    "PanicError",
    "ConcatError",
]
