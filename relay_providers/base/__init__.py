"""
Providers Base Package

Provider-agnostic building blocks shared by every chat model adapter:

- Models: canonical ``Message`` and its parts
- Streaming: the backpressured pipe (``StreamReader``/``StreamWriter``) and
  the background producer that feeds it from a native SDK stream
- Concat: the associative delta concatenation engine and its registry
- Callbacks: observability handlers receiving a copy of every stream
- Chat model contract, options, errors and the adapter factory
"""

from .callbacks import (
    CallbackHandler,
    CallbackInput,
    CallbackManager,
    CallbackOutput,
    LoggingCallbackHandler,
    get_callback_manager,
    set_global_callbacks,
)
from .chat_model import BaseChatModel
from .concat import ConcatRegistry, MessageConcatenator, concat_messages
from .errors import (
    ConcatError,
    EmptyResponseError,
    ErrorCode,
    PanicError,
    ProtocolError,
    ProviderError,
    RelayError,
)
from .factory import ProviderFactory, UnknownProviderError, create
from .models import (
    ExtraKind,
    ExtraValue,
    FunctionCall,
    Message,
    ResponseMeta,
    RoleType,
    TokenUsage,
    ToolCall,
    ToolChoice,
    ToolInfo,
)
from .options import ChatOptions
from .streaming import EndOfStream, NoValue, StreamMetrics, StreamReader, StreamWriter, pipe

__all__ = [
    # Models
    "RoleType",
    "Message",
    "ToolCall",
    "FunctionCall",
    "ToolInfo",
    "ToolChoice",
    "TokenUsage",
    "ResponseMeta",
    "ExtraKind",
    "ExtraValue",
    # Streaming
    "StreamReader",
    "StreamWriter",
    "pipe",
    "EndOfStream",
    "NoValue",
    "StreamMetrics",
    # Concat
    "ConcatRegistry",
    "MessageConcatenator",
    "concat_messages",
    # Callbacks
    "CallbackHandler",
    "CallbackInput",
    "CallbackOutput",
    "CallbackManager",
    "LoggingCallbackHandler",
    "get_callback_manager",
    "set_global_callbacks",
    # Chat model
    "BaseChatModel",
    "ChatOptions",
    # Errors
    "ErrorCode",
    "RelayError",
    "ProviderError",
    "ProtocolError",
    "EmptyResponseError",
    "PanicError",
    "ConcatError",
    # Factory
    "ProviderFactory",
    "UnknownProviderError",
    "create",
]
