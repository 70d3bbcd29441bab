"""
Request builders for OpenAI-compatible Chat Completions APIs.

Translate canonical messages, tools and resolved :class:`ChatOptions` into
the keyword arguments of ``client.chat.completions.create``. Pure functions;
no network I/O.
"""

from __future__ import annotations

import typing as _t

from ..constants import (
    FORCED_WITHOUT_TOOLS,
    TOOL_CHOICE_AUTO,
    TOOL_CHOICE_NONE,
    TOOL_CHOICE_REQUIRED,
)
from ..models import Message, ToolCall, ToolChoice, ToolInfo
from ..options import ChatOptions


def to_openai_tool_calls(tool_calls: _t.Sequence[ToolCall]) -> list[dict]:
    return [
        {
            "id": tc.id,
            "type": tc.type or "function",
            "function": {"name": tc.function.name, "arguments": tc.function.arguments},
        }
        for tc in tool_calls
    ]


def to_openai_message(message: Message) -> dict:
    """Translate one canonical message into the OpenAI wire shape.

    Raises:
        ValueError: when the message has no role.
    """
    if message.role is None:
        raise ValueError("message role is required in a request")
    out: dict = {"role": message.role.value, "content": message.content}
    if message.name:
        out["name"] = message.name
    if message.tool_calls:
        out["tool_calls"] = to_openai_tool_calls(message.tool_calls)
        if not message.content:
            out["content"] = None
    if message.tool_call_id:
        out["tool_call_id"] = message.tool_call_id
    return out


def to_openai_tools(tools: _t.Sequence[ToolInfo]) -> list[dict]:
    return [
        {
            "type": "function",
            "function": {
                "name": t.name,
                "description": t.description,
                "parameters": t.parameters,
            },
        }
        for t in tools
    ]


def to_openai_tool_choice(choice: ToolChoice, tools: _t.Sequence[dict]) -> _t.Any:
    """Map a :class:`ToolChoice` onto the ``tool_choice`` request field.

    Forced with exactly one tool names that function; with several tools it
    becomes ``"required"``.

    Raises:
        ValueError: forced without any tool.
    """
    if choice is ToolChoice.FORBIDDEN:
        return TOOL_CHOICE_NONE
    if choice is ToolChoice.ALLOWED:
        return TOOL_CHOICE_AUTO
    if choice is ToolChoice.FORCED:
        if not tools:
            raise ValueError(FORCED_WITHOUT_TOOLS)
        if len(tools) > 1:
            return TOOL_CHOICE_REQUIRED
        return {"type": "function", "function": {"name": tools[0]["function"]["name"]}}
    raise ValueError(f"tool choice={choice} not supported")


def build_chat_params(messages: _t.Sequence[Message], options: ChatOptions) -> dict:
    """Assemble parameters for a non-streaming chat completion call.

    ``options.request_params`` are copied last and may carry any other
    provider-accepted field (``seed``, ``logprobs``, ``response_format``...).
    """
    params: dict = {
        "model": options.model,
        "messages": [to_openai_message(m) for m in messages],
    }
    if options.max_tokens is not None:
        params["max_tokens"] = int(options.max_tokens)
    if options.temperature is not None:
        params["temperature"] = float(options.temperature)
    if options.top_p is not None:
        params["top_p"] = float(options.top_p)
    if options.stop:
        params["stop"] = list(options.stop)
    tools = to_openai_tools(options.tools or [])
    if tools:
        params["tools"] = tools
    if options.tool_choice is not None:
        params["tool_choice"] = to_openai_tool_choice(options.tool_choice, tools)
    params.update(options.request_params)
    return params


def build_stream_params(messages: _t.Sequence[Message], options: ChatOptions) -> dict:
    """Same as :func:`build_chat_params` with streaming and usage reporting enabled."""
    params = build_chat_params(messages, options)
    params["stream"] = True
    params["stream_options"] = {"include_usage": True}
    return params


__all__ = [
    "to_openai_message",
    "to_openai_tool_calls",
    "to_openai_tools",
    "to_openai_tool_choice",
    "build_chat_params",
    "build_stream_params",
]
