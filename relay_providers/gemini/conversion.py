"""Conversion between canonical messages and google-generativeai payloads.

Requests are built from plain dicts (``{"role": ..., "parts": [...]}``),
which ``google.generativeai`` accepts wherever it accepts ``Content``.
Responses are read attribute by attribute so both SDK protos and test doubles
work. Only ``candidates[0]`` of a response is considered.
"""
from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Optional, Tuple

from ..base.constants import FORCED_WITHOUT_TOOLS
from ..base.errors import ProtocolError
from ..base.models import (
    FunctionCall,
    Message,
    ResponseMeta,
    RoleType,
    TokenUsage,
    ToolCall,
    ToolChoice,
    ToolInfo,
)
from ..base.options import ChatOptions

ROLE_MODEL = "model"
ROLE_USER = "user"

_UNSPECIFIED_FINISH = ("", "FINISH_REASON_UNSPECIFIED")


def to_gemini_role(role: Optional[RoleType]) -> str:
    return ROLE_MODEL if role is RoleType.ASSISTANT else ROLE_USER


def _tool_response(message: Message) -> Dict[str, Any]:
    try:
        response = json.loads(message.content) if message.content else {}
    except json.JSONDecodeError:
        response = None
    if not isinstance(response, dict):
        response = {"content": message.content}
    return {"function_response": {"name": message.tool_call_id or message.name, "response": response}}


def to_gemini_content(message: Message) -> Dict[str, Any]:
    """Translate one non-system message into a Gemini content dict.

    Raises:
        ValueError: tool call arguments that are not a JSON object.
    """
    parts: List[Dict[str, Any]] = []
    for call in message.tool_calls:
        try:
            args = json.loads(call.function.arguments) if call.function.arguments else {}
        except json.JSONDecodeError as exc:
            raise ValueError(f"tool call {call.function.name!r} arguments are not valid JSON: {exc}") from exc
        parts.append({"function_call": {"name": call.function.name, "args": args}})
    if message.role is RoleType.TOOL:
        parts.append(_tool_response(message))
    elif message.content:
        parts.append({"text": message.content})
    return {"role": to_gemini_role(message.role), "parts": parts}


def split_messages(messages: Sequence[Message]) -> Tuple[Optional[str], List[Dict[str, Any]]]:
    """Return ``(system_instruction, contents)`` for a conversation.

    System messages are joined into the system instruction; every other
    message becomes one content entry, in order.

    Raises:
        ValueError: no message other than system messages.
    """
    system = [m.content for m in messages if m.role is RoleType.SYSTEM and m.content]
    contents = [to_gemini_content(m) for m in messages if m.role is not RoleType.SYSTEM]
    if not contents:
        raise ValueError("gemini input is empty")
    return ("\n".join(system) or None), contents


def to_gemini_tools(tools: Sequence[ToolInfo]) -> List[Dict[str, Any]]:
    if not tools:
        return []
    declarations = []
    for t in tools:
        decl: Dict[str, Any] = {"name": t.name, "description": t.description}
        if t.parameters:
            decl["parameters"] = t.parameters
        declarations.append(decl)
    return [{"function_declarations": declarations}]


def to_tool_config(choice: Optional[ToolChoice], tools: Sequence[Any]) -> Optional[Dict[str, Any]]:
    """Map a :class:`ToolChoice` onto a function-calling mode.

    Raises:
        ValueError: forced without any tool.
    """
    if choice is None:
        return None
    if choice is ToolChoice.FORBIDDEN:
        mode = "NONE"
    elif choice is ToolChoice.ALLOWED:
        mode = "AUTO"
    elif choice is ToolChoice.FORCED:
        if not tools:
            raise ValueError(FORCED_WITHOUT_TOOLS)
        mode = "ANY"
    else:
        raise ValueError(f"tool choice={choice} not supported")
    return {"function_calling_config": {"mode": mode}}


def to_generation_config(options: ChatOptions) -> Dict[str, Any]:
    """Sampling settings; ``request_params`` may add any other field (``top_k``...)."""
    cfg: Dict[str, Any] = {}
    if options.temperature is not None:
        cfg["temperature"] = float(options.temperature)
    if options.max_tokens is not None:
        cfg["max_output_tokens"] = int(options.max_tokens)  # nosec B105 - API field name
    if options.top_p is not None:
        cfg["top_p"] = float(options.top_p)
    if options.stop:
        cfg["stop_sequences"] = list(options.stop)
    cfg.update(options.request_params)
    return cfg


# ----- responses -----


def _plain(value: Any) -> Any:
    """Turn proto map/repeated composites into JSON-serializable values."""
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (str, bytes)):
        return value
    if isinstance(value, Sequence):
        return [_plain(v) for v in value]
    if isinstance(value, float) and value.is_integer():
        # Struct numbers are doubles; keep integral values integral.
        return int(value)
    return value


def _to_tool_call(fc: Any) -> ToolCall:
    name = getattr(fc, "name", "") or ""
    args = getattr(fc, "args", None)
    return ToolCall(
        id=name,
        function=FunctionCall(name=name, arguments=json.dumps(_plain(args) if args else {})),
    )


def _finish_reason(candidate: Any) -> str:
    reason = getattr(candidate, "finish_reason", None)
    if reason is None:
        return ""
    name = getattr(reason, "name", None)
    text = name if isinstance(name, str) else str(reason)
    return "" if text in _UNSPECIFIED_FINISH else text


def to_token_usage(usage: Any) -> Optional[TokenUsage]:
    if usage is None:
        return None
    return TokenUsage(
        prompt_tokens=int(getattr(usage, "prompt_token_count", 0) or 0),
        completion_tokens=int(getattr(usage, "candidates_token_count", 0) or 0),
        total_tokens=int(getattr(usage, "total_token_count", 0) or 0),
    )


def candidate_to_message(candidate: Any) -> Message:
    """Convert one candidate into a message.

    Raises:
        ProtocolError: a part of a kind this adapter does not understand.
    """
    message = Message(response_meta=ResponseMeta(finish_reason=_finish_reason(candidate)))
    content = getattr(candidate, "content", None)
    if content is None:
        return message
    message.role = RoleType.ASSISTANT if getattr(content, "role", None) == ROLE_MODEL else RoleType.USER
    texts: List[str] = []
    for part in getattr(content, "parts", None) or []:
        fc = getattr(part, "function_call", None)
        code = getattr(part, "executable_code", None)
        result = getattr(part, "code_execution_result", None)
        text = getattr(part, "text", None)
        if fc:
            message.tool_calls.append(_to_tool_call(fc))
        elif code:
            texts.append(getattr(code, "code", "") or "")
        elif result:
            texts.append(getattr(result, "output", "") or "")
        elif text:
            texts.append(text)
        elif text is None:
            raise ProtocolError(f"unsupported part type: {type(part).__name__}", provider="gemini")
    message.content = "".join(texts)
    return message


def resolve_response(resp: Any) -> Message:
    """Convert a complete ``generate_content`` response.

    Raises:
        ProtocolError: the response has no candidates, or the first one
            carries neither text nor function calls.
    """
    candidates = getattr(resp, "candidates", None) or []
    if not candidates:
        raise ProtocolError("gemini result is empty", provider="gemini")
    message = candidate_to_message(candidates[0])
    if not message.has_payload():
        raise ProtocolError("unexpected message with empty content and tool calls", provider="gemini")
    usage = to_token_usage(getattr(resp, "usage_metadata", None))
    if usage is not None:
        message.response_meta.usage = usage
    return message


def resolve_stream_chunk(chunk: Any) -> Optional[Message]:
    """Convert one streamed response chunk; usage-only chunks keep their usage."""
    candidates = getattr(chunk, "candidates", None) or []
    usage = to_token_usage(getattr(chunk, "usage_metadata", None))
    if not candidates:
        if usage is None:
            return None
        return Message(response_meta=ResponseMeta(usage=usage))
    message = candidate_to_message(candidates[0])
    message.response_meta.usage = usage
    return message


__all__ = [
    "ROLE_MODEL",
    "ROLE_USER",
    "to_gemini_role",
    "to_gemini_content",
    "split_messages",
    "to_gemini_tools",
    "to_tool_config",
    "to_generation_config",
    "to_token_usage",
    "candidate_to_message",
    "resolve_response",
    "resolve_stream_chunk",
]
