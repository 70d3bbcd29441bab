"""Gemini adapter tests against a fake ``google.generativeai`` module."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from relay_providers.base.errors import ErrorCode, ProtocolError, ProviderError
from relay_providers.base.models import (
    FunctionCall,
    Message,
    RoleType,
    ToolCall,
    ToolChoice,
    ToolInfo,
)
from relay_providers.base.options import ChatOptions
from relay_providers.gemini import GeminiChatModel
from relay_providers.gemini.conversion import (
    candidate_to_message,
    split_messages,
    to_generation_config,
    to_tool_config,
)


def _part(**kw):
    base = {"text": None, "function_call": None, "executable_code": None, "code_execution_result": None}
    base.update(kw)
    return SimpleNamespace(**base)


def _candidate(*parts, finish="STOP"):
    return SimpleNamespace(
        content=SimpleNamespace(role="model", parts=list(parts)),
        finish_reason=SimpleNamespace(name=finish),
    )


def _usage(prompt, completion, total):
    return SimpleNamespace(prompt_token_count=prompt, candidates_token_count=completion, total_token_count=total)


class _FakeGenAI:
    def __init__(self, *results):
        self.results = list(results)
        self.configured = []
        self.models = []
        self.sent = []

    def configure(self, api_key):
        self.configured.append(api_key)

    def GenerativeModel(self, **kwargs):  # noqa: N802 - SDK parity
        self.models.append(kwargs)
        fake = self

        class _Model:
            def start_chat(self, history):
                kwargs["history"] = history
                return SimpleNamespace(send_message=fake._send)

        return _Model()

    def _send(self, content, **kwargs):
        self.sent.append((content, kwargs))
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture()
def fake_genai(monkeypatch):
    def _install(*results):
        fake = _FakeGenAI(*results)
        monkeypatch.setattr("relay_providers.gemini.client.genai", fake)
        return fake

    return _install


def _conversation():
    return [
        Message(role=RoleType.SYSTEM, content="be brief"),
        Message(role=RoleType.USER, content="weather?"),
        Message(
            role=RoleType.ASSISTANT,
            tool_calls=[ToolCall(id="get_weather", function=FunctionCall(name="get_weather", arguments='{"city":"Oslo"}'))],
        ),
        Message(role=RoleType.TOOL, content='{"temp": 3}', tool_call_id="get_weather"),
    ]


def test_generate_maps_conversation_and_config(fake_genai):
    fake = fake_genai(SimpleNamespace(candidates=[_candidate(_part(text="3 degrees"))], usage_metadata=_usage(10, 2, 12)))
    model = GeminiChatModel(api_key="AIza-live", temperature=0.3, max_tokens=64, timeout=30)
    model.bind_tools([ToolInfo(name="get_weather", parameters={"type": "object", "properties": {"city": {"type": "string"}}})])
    reply = model.generate(_conversation())

    assert reply.content == "3 degrees" and reply.role is RoleType.ASSISTANT  # nosec B101
    assert reply.response_meta.finish_reason == "STOP"  # nosec B101
    assert reply.response_meta.usage.total_tokens == 12  # nosec B101
    assert fake.configured == ["AIza-live"]  # nosec B101

    built = fake.models[0]
    assert built["model_name"] == "gemini-1.5-flash"  # nosec B101
    assert built["system_instruction"] == "be brief"  # nosec B101
    assert built["generation_config"] == {"temperature": 0.3, "max_output_tokens": 64}  # nosec B101
    assert built["tool_config"] == {"function_calling_config": {"mode": "AUTO"}}  # nosec B101
    assert built["tools"][0]["function_declarations"][0]["name"] == "get_weather"  # nosec B101
    assert built["history"][1] == {  # nosec B101
        "role": "model",
        "parts": [{"function_call": {"name": "get_weather", "args": {"city": "Oslo"}}}],
    }
    content, kwargs = fake.sent[0]
    assert content == {  # nosec B101
        "role": "user",
        "parts": [{"function_response": {"name": "get_weather", "response": {"temp": 3}}}],
    }
    assert kwargs == {"request_options": {"timeout": 30.0}}  # nosec B101


def test_generate_function_call_response(fake_genai):
    call = SimpleNamespace(name="get_weather", args={"city": "Oslo", "days": 2.0})
    fake_genai(SimpleNamespace(candidates=[_candidate(_part(function_call=call))], usage_metadata=None))
    reply = GeminiChatModel(api_key="AIza-live").generate([Message(role=RoleType.USER, content="q")])
    tc = reply.tool_calls[0]
    assert tc.id == "get_weather" and tc.index is None  # nosec B101
    assert json.loads(tc.function.arguments) == {"city": "Oslo", "days": 2}  # nosec B101


def test_generate_empty_result_is_protocol_error(fake_genai):
    fake_genai(SimpleNamespace(candidates=[], usage_metadata=None))
    with pytest.raises(ProtocolError, match="gemini result is empty"):
        GeminiChatModel(api_key="AIza-live").generate([Message(role=RoleType.USER, content="q")])


def test_generate_candidate_without_text_or_calls_is_protocol_error(fake_genai):
    fake = fake_genai(SimpleNamespace(candidates=[_candidate()], usage_metadata=_usage(3, 0, 3)))
    with pytest.raises(ProtocolError, match="empty content and tool calls"):
        GeminiChatModel(api_key="AIza-live").generate([Message(role=RoleType.USER, content="q")])
    assert len(fake.sent) == 1  # nosec B101


def test_missing_key_and_missing_sdk(monkeypatch, fake_genai):
    fake_genai()
    with pytest.raises(ProviderError) as info:
        GeminiChatModel().generate([Message(role=RoleType.USER, content="q")])
    assert info.value.code is ErrorCode.AUTH  # nosec B101
    monkeypatch.setattr("relay_providers.gemini.client.genai", None)
    with pytest.raises(ProviderError) as info:
        GeminiChatModel(api_key="AIza-live").generate([Message(role=RoleType.USER, content="q")])
    assert info.value.code is ErrorCode.UNSUPPORTED  # nosec B101


def test_google_api_key_alias(monkeypatch, fake_genai):
    monkeypatch.setenv("GOOGLE_API_KEY", "AIza-from-env")
    fake = fake_genai(SimpleNamespace(candidates=[_candidate(_part(text="ok"))], usage_metadata=None))
    GeminiChatModel().generate([Message(role=RoleType.USER, content="q")])
    assert fake.configured == ["AIza-from-env"]  # nosec B101


def test_stream_chunks_and_usage(fake_genai):
    chunks = [
        SimpleNamespace(candidates=[_candidate(_part(text="Hel"), finish="FINISH_REASON_UNSPECIFIED")], usage_metadata=None),
        SimpleNamespace(candidates=[_candidate(_part(text="lo"))], usage_metadata=None),
        SimpleNamespace(candidates=[], usage_metadata=_usage(4, 2, 6)),
    ]
    fake = fake_genai(iter(chunks))
    model = GeminiChatModel(api_key="AIza-live")
    with model.stream([Message(role=RoleType.USER, content="hi")]) as reader:
        deltas = list(reader)
    assert fake.sent[0][1]["stream"] is True  # nosec B101
    assert deltas[0].response_meta.finish_reason == ""  # nosec B101
    final = model.concat(deltas)
    assert final.content == "Hello"  # nosec B101
    assert final.response_meta.finish_reason == "STOP"  # nosec B101
    assert final.response_meta.usage.total_tokens == 6  # nosec B101


def test_stream_open_retried_then_mid_stream_failure(monkeypatch, fake_genai):
    monkeypatch.setattr("relay_providers.base.resilience.retry.time.sleep", lambda _s: None)

    def _broken():
        yield SimpleNamespace(candidates=[_candidate(_part(text="a"))], usage_metadata=None)
        raise ConnectionResetError("connection reset by peer")

    fake = fake_genai(ConnectionResetError("connection reset"), _broken())
    model = GeminiChatModel(api_key="AIza-live", max_retries=1)
    with model.stream([Message(role=RoleType.USER, content="hi")]) as reader:
        assert reader.recv().content == "a"  # nosec B101
        with pytest.raises(ProviderError) as info:
            reader.recv()
    assert len(fake.sent) == 2  # nosec B101
    assert info.value.message.startswith("[gemini][Stream]")  # nosec B101


def test_split_messages_requires_non_system_input():
    with pytest.raises(ValueError, match="gemini input is empty"):
        split_messages([Message(role=RoleType.SYSTEM, content="only system")])


def test_plain_text_tool_result_is_wrapped():
    _, contents = split_messages([Message(role=RoleType.TOOL, content="sunny", name="get_weather")])
    assert contents[0]["parts"][0]["function_response"] == {"name": "get_weather", "response": {"content": "sunny"}}  # nosec B101


def test_tool_config_modes():
    tools = [{"function_declarations": []}]
    assert to_tool_config(ToolChoice.FORBIDDEN, tools)["function_calling_config"]["mode"] == "NONE"  # nosec B101
    assert to_tool_config(ToolChoice.FORCED, tools)["function_calling_config"]["mode"] == "ANY"  # nosec B101
    assert to_tool_config(None, tools) is None  # nosec B101
    with pytest.raises(ValueError):
        to_tool_config(ToolChoice.FORCED, [])


def test_generation_config_merges_request_params():
    cfg = to_generation_config(ChatOptions(model="m", stop=["END"], request_params={"top_k": 5}))
    assert cfg == {"stop_sequences": ["END"], "top_k": 5}  # nosec B101


def test_code_execution_parts_become_text():
    candidate = _candidate(
        _part(executable_code=SimpleNamespace(code="print(1)")),
        _part(code_execution_result=SimpleNamespace(output="1")),
    )
    assert candidate_to_message(candidate).content == "print(1)1"  # nosec B101


def test_unknown_part_is_protocol_error():
    with pytest.raises(ProtocolError, match="unsupported part type"):
        candidate_to_message(_candidate(_part()))
