from __future__ import annotations

from types import SimpleNamespace

import pytest

from relay_providers.ark import (
    ARK_REQUEST_ID_KEY,
    ArkChatModel,
    get_ark_request_id,
    get_reasoning_content,
)
from relay_providers.ark.extra import concat_ark_request_ids
from relay_providers.base.concat import ConcatRegistry
from relay_providers.base.errors import EmptyResponseError
from relay_providers.base.models import Message, RoleType
from relay_providers.config import DEFAULTS


def _chunk(content="", *, reasoning=None, tool_calls=None, chunk_id="ark-req-1", usage=None, choices=True):
    delta = SimpleNamespace(role=None, content=content, tool_calls=tool_calls, reasoning_content=reasoning)
    choice = SimpleNamespace(index=0, delta=delta, finish_reason=None, logprobs=None)
    return SimpleNamespace(id=chunk_id, choices=[choice] if choices else [], usage=usage)


def _fragment(arguments, name=None):
    return SimpleNamespace(index=None, id=None, type="function", function=SimpleNamespace(name=name, arguments=arguments))


def _model(monkeypatch, result, **kwargs):
    model = ArkChatModel(api_key="ark-live-key", model="ep-20240101-abc", **kwargs)
    calls = []

    def create(**params):
        calls.append(params)
        return result

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    monkeypatch.setattr(model, "_make_client", lambda: client)
    return model, calls


def test_defaults_come_from_ark_config():
    model = ArkChatModel(api_key="ark-live-key", model="ep-1")
    assert model._base_url == DEFAULTS["ark"]["base_url"]  # nosec B101
    assert model._init.timeout == 600  # nosec B101
    assert model._init.max_retries == 2  # nosec B101


def test_generate_without_model_fails():
    model = ArkChatModel(api_key="ark-live-key")
    with pytest.raises(ValueError, match="empty model"):
        model.generate([Message(role=RoleType.USER, content="x")])


def test_generate_surfaces_request_id_and_reasoning(monkeypatch):
    message = SimpleNamespace(role="assistant", content="42", tool_calls=None, reasoning_content="thinking", name=None, tool_call_id=None)
    resp = SimpleNamespace(
        id="ark-req-9",
        choices=[SimpleNamespace(index=0, message=message, finish_reason="stop", logprobs=None)],
        usage=None,
    )
    model, _ = _model(monkeypatch, resp)
    reply = model.generate([Message(role=RoleType.USER, content="q")])
    assert get_ark_request_id(reply) == "ark-req-9"  # nosec B101
    assert get_reasoning_content(reply) == ("thinking", True)  # nosec B101


def test_generate_without_choices_is_empty_response(monkeypatch):
    model, _ = _model(monkeypatch, SimpleNamespace(id="x", choices=[], usage=None))
    with pytest.raises(EmptyResponseError) as info:
        model.generate([Message(role=RoleType.USER, content="q")])
    assert str(info.value) == "[ark] empty response from model"  # nosec B101


def test_stream_reasoning_joins_and_request_id_is_kept(monkeypatch):
    chunks = [
        _chunk(reasoning="Let me "),
        _chunk(reasoning="think."),
        _chunk("Answer", tool_calls=[_fragment("{", name="f"), _fragment("{", name="g")]),
        _chunk(choices=False, chunk_id="", usage=SimpleNamespace(prompt_tokens=1, completion_tokens=2, total_tokens=3)),
    ]
    model, _ = _model(monkeypatch, iter(chunks))
    with model.stream([Message(role=RoleType.USER, content="q")]) as reader:
        deltas = list(reader)
    assert len(deltas) == 4  # nosec B101
    assert [tc.index for tc in deltas[2].tool_calls] == [0, 1]  # nosec B101
    final = model.concat(deltas)
    assert get_reasoning_content(final) == ("Let me think.", True)  # nosec B101
    assert get_ark_request_id(final) == "ark-req-1"  # nosec B101
    assert final.response_meta.usage.total_tokens == 3  # nosec B101


def test_request_id_rule_registered_once_per_shared_registry():
    registry = ConcatRegistry()
    ArkChatModel(api_key="ark-live-key", registry=registry)
    ArkChatModel(api_key="ark-live-key", registry=registry)
    assert registry.get(ARK_REQUEST_ID_KEY) is concat_ark_request_ids  # nosec B101


def test_extras_readers_on_plain_message():
    assert get_ark_request_id(Message()) == ""  # nosec B101
    assert get_reasoning_content(Message()) == ("", False)  # nosec B101
