from __future__ import annotations

from types import SimpleNamespace

import pytest

from relay_providers.base.errors import ProtocolError
from relay_providers.base.models import Message, RoleType
from relay_providers.qianfan import QianfanChatModel
from relay_providers.qianfan.client import check_response_error


def _chunk(content="", *, tool_calls=None, error=None):
    delta = SimpleNamespace(role=None, content=content, tool_calls=tool_calls)
    choices = [] if error else [SimpleNamespace(index=0, delta=delta, finish_reason=None, logprobs=None)]
    return SimpleNamespace(id="qf-1", choices=choices, usage=None, error=error)


def _model(monkeypatch, result, **kwargs):
    model = QianfanChatModel(api_key="bce-v3/live", **kwargs)
    calls = []

    def create(**params):
        calls.append(params)
        return result

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    monkeypatch.setattr(model, "_make_client", lambda: client)
    return model, calls


def _response(content="hi", error=None):
    message = SimpleNamespace(role="assistant", content=content, tool_calls=None, name=None, tool_call_id=None)
    return SimpleNamespace(
        id="qf-1",
        choices=[SimpleNamespace(index=0, message=message, finish_reason="stop", logprobs=None)],
        usage=None,
        error=error,
    )


def test_default_sampling_reaches_the_request(monkeypatch):
    model, calls = _model(monkeypatch, _response())
    model.generate([Message(role=RoleType.USER, content="q")])
    params = calls[0]
    assert params["model"] == "ernie-3.5-8k"  # nosec B101
    assert params["temperature"] == 0.95 and params["top_p"] == 0.7  # nosec B101
    assert params["parallel_tool_calls"] is True  # nosec B101


def test_parallel_tool_calls_can_be_disabled(monkeypatch):
    model, calls = _model(monkeypatch, _response(), parallel_tool_calls=False)
    model.generate([Message(role=RoleType.USER, content="q")])
    assert calls[0]["parallel_tool_calls"] is False  # nosec B101


def test_generate_error_object_becomes_protocol_error(monkeypatch):
    model, _ = _model(monkeypatch, _response(error={"code": "336003", "message": "bad param", "type": "invalid_request"}))
    with pytest.raises(ProtocolError) as info:
        model.generate([Message(role=RoleType.USER, content="q")])
    assert str(info.value) == "[qianfan] resp with err: code=336003, msg=bad param, type=invalid_request"  # nosec B101


def test_stream_deltas_are_assistant_and_indexed_by_position(monkeypatch):
    fragment = SimpleNamespace(index=None, id="c1", type="function", function=SimpleNamespace(name="f", arguments="{}"))
    model, _ = _model(monkeypatch, iter([_chunk("a"), _chunk(tool_calls=[fragment])]))
    with model.stream([Message(role=RoleType.USER, content="q")]) as reader:
        deltas = list(reader)
    assert all(d.role is RoleType.ASSISTANT for d in deltas)  # nosec B101
    assert deltas[1].tool_calls[0].index == 0  # nosec B101


def test_stream_error_chunk_terminates_stream(monkeypatch):
    error = SimpleNamespace(code=18, message="qps limit", type="rate_limit")
    model, _ = _model(monkeypatch, iter([_chunk("a"), _chunk(error=error), _chunk("never")]))
    with model.stream([Message(role=RoleType.USER, content="q")]) as reader:
        assert reader.recv().content == "a"  # nosec B101
        with pytest.raises(ProtocolError, match="code=18, msg=qps limit"):
            reader.recv()


def test_check_response_error_ignores_clean_payloads():
    check_response_error(SimpleNamespace(error=None))
    check_response_error({"choices": []})
