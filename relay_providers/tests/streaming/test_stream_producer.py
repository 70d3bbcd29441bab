"""Tests for the background ``StreamProducer`` feeding a pipe from a native stream."""

from __future__ import annotations

import json
import time

import pytest

from relay_providers.base.errors import ErrorCode, PanicError, ProtocolError, ProviderError
from relay_providers.base.logging import get_logger
from relay_providers.base.models import Message, ResponseMeta, RoleType, TokenUsage
from relay_providers.base.streaming import EndOfStream, StreamProducer


class _FakeNativeStream:
    """Iterable standing in for an SDK stream; records ``close`` calls."""

    def __init__(self, chunks, *, fail_at: int | None = None, exc: Exception | None = None) -> None:
        self._chunks = list(chunks)
        self._fail_at = fail_at
        self._exc = exc
        self.closed = False
        self.pulled = 0

    def __iter__(self):
        for i, chunk in enumerate(self._chunks):
            if self._fail_at == i:
                raise self._exc
            self.pulled += 1
            yield chunk

    def close(self) -> None:
        self.closed = True


def _text(chunk: str) -> Message:
    return Message(role=RoleType.ASSISTANT, content=chunk)


def _wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def _producer(stream, converter=_text, logger_name: str = "relay_providers.tests.producer") -> StreamProducer:
    return StreamProducer(
        stream=stream,
        converter=converter,
        provider_name="fake",
        model="m",
        logger=get_logger(logger_name),
    )


def test_delivers_converted_chunks_and_closes_native_stream():
    native = _FakeNativeStream(["a", "b", "c"])
    reader = _producer(native).start()
    assert [m.content for m in reader] == ["a", "b", "c"]  # nosec B101
    assert _wait_for(lambda: native.closed)  # nosec B101


def test_converter_none_skips_chunk():
    native = _FakeNativeStream(["keep", "", "also"])
    reader = _producer(native, converter=lambda c: _text(c) if c else None).start()
    assert [m.content for m in reader] == ["keep", "also"]  # nosec B101


def test_transport_failure_mid_stream_is_terminal_provider_error():
    native = _FakeNativeStream(["a", "b"], fail_at=1, exc=ConnectionResetError("connection reset by peer"))
    reader = _producer(native).start()
    assert reader.recv().content == "a"  # nosec B101
    with pytest.raises(ProviderError) as ei:
        reader.recv()
    assert ei.value.code is ErrorCode.TRANSIENT  # nosec B101
    assert ei.value.message.startswith("[fake][Stream]")  # nosec B101
    with pytest.raises(EndOfStream):
        reader.recv()
    assert _wait_for(lambda: native.closed)  # nosec B101


def test_converter_protocol_error_is_delivered_unchanged():
    def _bad(chunk):
        raise ProtocolError("resp with err: code=1, msg=x, type=y", provider="fake")

    reader = _producer(_FakeNativeStream(["a"]), converter=_bad).start()
    with pytest.raises(ProtocolError) as ei:
        reader.recv()
    assert "resp with err" in str(ei.value)  # nosec B101


def test_unexpected_converter_failure_becomes_panic_error():
    def _explode(chunk):
        raise KeyError("missing")

    reader = _producer(_FakeNativeStream(["a", "b"]), converter=_explode).start()
    with pytest.raises(PanicError) as ei:
        reader.recv()
    assert str(ei.value).startswith("panic error: ")  # nosec B101
    assert "\nstack: " in str(ei.value)  # nosec B101
    assert isinstance(ei.value.info, KeyError)  # nosec B101
    with pytest.raises(EndOfStream):
        reader.recv()


def test_flush_emits_buffered_message_at_clean_end():
    class _Buffering:
        def __init__(self) -> None:
            self.held: list[str] = []

        def __call__(self, chunk):
            self.held.append(chunk)
            return None

        def flush(self):
            return _text("".join(self.held))

    reader = _producer(_FakeNativeStream(["x", "y"]), converter=_Buffering()).start()
    assert [m.content for m in reader] == ["xy"]  # nosec B101


def test_early_reader_close_stops_producer_and_closes_native_stream():
    native = _FakeNativeStream([str(i) for i in range(100)])
    reader = _producer(native).start()
    assert reader.recv().content == "0"  # nosec B101
    reader.close()
    assert _wait_for(lambda: native.closed)  # nosec B101
    assert native.pulled < 100  # nosec B101


def test_terminal_log_event_reports_emitted_count_and_tokens(capture_logger):
    handler = capture_logger("relay_providers.tests.producer.log")

    def _with_usage(chunk: str) -> Message:
        usage = TokenUsage(prompt_tokens=3, completion_tokens=2, total_tokens=5) if chunk == "b" else None
        return Message(role=RoleType.ASSISTANT, content=chunk, response_meta=ResponseMeta(usage=usage))

    reader = _producer(
        _FakeNativeStream(["a", "b"]), converter=_with_usage, logger_name="relay_providers.tests.producer.log"
    ).start()
    assert len(list(reader)) == 2  # nosec B101
    assert _wait_for(lambda: any("stream.producer.end" in m for m in handler.messages))  # nosec B101
    payload = json.loads(next(m for m in handler.messages if "stream.producer.end" in m))
    assert payload["emitted_count"] == 2  # nosec B101
    assert payload["tokens"] == {"prompt": 3, "completion": 2, "total": 5}  # nosec B101
    assert payload["provider"] == "fake"  # nosec B101
