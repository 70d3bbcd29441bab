from __future__ import annotations

import pytest

from relay_providers.base.concat import ConcatRegistry, concat_messages, last_non_empty
from relay_providers.base.errors import ConcatError
from relay_providers.base.models import ExtraKind, ExtraValue, Message


def _with_extra(**extra: ExtraValue) -> Message:
    return Message(extra=dict(extra))


def test_reasoning_extras_join_by_default():
    merged = concat_messages(
        [
            _with_extra(thought=ExtraValue.reasoning("first ")),
            _with_extra(thought=ExtraValue.reasoning("second")),
        ]
    )
    assert merged.extra["thought"] == ExtraValue.reasoning("first second")  # nosec B101


def test_request_id_default_keeps_last_non_empty():
    merged = concat_messages(
        [
            _with_extra(rid=ExtraValue.request_id("r-1")),
            _with_extra(rid=ExtraValue.request_id("r-2")),
            _with_extra(rid=ExtraValue.request_id("")),
        ]
    )
    assert merged.extra["rid"].value == "r-2"  # nosec B101


def test_single_value_is_kept_unchanged():
    merged = concat_messages([_with_extra(count=ExtraValue.integer(3)), Message(content="x")])
    assert merged.extra["count"] == ExtraValue.integer(3)  # nosec B101


def test_registered_function_overrides_default_rule():
    registry = ConcatRegistry()
    registry.register("count", lambda values: ExtraValue.integer(sum(v.value for v in values)))
    merged = concat_messages(
        [_with_extra(count=ExtraValue.integer(2)), _with_extra(count=ExtraValue.integer(5))],
        registry=registry,
    )
    assert merged.extra["count"].value == 7  # nosec B101


def test_mixed_kinds_under_one_key_fail():
    with pytest.raises(ConcatError) as info:
        concat_messages(
            [_with_extra(k=ExtraValue.text("a")), _with_extra(k=ExtraValue.request_id("b"))]
        )
    assert "mixed kinds" in str(info.value)  # nosec B101


def test_registered_function_must_return_extra_value():
    registry = ConcatRegistry()
    registry.register("k", lambda values: "oops")  # type: ignore[arg-type,return-value]
    with pytest.raises(ConcatError):
        concat_messages(
            [_with_extra(k=ExtraValue.text("a")), _with_extra(k=ExtraValue.text("b"))],
            registry=registry,
        )


def test_register_is_idempotent_for_same_function():
    registry = ConcatRegistry()
    registry.register("rid", last_non_empty)
    registry.register("rid", last_non_empty)
    assert registry.keys() == ["rid"]  # nosec B101
    assert "rid" in registry  # nosec B101


def test_register_conflicting_function_raises():
    registry = ConcatRegistry()
    registry.register("rid", last_non_empty)
    with pytest.raises(ValueError):
        registry.register("rid", lambda values: values[0])


def test_register_rejects_empty_key():
    with pytest.raises(ValueError):
        ConcatRegistry().register("", last_non_empty)


def test_extra_value_validates_payload_per_kind():
    with pytest.raises(TypeError):
        ExtraValue(ExtraKind.REASONING, 1)
    with pytest.raises(TypeError):
        ExtraValue.integer(True)  # type: ignore[arg-type]
    assert ExtraValue.json(None).is_empty()  # nosec B101
    assert ExtraValue.opaque(bytearray(b"ab")).value == b"ab"  # nosec B101
