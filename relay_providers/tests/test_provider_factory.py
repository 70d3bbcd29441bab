from __future__ import annotations

import pytest
from pydantic import ValidationError

import relay_providers
from relay_providers.ark import ARK_REQUEST_ID_KEY, ArkChatModel
from relay_providers.base.callbacks import CallbackManager
from relay_providers.base.concat import ConcatRegistry
from relay_providers.base.dto import AdapterParams
from relay_providers.base.factory import ProviderFactory, UnknownProviderError
from relay_providers.base.models import ExtraValue, Message
from relay_providers.gemini import GeminiChatModel
from relay_providers.openai import OpenAIChatModel
from relay_providers.qianfan import QianfanChatModel


def test_supported_providers():
    assert ProviderFactory.supported() == ("openai", "ark", "qianfan", "gemini")  # nosec B101


@pytest.mark.parametrize(
    "name, cls",
    [("openai", OpenAIChatModel), ("ARK", ArkChatModel), ("qianfan", QianfanChatModel), ("gemini", GeminiChatModel)],
)
def test_create_each_provider(name, cls):
    assert isinstance(ProviderFactory().create(name, api_key="live-key"), cls)  # nosec B101


def test_unknown_provider_and_bad_kwargs():
    factory = ProviderFactory()
    with pytest.raises(UnknownProviderError):
        factory.create("bard")
    with pytest.raises(UnknownProviderError, match="Invalid arguments"):
        factory.create("gemini", base_url="http://nope")


def test_factory_shares_registry_and_callbacks():
    registry = ConcatRegistry()
    callbacks = CallbackManager()
    factory = ProviderFactory(registry=registry, callbacks=callbacks)
    ark = factory.create("ark", api_key="live-key", model="ep-1")
    openai = factory.create("openai", api_key="live-key")
    assert ark.concat_registry is registry and openai.concat_registry is registry  # nosec B101
    assert ark.callbacks is callbacks  # nosec B101
    assert ARK_REQUEST_ID_KEY in factory.registry  # nosec B101
    merged = factory.concat(
        [
            Message(content="a", extra={ARK_REQUEST_ID_KEY: ExtraValue.request_id("r1")}),
            Message(content="b", extra={ARK_REQUEST_ID_KEY: ExtraValue.request_id("")}),
        ]
    )
    assert merged.extra[ARK_REQUEST_ID_KEY].value == "r1"  # nosec B101


def test_adapter_params_merge_with_kwargs():
    params = AdapterParams(
        provider="qianfan",
        model="ernie-4.0-8k",
        api_key="live-key",
        request_params={"seed": 1, "user": "a"},
        extra={"parallel_tool_calls": False},
    )
    model = ProviderFactory().create("qianfan", params=params, request_params={"seed": 2})
    defaults = model.resolve()
    assert defaults.model == "ernie-4.0-8k"  # nosec B101
    assert defaults.request_params == {"seed": 2, "user": "a", "parallel_tool_calls": False}  # nosec B101


def test_shared_adapter_params_base_url_dropped_for_gemini():
    params = AdapterParams(api_key="live-key", model="gemini-1.5-pro", base_url="https://proxy.internal/v1")
    factory = ProviderFactory()
    gemini = factory.create("gemini", params=params)
    assert isinstance(gemini, GeminiChatModel) and gemini.default_model == "gemini-1.5-pro"  # nosec B101
    assert params.base_url == "https://proxy.internal/v1"  # nosec B101
    assert isinstance(factory.create("openai", params=params), OpenAIChatModel)  # nosec B101


def test_adapter_params_validation():
    with pytest.raises(ValidationError):
        AdapterParams(timeout=0)
    with pytest.raises(ValidationError):
        AdapterParams(max_retries=-1)
    assert AdapterParams(provider="ark", model="ep").to_kwargs() == {"model": "ep"}  # nosec B101


def test_top_level_create_uses_default_factory():
    model = relay_providers.create("openai", api_key="live-key", model="gpt-4o")
    assert model.default_model == "gpt-4o"  # nosec B101
    assert model.concat_registry is relay_providers.default_factory().registry  # nosec B101
