"""Tests for model descriptors and the DeepSeek model catalog."""

from __future__ import annotations

import pytest

from chatplatform.config import DEEPSEEK_MODELS_ENV, deepseek_model_names_from_environment
from chatplatform.llm import Capability, DeepSeek, Model
from chatplatform.llm.models import deepseek_catalog


def test_generic_model_has_no_capabilities_by_default() -> None:
    """Plain models only declare what they are given."""
    model = Model("gpt-4")

    assert model.capabilities == frozenset()
    assert not model.supports(Capability.TOOL_CALLING)


def test_deepseek_reasoner_supports_thinking() -> None:
    """The reasoner model declares thinking support from the catalog."""
    model = DeepSeek("deepseek-reasoner")

    assert model.supports(Capability.THINKING)
    assert model.supports(Capability.OUTPUT_STREAMING)


def test_deepseek_chat_does_not_support_thinking() -> None:
    """The chat model has tool calling but no thinking."""
    model = DeepSeek("deepseek-chat")

    assert model.supports(Capability.TOOL_CALLING)
    assert not model.supports(Capability.THINKING)


def test_explicit_capabilities_override_catalog() -> None:
    """Capabilities passed by the caller are kept as given."""
    model = DeepSeek("deepseek-chat", capabilities=frozenset({Capability.OUTPUT_TEXT}))

    assert model.capabilities == frozenset({Capability.OUTPUT_TEXT})


def test_environment_registers_extra_deepseek_models(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Extra names from the environment join the catalog."""
    monkeypatch.setenv(DEEPSEEK_MODELS_ENV, " deepseek-coder, ,deepseek-chat,deepseek-coder")

    assert deepseek_model_names_from_environment() == ("deepseek-coder", "deepseek-chat")
    catalog = deepseek_catalog()
    assert Capability.TOOL_CALLING in catalog["deepseek-coder"]
    assert Capability.THINKING in catalog["deepseek-reasoner"], (
        "Expected environment entries not to replace known models."
    )


def test_environment_without_extra_models() -> None:
    """An unset variable yields no extra names."""
    assert deepseek_model_names_from_environment() == ()
    assert set(deepseek_catalog()) == {"deepseek-chat", "deepseek-reasoner"}


def test_models_are_hashable_value_objects() -> None:
    """Equal model descriptors collapse in sets."""
    models = {DeepSeek("deepseek-chat"), DeepSeek("deepseek-chat"), Model("gpt-4")}

    assert len(models) == 2
