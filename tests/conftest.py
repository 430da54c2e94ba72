"""Pytest fixtures for result conversion tests."""

from __future__ import annotations

import pytest

from chatplatform.config import DEEPSEEK_MODELS_ENV, LOG_LEVEL_ENV
from chatplatform.llm import DeepSeekResultConverter


@pytest.fixture
def converter() -> DeepSeekResultConverter:
    """Provide a fresh DeepSeek result converter."""
    return DeepSeekResultConverter()


@pytest.fixture(autouse=True)
def _clean_platform_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ambient platform settings from leaking into tests."""
    monkeypatch.delenv(DEEPSEEK_MODELS_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
