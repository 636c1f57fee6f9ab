# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from markdown_tasks.core.state import AppState

from .fakes import FakeCompletionClient, RecordingConfigStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the LLM client.

    We intentionally use a SimpleNamespace rather than Settings.from_env(),
    so the user's environment and config dir never leak into tests.
    """
    config_dir = tmp_path / "config"
    return SimpleNamespace(
        app_name="tasks",
        log_level="WARNING",
        openrouter_api_key="sk-test",
        openrouter_base_url="https://llm.test/api/v1",
        llm_model="test/model",
        llm_max_tokens=100,
        connect_timeout=1.0,
        read_timeout=1.0,
        extra_headers={"HTTP-Referer": "https://example.com", "X-Title": "tasks"},
        config_dir=config_dir,
        config_file=config_dir / "config.json",
        log_file=config_dir / "markdown-tasks.log",
    )


@pytest.fixture()
def llm() -> FakeCompletionClient:
    return FakeCompletionClient("Buy a gallon of milk from the store.")


@pytest.fixture()
def state(settings: SimpleNamespace, llm: FakeCompletionClient) -> AppState:
    """
    AppState wired with a fake completion client.

    The config store is the real JSON store (in tmp_path), wrapped to count reads.
    """
    return AppState(
        settings=settings,
        llm=llm,
        config_store=RecordingConfigStore(settings.config_file),
    )
