# src/markdown_tasks/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import CompletionClient, ConfigRepo


@dataclass
class AppState:
    # Settings object (config.Settings, or a SimpleNamespace in tests).
    settings: object

    llm: CompletionClient
    config_store: ConfigRepo
