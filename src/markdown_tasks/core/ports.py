# src/markdown_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The pipeline depends on Protocols instead of concrete implementations,
so tests can swap in fakes without touching the network or the user's config dir.
"""

from pathlib import Path
from typing import Protocol

ChatMessage = dict[str, str]
# OpenAI-style chat messages: {"role": "...", "content": "..."}.


class CompletionClient(Protocol):
    """Rewrites a raw task note into a single actionable task description."""

    def improve_task(self, raw_text: str, api_key: str | None) -> str: ...


class ConfigRepo(Protocol):
    @property
    def path(self) -> Path: ...

    def get_default_path(self) -> Path | None: ...
    def set_default_path(self, path: str | Path) -> Path: ...
