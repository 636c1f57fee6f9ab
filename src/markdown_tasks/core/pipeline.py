# src/markdown_tasks/core/pipeline.py

"""
Task submission pipeline: resolve target -> one completion -> one append.

Nothing here reads the environment or the user's config dir; every
collaborator and value is passed in, so tests can drive it with fakes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ..tasks.task_writer import append_task
from .errors import NoTargetFileError, TasksError
from .ports import CompletionClient

logger = logging.getLogger(__name__)

TaskWriterFn = Callable[..., str]


@dataclass(frozen=True, slots=True)
class CreatedTask:
    path: Path
    line: str
    improved_text: str


def resolve_target_path(explicit: str | Path | None, default: str | Path | None) -> Path:
    """Explicit --file wins over the stored default; neither is an error."""
    if explicit is not None and str(explicit).strip():
        return Path(explicit).expanduser()
    if default is not None and str(default).strip():
        return Path(default).expanduser()
    raise NoTargetFileError()


def create_task(
    raw_text: str,
    *,
    client: CompletionClient,
    api_key: str | None,
    target: Path,
    stamp: datetime | None = None,
    writer: TaskWriterFn = append_task,
) -> CreatedTask:
    if not raw_text or not raw_text.strip():
        raise TasksError("Task text must not be empty.")

    improved = client.improve_task(raw_text, api_key)
    logger.debug("Improved task: %r -> %r", raw_text, improved)

    line = writer(target, improved, stamp=stamp)
    return CreatedTask(path=target, line=line, improved_text=improved)
