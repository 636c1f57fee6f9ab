# src/markdown_tasks/tasks/task_writer.py

from __future__ import annotations

import logging
import os
import re
from datetime import datetime
from pathlib import Path

from ..core.errors import WriteError

logger = logging.getLogger(__name__)

CHECKBOX = "- [ ] "
STAMP_FORMAT = "%d/%m/%Y %H:%M"

# Models sometimes add the checklist marker (or a bullet) despite the prompt.
_LEADING_MARKER_RE = re.compile(r"^(?:[-*+]\s+)?(?:\[[ xX]?\]\s*)?")


def normalize_task_text(text: str) -> str:
    """Single line, trimmed, without a leading bullet/checkbox."""
    one_line = " ".join(line.strip() for line in text.splitlines() if line.strip())
    return _LEADING_MARKER_RE.sub("", one_line, count=1).strip()


def _ends_without_newline(path: Path) -> bool:
    """True when the file exists, is non-empty and its last byte is not a newline."""
    try:
        with path.open("rb") as f:
            f.seek(0, os.SEEK_END)
            if f.tell() == 0:
                return False
            f.seek(-1, os.SEEK_END)
            return f.read(1) != b"\n"
    except FileNotFoundError:
        return False


def format_task_line(improved_text: str, *, stamp: datetime | None = None) -> str:
    body = normalize_task_text(improved_text)
    if not body:
        raise WriteError("Refusing to write an empty task.")
    line = f"{CHECKBOX}{body}"
    if stamp is not None:
        line = f"{line} - 🕓{stamp.strftime(STAMP_FORMAT)}"
    return line


def append_task(
    file_path: str | Path,
    improved_text: str,
    *,
    stamp: datetime | None = None,
) -> str:
    """
    Append one checklist line to file_path and return it (without the newline).

    The file is only ever opened in append mode. A missing immediate parent
    directory is created; deeper missing ancestors are an error.
    """
    path = Path(file_path).expanduser()
    line = format_task_line(improved_text, stamp=stamp)

    try:
        path.parent.mkdir(exist_ok=True)
        # Hand-edited files often lack a final newline; never glue onto the last line.
        prefix = "\n" if _ends_without_newline(path) else ""
        with path.open("a", encoding="utf-8") as f:
            f.write(prefix + line + "\n")
            f.flush()
    except OSError as e:
        raise WriteError(f"Could not write task to {path}: {e}") from e

    logger.info("Appended task to %s", path)
    return line
