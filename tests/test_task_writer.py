# tests/test_task_writer.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from markdown_tasks.core.errors import WriteError
from markdown_tasks.tasks.task_writer import append_task, format_task_line, normalize_task_text


def test_append_creates_file_and_writes_one_checklist_line(tmp_path: Path) -> None:
    target = tmp_path / "tasks.md"

    line = append_task(target, "  Buy a gallon of milk from the store.\n")

    assert line == "- [ ] Buy a gallon of milk from the store."
    assert target.read_text("utf-8") == "- [ ] Buy a gallon of milk from the store.\n"


def test_append_keeps_existing_content(tmp_path: Path) -> None:
    target = tmp_path / "tasks.md"
    target.write_text("# Todo\n- [x] Done already\n", "utf-8")

    append_task(target, "Call the plumber")
    append_task(target, "Water the plants")

    assert target.read_text("utf-8") == (
        "# Todo\n- [x] Done already\n- [ ] Call the plumber\n- [ ] Water the plants\n"
    )


def test_append_does_not_glue_onto_unterminated_last_line(tmp_path: Path) -> None:
    target = tmp_path / "tasks.md"
    target.write_text("- [ ] Hand written", "utf-8")

    append_task(target, "Second task")

    assert target.read_text("utf-8").splitlines() == ["- [ ] Hand written", "- [ ] Second task"]


def test_append_creates_missing_immediate_parent(tmp_path: Path) -> None:
    target = tmp_path / "notes" / "tasks.md"

    append_task(target, "Plan the trip")

    assert target.read_text("utf-8") == "- [ ] Plan the trip\n"


def test_append_fails_when_parent_chain_is_missing(tmp_path: Path) -> None:
    target = tmp_path / "no" / "such" / "dir" / "t.md"

    with pytest.raises(WriteError):
        append_task(target, "x")

    assert not target.exists()
    assert not (tmp_path / "no").exists()


def test_append_to_a_directory_is_a_write_error(tmp_path: Path) -> None:
    with pytest.raises(WriteError):
        append_task(tmp_path, "x")


def test_blank_text_is_rejected_before_touching_the_file(tmp_path: Path) -> None:
    target = tmp_path / "tasks.md"

    with pytest.raises(WriteError):
        append_task(target, "   \n ")

    assert not target.exists()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("- [ ] Book the dentist", "Book the dentist"),
        ("[ ] Book the dentist", "Book the dentist"),
        ("* Book the dentist", "Book the dentist"),
        ("Book the\n  dentist\n", "Book the dentist"),
        ("-5 degrees tonight: cover the roses", "-5 degrees tonight: cover the roses"),
    ],
)
def test_normalize_task_text(raw: str, expected: str) -> None:
    assert normalize_task_text(raw) == expected


def test_format_task_line_with_timestamp() -> None:
    stamp = datetime(2026, 3, 7, 9, 5)

    assert format_task_line("Ship it", stamp=stamp) == "- [ ] Ship it - 🕓07/03/2026 09:05"
