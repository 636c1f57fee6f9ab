# src/markdown_tasks/cli/main.py

"""
CLI entrypoint.

    tasks config --global-file <PATH>
    tasks create "<text>" [--file <PATH>] [--timestamp]

Every TasksError is turned into one "Error: ..." line on stderr and exit code 1.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import NoReturn

import rich_click as click

from .. import __version__
from ..config import get_settings
from ..core.errors import ClientError, ConfigReadError, MissingApiKeyError, TasksError
from ..core.pipeline import create_task, resolve_target_path
from ..core.ports import ConfigRepo
from ..core.state import AppState
from ..llm.client import friendly_llm_error_message
from ..logging_setup import setup_logging
from .bootstrap import create_initial_state

logger = logging.getLogger(__name__)


def _fail(err: TasksError) -> NoReturn:
    """Print one plain "Error: ..." line on stderr and exit with the error's code."""
    logger.debug("Command failed: %s", err, exc_info=err)
    msg = friendly_llm_error_message(err) if isinstance(err, ClientError) else str(err)
    click.echo(f"Error: {' '.join(msg.split())}", err=True)
    click.get_current_context().exit(err.exit_code)


def _load_default_path(store: ConfigRepo) -> Path | None:
    """A corrupt config degrades to "no default" with a warning."""
    try:
        return store.get_default_path()
    except ConfigReadError as e:
        logger.warning("Ignoring unreadable config: %s", e)
        click.echo(f"Warning: {e} Continuing without a global default file.", err=True)
        return None


@click.group()
@click.version_option(version=__version__, prog_name="tasks")
@click.pass_context
def tasks(ctx: click.Context) -> None:
    """CLI to manage Markdown tasks, improved by an LLM."""
    if ctx.obj is not None:
        return

    settings = get_settings()
    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_file=settings.log_file, console_level=console_level)

    ctx.obj = create_initial_state(settings=settings)


@tasks.command("config")
@click.option(
    "--global-file",
    default=None,
    help="Set the default markdown file used when `create` gets no --file.",
)
@click.pass_obj
def config_cmd(state: AppState, global_file: str | None) -> None:
    """Manage application configuration (shows it when called without options)."""
    store = state.config_store

    if global_file is None:
        current = _load_default_path(store)
        click.echo(f"Config file: {store.path}")
        click.echo(f"Global file: {current if current is not None else 'not set'}")
        return

    try:
        stored = store.set_default_path(global_file)
    except TasksError as e:
        _fail(e)

    click.echo(f"Global file path successfully set to: {stored}")


@tasks.command("create")
@click.argument("content", nargs=-1, required=True)
@click.option(
    "--file",
    "file_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Markdown file to append to. Overrides the global config.",
)
@click.option(
    "--timestamp",
    is_flag=True,
    default=False,
    help="Append the local date and time to the task line.",
)
@click.pass_obj
def create_cmd(
    state: AppState,
    content: tuple[str, ...],
    file_path: Path | None,
    timestamp: bool,
) -> None:
    """Create a new task from CONTENT and append it as a checklist item.

    Put `--` before text that starts with a dash: tasks create -- "-5 degrees, cover the roses"
    """
    raw_text = " ".join(content)
    api_key = getattr(state.settings, "openrouter_api_key", None)

    try:
        # Checked first: no config read and no network call without a key.
        if not api_key or not str(api_key).strip():
            raise MissingApiKeyError()

        default_path = _load_default_path(state.config_store) if file_path is None else None
        target = resolve_target_path(file_path, default_path)

        click.echo("🤖 Calling LLM to improve the task... please wait.", err=True)
        created = create_task(
            raw_text,
            client=state.llm,
            api_key=api_key,
            target=target,
            stamp=datetime.now() if timestamp else None,
        )
    except TasksError as e:
        _fail(e)

    click.echo(f"✅ Successfully added improved task to {created.path}")
    click.echo(f"   > {created.line}")


def main() -> None:
    tasks(prog_name="tasks")


if __name__ == "__main__":
    main()
