# src/markdown_tasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

- One Settings object for the whole app.
- No secrets required at import time; the API key is checked only by `create`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import click
from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "MDTASKS"
APP_DIR_NAME = "markdown-tasks"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- LLM / OpenRouter ----
    openrouter_api_key: Optional[str]
    openrouter_base_url: str
    llm_model: str
    llm_max_tokens: int
    connect_timeout: float
    read_timeout: float
    extra_headers: Dict[str, str]

    # ---- Per-user paths ----
    config_dir: Path

    @property
    def config_file(self) -> Path:
        return self.config_dir / "config.json"

    @property
    def log_file(self) -> Path:
        return self.config_dir / f"{APP_DIR_NAME}.log"

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasks") or "tasks"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        # The bare name is what OpenRouter's own docs use; the prefixed one wins if both are set.
        openrouter_api_key = _first_env(_k("OPENROUTER_API_KEY"), "OPENROUTER_API_KEY", default=None)
        openrouter_base_url = _env(_k("OPENROUTER_BASE_URL"), "https://openrouter.ai/api/v1")

        llm_model = _env(_k("LLM_MODEL"), "google/gemini-2.0-flash-001").strip()
        llm_max_tokens = _env_int(_k("LLM_MAX_TOKENS"), 100)

        connect_timeout = _env_float(_k("LLM_CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("LLM_READ_TIMEOUT_SECONDS"), 30.0)

        http_referer = _env(_k("HTTP_REFERER"), "https://github.com/markdown-tasks/markdown-tasks")
        title = _env(_k("APP_TITLE"), app_name)

        extra_headers = {
            "HTTP-Referer": http_referer,
            "X-Title": title,
        }

        config_dir = _env_path(_k("CONFIG_DIR"), Path(click.get_app_dir(APP_DIR_NAME)))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            openrouter_api_key=openrouter_api_key,
            openrouter_base_url=openrouter_base_url,
            llm_model=llm_model,
            llm_max_tokens=llm_max_tokens,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            extra_headers=extra_headers,
            config_dir=config_dir,
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Load .env from the working directory (real env wins) and build Settings once."""
    global _settings
    if _settings is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        _settings = Settings.from_env()
    return _settings
