# src/markdown_tasks/store/config_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.errors import ConfigReadError, ConfigWriteError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StoredConfig:
    global_file: Path | None = None

    def to_json(self) -> dict[str, Any]:
        return {"global_file": str(self.global_file) if self.global_file else None}


class ConfigStore:
    """
    Per-user JSON configuration: {"global_file": "/abs/path/tasks.md"}.

    - missing file -> empty config (not an error)
    - corrupt file -> ConfigReadError (caller decides whether to degrade)
    - writes go through a temp file + os.replace so a crash never leaves half a file
    """

    def __init__(self, config_path: str | Path) -> None:
        self._path = Path(config_path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> StoredConfig:
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except FileNotFoundError:
            return StoredConfig()
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigReadError(f"Could not read config file {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigReadError(f"Config file {self._path} is not a JSON object.")

        raw = data.get("global_file")
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return StoredConfig()
        if not isinstance(raw, str):
            raise ConfigReadError(f"Config file {self._path}: 'global_file' must be a string.")

        return StoredConfig(global_file=Path(raw))

    def save(self, config: StoredConfig) -> None:
        tmp = self._path.with_suffix(".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(config.to_json(), ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise ConfigWriteError(f"Could not write config file {self._path}: {e}") from e
        logger.info("Saved config to %s", self._path)

    def get_default_path(self) -> Path | None:
        return self.load().global_file

    def set_default_path(self, path: str | Path) -> Path:
        """Validate, normalize to an absolute path, and persist as the global default."""
        raw = str(path).strip()
        if not raw:
            raise ConfigWriteError("Global file path must not be empty.")

        target = Path(raw).expanduser().absolute()
        try:
            is_dir = target.is_dir()
        except OSError as e:
            raise ConfigWriteError(f"Cannot access global file path {target}: {e}") from e
        if is_dir:
            raise ConfigWriteError(f"Global file path is a directory: {target}")

        self.save(StoredConfig(global_file=target))
        logger.debug("Global file path set to %s", target)
        return target
