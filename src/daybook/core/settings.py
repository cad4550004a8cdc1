"""
Key/value settings persisted to a small YAML file.

Only a handful of user preferences survive a relaunch (the reminder time,
for instance). The whole file is rewritten on every change.

Expected format:
    reminderTime: "20:00"
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from .exceptions import FileIOError


class SettingsStore:
    """Simple persisted key/value store backed by a YAML mapping."""

    def __init__(self, path: str | Path):
        self._path = Path(path).expanduser()
        self._data: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if self._data is None:
            self._data = {}
            if self._path.exists():
                try:
                    with open(self._path, encoding="utf-8") as f:
                        loaded = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.warning(f"Could not load settings from {self._path}: {e}")
                    loaded = {}
                if isinstance(loaded, dict):
                    self._data = loaded
                else:
                    logger.warning(f"Ignoring settings file {self._path}: expected a mapping")
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* and write the file immediately."""
        data = self._load()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._write(data)

    def reload(self) -> None:
        """Force reload from disk on next access."""
        self._data = None

    def _write(self, data: dict[str, Any]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            os.makedirs(self._path.parent, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise FileIOError(f"Cannot write settings to {self._path}: {e}") from e
