"""Persistent key-value settings. Currently holds only the theme."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .config import SETTINGS_PATH
from .theme import Theme

log = logging.getLogger(__name__)

THEME_KEY = "theme"


class SettingsStore:
    """Load / save a flat JSON object of settings."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else SETTINGS_PATH
        self.values: dict[str, Any] = {}
        self._load()

    def _load(self):
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
            return
        if isinstance(data, dict):
            self.values = data

    def save(self):
        self._write(self.values)

    def _write(self, values: dict[str, Any]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(values, indent=2) + "\n", encoding="utf-8")

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def set(self, key: str, value: Any):
        values = {**self.values, key: value}
        self._write(values)
        self.values = values


def load_theme(store: SettingsStore) -> Theme:
    try:
        return Theme(store.get(THEME_KEY, Theme.LIGHT.value))
    except ValueError:
        return Theme.LIGHT


def save_theme(store: SettingsStore, theme: Theme):
    store.set(THEME_KEY, theme.value)
