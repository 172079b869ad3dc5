"""
Persisted light/dark theme preference.

The preference reads and writes a single string through an injected
key-value store; persistence failures never interrupt the session.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)

DARK = "dark"
LIGHT = "light"
THEMES = (DARK, LIGHT)
DEFAULT_THEME = DARK
STORAGE_KEY = "calculator-theme"

# Icon shows the theme a click switches to
_ICONS = {DARK: "\u2600\ufe0f", LIGHT: "\U0001f319"}


class ThemeStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryThemeStore:
    """Dict-backed store, mostly for tests and the CLI."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileThemeStore:
    """
    Store values in a flat JSON object on disk.

    Args:
        path: JSON file location; created on first write
    """

    def __init__(self, path):
        self.path = Path(path)

    def get(self, key: str) -> Optional[str]:
        if not self.path.exists():
            return None
        data = self._read()
        value = data.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read() if self.path.exists() else {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def _read(self) -> Dict:
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Theme store {self.path} does not hold a JSON object")
        return data


class ThemePreference:
    """
    Two-valued theme setting cached over a ``ThemeStore``.

    Args:
        store: Backing key-value store
        key: Storage key for the theme string
    """

    def __init__(self, store: ThemeStore, key: str = STORAGE_KEY):
        self.store = store
        self.key = key
        self.theme = self._load()

    @property
    def icon(self) -> str:
        return _ICONS[self.theme]

    def toggle(self) -> str:
        """
        Flip between dark and light and persist the new value.

        Returns:
            The new theme name for the caller to apply
        """
        self.theme = LIGHT if self.theme == DARK else DARK
        try:
            self.store.set(self.key, self.theme)
        except (OSError, ValueError) as e:
            logger.warning("Unable to store theme preference: %s", e)
        return self.theme

    def _load(self) -> str:
        try:
            stored = self.store.get(self.key)
        except (OSError, ValueError) as e:
            logger.warning("Unable to retrieve stored theme: %s", e)
            return DEFAULT_THEME
        if stored not in THEMES:
            if stored is not None:
                logger.warning("Ignoring unknown stored theme %r", stored)
            return DEFAULT_THEME
        return stored
