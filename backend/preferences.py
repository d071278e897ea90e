"""
Key-value stores used to remember the last display value between sessions.

Both stores expose the same two calls the engine needs:
    load(key) -> Optional[str]
    save(key, value) -> None
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_STORE_NAME = "calcPrefs"


class MemoryPreferences:
    """In-process store. Nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def save(self, key: str, value: str) -> None:
        self.values[key] = value


class JSONPreferences:
    """
    File-backed store: one JSON object per named store.
    Writes are fire-and-forget; failures are logged and never raised.
    """

    def __init__(self, path):
        self.path = Path(path)

    @classmethod
    def in_directory(cls, directory, name: str = DEFAULT_STORE_NAME) -> "JSONPreferences":
        return cls(Path(directory).expanduser() / f"{name}.json")

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read preferences %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring preferences %s: expected a JSON object", self.path)
            return {}
        return data

    def load(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def save(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error("Failed to save preferences %s: %s", self.path, e)

    def clear(self) -> None:
        """Remove the backing file if present."""
        if self.path.exists():
            self.path.unlink()
