"""JSON file backend for locally persisted state."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from meal_browser.services.storage import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Stores all keys in a single JSON object on disk."""

    path: Path

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Store a value and rewrite the file."""
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        """Delete a key and rewrite the file if it was present."""
        data = self._read()
        if key not in data:
            return
        del data[key]
        self._write(data)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            _logger.warning("Ignoring unreadable state file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, sort_keys=True), encoding="utf-8")
        tmp_path.replace(self.path)
