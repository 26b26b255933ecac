"""Key-value persistence for browser-local state."""

from dataclasses import dataclass, field
from typing import Protocol


class KeyValueStore(Protocol):
    """Persistence interface for string values under fixed keys."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value under a key."""

    def remove(self, key: str) -> None:
        """Delete a key; missing keys are ignored."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Key-value store that lives for the process only."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)
