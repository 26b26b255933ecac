"""Persisted favorites, user name and theme."""

import json
import logging
from dataclasses import dataclass

from meal_browser.domain.state import Theme
from meal_browser.services.storage import KeyValueStore

FAVORITES_KEY = "favorites"
USER_KEY = "user"
THEME_KEY = "theme"

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredPreferences:
    """Values restored from storage at startup."""

    favorites: tuple[str, ...]
    user: str | None
    theme: Theme


@dataclass
class PreferencesService:
    """Reads and writes browser-local preferences."""

    store: KeyValueStore

    def load(self) -> StoredPreferences:
        """Read every persisted preference."""
        return StoredPreferences(
            favorites=self.load_favorites(),
            user=self.store.get(USER_KEY) or None,
            theme=self.load_theme(),
        )

    def load_favorites(self) -> tuple[str, ...]:
        """Return stored favorite ids, ignoring corrupt data."""
        raw = self.store.get(FAVORITES_KEY)
        if not raw:
            return ()
        try:
            values = json.loads(raw)
        except ValueError:
            _logger.warning("Discarding unparseable favorites value")
            return ()
        if not isinstance(values, list):
            return ()
        ids: list[str] = []
        for value in values:
            if isinstance(value, str) and value not in ids:
                ids.append(value)
        return tuple(ids)

    def load_theme(self) -> Theme:
        raw = self.store.get(THEME_KEY)
        try:
            return Theme(raw)
        except ValueError:
            return Theme.DARK

    def save_favorites(self, favorites: tuple[str, ...]) -> None:
        self.store.set(FAVORITES_KEY, json.dumps(list(favorites)))

    def save_user(self, name: str) -> None:
        self.store.set(USER_KEY, name)

    def clear_user(self) -> None:
        self.store.remove(USER_KEY)

    def save_theme(self, theme: Theme) -> None:
        self.store.set(THEME_KEY, theme.value)
