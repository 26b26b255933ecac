"""Supabase backend for persisted browser state."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from meal_browser.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase implementation storing one row per profile and key."""

    client: Client
    profile: str = "default"
    table_name: str = "preferences"

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        response = (
            self.client.table(self.table_name)
            .select("value")
            .eq("profile", self.profile)
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: str) -> None:
        """Insert or update the value for a key."""
        self.client.table(self.table_name).upsert(
            {
                "profile": self.profile,
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="profile,key",
        ).execute()

    def remove(self, key: str) -> None:
        """Delete the row for a key."""
        self.client.table(self.table_name).delete().eq("profile", self.profile).eq(
            "key", key
        ).execute()
