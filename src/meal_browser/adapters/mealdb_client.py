"""TheMealDB API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class MealDbClient(Protocol):
    """Interface for TheMealDB API interactions."""

    async def list_categories(self) -> dict[str, object]:
        """Return the raw category list payload."""

    async def filter_by_category(self, category: str) -> dict[str, object]:
        """Return meals in a category as raw API data."""

    async def search_by_name(self, text: str) -> dict[str, object]:
        """Search meals by name and return raw API data."""

    async def lookup_meal(self, meal_id: str) -> dict[str, object]:
        """Fetch a full meal record by id and return raw API data."""


@dataclass
class HttpxMealDbClient(MealDbClient):
    """HTTPX-backed TheMealDB client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10.0

    @classmethod
    def create(
        cls, base_url: str, timeout_seconds: float = 10.0
    ) -> "HttpxMealDbClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def list_categories(self) -> dict[str, object]:
        """Fetch the category name list."""
        return await self._get("list.php", {"c": "list"})

    async def filter_by_category(self, category: str) -> dict[str, object]:
        """Fetch meals belonging to a category."""
        return await self._get("filter.php", {"c": category})

    async def search_by_name(self, text: str) -> dict[str, object]:
        """Search meals by name."""
        return await self._get("search.php", {"s": text})

    async def lookup_meal(self, meal_id: str) -> dict[str, object]:
        """Fetch a full meal record by id."""
        return await self._get("lookup.php", {"i": meal_id})

    async def _get(self, endpoint: str, params: dict[str, str]) -> dict[str, object]:
        response = await self.http_client.get(
            f"{self.base_url}/{endpoint}",
            params=params,
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
