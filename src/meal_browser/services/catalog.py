"""Meal catalog service normalizing TheMealDB payloads."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from meal_browser.adapters.mealdb_client import MealDbClient
from meal_browser.domain.meals import Ingredient, MealDetail, MealSummary
from meal_browser.services.cache import Cache

MAX_INGREDIENTS = 20

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class CatalogUnavailableError(Exception):
    """Raised when the upstream catalog cannot be reached or parsed."""

    def __init__(self, action: str, cause: Exception) -> None:
        super().__init__(f"Catalog {action} failed: {cause}")
        self.action = action
        self.cause = cause


@dataclass
class MealCatalogService:
    """Service for meal lookups with caching."""

    client: MealDbClient
    cache: Cache
    fallback_category: str = "Seafood"
    fallback_limit: int = 12
    listing_ttl_seconds: float = 300
    detail_ttl_seconds: float = 3600
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def list_categories(self) -> list[str]:
        """Return the upstream category names."""
        cache_key = "mealdb:categories"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            self.client.list_categories, action="list_categories"
        )
        categories = [
            str(item["strCategory"])
            for item in _meal_rows(payload, action="list_categories")
            if item.get("strCategory")
        ]
        self.cache.set(cache_key, categories, ttl_seconds=self.detail_ttl_seconds)
        return categories

    async def meals_in_category(self, category: str) -> list[MealSummary]:
        """Return meals in a category, each stamped with that category."""
        rows = await self._filter_rows(category)
        return [_summary(row, category=category) for row in rows]

    async def search(self, text: str) -> list[MealSummary]:
        """Search meals by name, keeping each result's own category."""
        cache_key = f"mealdb:search:{text.lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.search_by_name(text), action=f"search:{text}"
        )
        meals = [
            _summary(row, category=str(row.get("strCategory") or ""))
            for row in _meal_rows(payload, action=f"search:{text}")
        ]
        self.cache.set(cache_key, meals, ttl_seconds=self.listing_ttl_seconds)
        if self.debug:
            _logger.info("Catalog search: query=%s results=%s", text, len(meals))
        return meals

    async def default_listing(self) -> list[MealSummary]:
        """Return the capped fallback category listing."""
        meals = await self.meals_in_category(self.fallback_category)
        return meals[: self.fallback_limit]

    async def get_detail(self, meal_id: str) -> MealDetail | None:
        """Return the full recipe for a meal id, or None when unknown."""
        cache_key = f"mealdb:lookup:{meal_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, MealDetail):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.lookup_meal(meal_id), action=f"lookup:{meal_id}"
        )
        rows = _meal_rows(payload, action=f"lookup:{meal_id}")
        if not rows:
            return None
        detail = _detail(rows[0], action=f"lookup:{meal_id}")
        self.cache.set(cache_key, detail, ttl_seconds=self.detail_ttl_seconds)
        return detail

    async def _filter_rows(self, category: str) -> list[dict[str, object]]:
        cache_key = f"mealdb:filter:{category}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.filter_by_category(category),
            action=f"filter:{category}",
        )
        rows = _meal_rows(payload, action=f"filter:{category}")
        self.cache.set(cache_key, rows, ttl_seconds=self.listing_ttl_seconds)
        return rows

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call the client with a short retry, translating failures."""
        attempt = 0
        while True:
            try:
                return await func()
            except (httpx.HTTPError, ValueError) as exc:
                attempt += 1
                if self.debug:
                    _logger.warning(
                        "Catalog %s failed (attempt %s/%s, status=%s): %s",
                        action,
                        attempt,
                        self.retry_attempts + 1,
                        _status_code_from_exception(exc),
                        exc,
                    )
                if attempt > self.retry_attempts:
                    raise CatalogUnavailableError(action, exc) from exc
                await asyncio.sleep(self.retry_delay_seconds)


def extract_ingredients(raw: dict[str, object]) -> tuple[Ingredient, ...]:
    """Collect non-blank ingredient/measure pairs in index order."""
    ingredients: list[Ingredient] = []
    for index in range(1, MAX_INGREDIENTS + 1):
        name = _text(raw.get(f"strIngredient{index}"))
        if not name:
            continue
        ingredients.append(
            Ingredient(ingredient=name, measure=_text(raw.get(f"strMeasure{index}")))
        )
    return tuple(ingredients)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _meal_rows(payload: object, *, action: str) -> list[dict[str, object]]:
    """Return the `meals` rows of a payload; a null list means no results."""
    if not isinstance(payload, dict):
        raise CatalogUnavailableError(action, TypeError("payload is not an object"))
    rows = payload.get("meals") or []
    if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        raise CatalogUnavailableError(action, TypeError("malformed meals list"))
    return rows


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _summary(row: dict[str, object], *, category: str) -> MealSummary:
    return MealSummary(
        id=_text(row.get("idMeal")),
        title=_text(row.get("strMeal")),
        image_url=_text(row.get("strMealThumb")),
        category=category,
    )


def _detail(row: dict[str, object], *, action: str) -> MealDetail:
    meal_id = _text(row.get("idMeal"))
    if not meal_id:
        raise CatalogUnavailableError(action, KeyError("idMeal"))
    return MealDetail(
        id=meal_id,
        title=_text(row.get("strMeal")),
        image_url=_text(row.get("strMealThumb")),
        category=_text(row.get("strCategory")),
        area=_text(row.get("strArea")),
        instructions=_text(row.get("strInstructions")),
        youtube_url=_text(row.get("strYoutube")),
        ingredients=extract_ingredients(row),
    )
