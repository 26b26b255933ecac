"""Shared test fixtures."""

import asyncio
import random
from dataclasses import dataclass, field

import httpx
import pytest

from meal_browser.adapters.mealdb_client import MealDbClient
from meal_browser.config import Settings, parse_category_chips
from meal_browser.containers import AppContainer
from meal_browser.services.cache import InMemoryCache
from meal_browser.services.catalog import MealCatalogService
from meal_browser.services.controller import ViewStateController
from meal_browser.services.preferences import PreferencesService
from meal_browser.services.storage import InMemoryKeyValueStore

CATEGORY_NAMES = ["Beef", "Chicken", "Dessert", "Seafood", "Vegetarian"]

CATEGORY_ROWS: dict[str, list[dict[str, object]]] = {
    "Beef": [
        {
            "idMeal": "52874",
            "strMeal": "Beef and Mustard Pie",
            "strMealThumb": "https://img.test/beef-pie.jpg",
        },
        {
            "idMeal": "52878",
            "strMeal": "Beef and Oyster pie",
            "strMealThumb": "https://img.test/oyster-pie.jpg",
        },
    ],
    "Seafood": [
        {
            "idMeal": str(52900 + index),
            "strMeal": f"Seafood dish {index}",
            "strMealThumb": f"https://img.test/seafood-{index}.jpg",
        }
        for index in range(15)
    ],
    "Dessert": [
        {
            "idMeal": "52893",
            "strMeal": "Apple & Blackberry Crumble",
            "strMealThumb": "https://img.test/crumble.jpg",
        },
        {
            "idMeal": "52768",
            "strMeal": "Apple Frangipan Tart",
            "strMealThumb": "https://img.test/tart.jpg",
        },
        {
            "idMeal": "52767",
            "strMeal": "Bakewell tart",
            "strMealThumb": "https://img.test/bakewell.jpg",
        },
    ],
}

SEARCH_ROWS: dict[str, list[dict[str, object]]] = {
    "arrabiata": [
        {
            "idMeal": "52771",
            "strMeal": "Spicy Arrabiata Penne",
            "strMealThumb": "https://img.test/arrabiata.jpg",
            "strCategory": "Vegetarian",
        },
        {
            "idMeal": "53999",
            "strMeal": "Arrabiata Bake",
            "strMealThumb": "https://img.test/bake.jpg",
        },
    ],
    "teriyaki": [
        {
            "idMeal": "52772",
            "strMeal": "Teriyaki Chicken Casserole",
            "strMealThumb": "https://img.test/teriyaki.jpg",
            "strCategory": "Chicken",
        },
    ],
}


def _full_record(
    meal_id: str, title: str, category: str, ingredients: list[tuple[str, str | None]]
) -> dict[str, object]:
    record: dict[str, object] = {
        "idMeal": meal_id,
        "strMeal": title,
        "strCategory": category,
        "strArea": "Japanese" if meal_id == "52772" else "Italian",
        "strInstructions": "Preheat oven to 350 F.",
        "strMealThumb": f"https://img.test/{meal_id}.jpg",
        "strYoutube": f"https://www.youtube.com/watch?v={meal_id}",
    }
    for index in range(1, 21):
        name, measure = ("", None)
        if index <= len(ingredients):
            name, measure = ingredients[index - 1]
        record[f"strIngredient{index}"] = name
        record[f"strMeasure{index}"] = measure
    return record


LOOKUP_ROWS: dict[str, dict[str, object]] = {
    "52772": _full_record(
        "52772",
        "Teriyaki Chicken Casserole",
        "Chicken",
        [
            ("soy sauce", "3/4 cup"),
            ("water", "1/2 cup"),
            ("brown sugar", "1/4 cup"),
            ("  ", " "),
            ("ground ginger", "1/2 teaspoon"),
        ],
    ),
    "52771": _full_record(
        "52771",
        "Spicy Arrabiata Penne",
        "Vegetarian",
        [("penne rigate", "1 pound"), ("olive oil", None)],
    ),
}


@dataclass
class FakeMealDbClient(MealDbClient):
    """In-memory TheMealDB client serving canned payloads."""

    fail: bool = False
    calls: list[tuple[str, str]] = field(default_factory=list)

    async def list_categories(self) -> dict[str, object]:
        self._record("list", "list")
        return {"meals": [{"strCategory": name} for name in CATEGORY_NAMES]}

    async def filter_by_category(self, category: str) -> dict[str, object]:
        self._record("filter", category)
        return {"meals": CATEGORY_ROWS.get(category)}

    async def search_by_name(self, text: str) -> dict[str, object]:
        self._record("search", text)
        return {"meals": SEARCH_ROWS.get(text.lower())}

    async def lookup_meal(self, meal_id: str) -> dict[str, object]:
        self._record("lookup", meal_id)
        record = LOOKUP_ROWS.get(meal_id)
        return {"meals": [record] if record else None}

    def _record(self, endpoint: str, value: str) -> None:
        self.calls.append((endpoint, value))
        if self.fail:
            raise httpx.ConnectError("upstream unavailable")


@dataclass
class GatedMealDbClient(FakeMealDbClient):
    """Fake client that holds selected responses until released."""

    gates: dict[str, asyncio.Event] = field(default_factory=dict)

    async def search_by_name(self, text: str) -> dict[str, object]:
        await self._wait(text)
        return await super().search_by_name(text)

    async def lookup_meal(self, meal_id: str) -> dict[str, object]:
        await self._wait(meal_id)
        return await super().lookup_meal(meal_id)

    async def _wait(self, key: str) -> None:
        gate = self.gates.get(key)
        if gate is not None:
            await gate.wait()


def make_catalog(client: MealDbClient) -> MealCatalogService:
    return MealCatalogService(
        client=client,
        cache=InMemoryCache(),
        retry_attempts=0,
        retry_delay_seconds=0,
    )


def make_controller(
    client: MealDbClient, store: InMemoryKeyValueStore | None = None
) -> ViewStateController:
    return ViewStateController(
        catalog=make_catalog(client),
        preferences=PreferencesService(store or InMemoryKeyValueStore()),
        rng=random.Random(7),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory")


@pytest.fixture
def mealdb_client() -> FakeMealDbClient:
    return FakeMealDbClient()


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def catalog_service(mealdb_client: FakeMealDbClient) -> MealCatalogService:
    return make_catalog(mealdb_client)


@pytest.fixture
def controller(
    catalog_service: MealCatalogService, store: InMemoryKeyValueStore
) -> ViewStateController:
    return ViewStateController(
        catalog=catalog_service,
        preferences=PreferencesService(store),
        rng=random.Random(7),
    )


@pytest.fixture
def container(
    settings: Settings,
    catalog_service: MealCatalogService,
    controller: ViewStateController,
    mealdb_client: FakeMealDbClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        mealdb_client=mealdb_client,
        catalog_service=catalog_service,
        preferences_service=controller.preferences,
        controller=controller,
        category_chips=parse_category_chips(settings.category_chips),
        close_resources=close_resources,
    )
