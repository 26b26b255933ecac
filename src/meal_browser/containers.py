"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from meal_browser.adapters.json_file_store import JsonFileKeyValueStore
from meal_browser.adapters.mealdb_client import HttpxMealDbClient, MealDbClient
from meal_browser.adapters.supabase_key_value_store import SupabaseKeyValueStore
from meal_browser.config import Settings, parse_category_chips
from meal_browser.services.cache import InMemoryCache
from meal_browser.services.catalog import MealCatalogService
from meal_browser.services.controller import ViewStateController
from meal_browser.services.preferences import PreferencesService
from meal_browser.services.storage import InMemoryKeyValueStore, KeyValueStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    mealdb_client: MealDbClient
    catalog_service: MealCatalogService
    preferences_service: PreferencesService
    controller: ViewStateController
    category_chips: list[str]
    close_resources: Callable[[], Awaitable[None]]


def build_store(settings: Settings) -> KeyValueStore:
    """Create the persistence backend selected in settings."""
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "supabase_url and supabase_service_key are required "
                "for the supabase storage backend"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client=client, profile=settings.storage_profile)
    return JsonFileKeyValueStore(path=Path(settings.storage_path).expanduser())


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    mealdb_client = HttpxMealDbClient.create(
        base_url=resolved_settings.mealdb_base_url,
        timeout_seconds=resolved_settings.http_timeout_seconds,
    )
    catalog_service = MealCatalogService(
        client=mealdb_client,
        cache=InMemoryCache(),
        fallback_category=resolved_settings.fallback_category,
        fallback_limit=resolved_settings.fallback_limit,
        debug=resolved_settings.debug,
    )
    preferences_service = PreferencesService(build_store(resolved_settings))
    controller = ViewStateController(
        catalog=catalog_service,
        preferences=preferences_service,
    )

    async def close_resources() -> None:
        await mealdb_client.close()

    return AppContainer(
        settings=resolved_settings,
        mealdb_client=mealdb_client,
        catalog_service=catalog_service,
        preferences_service=preferences_service,
        controller=controller,
        category_chips=parse_category_chips(resolved_settings.category_chips),
        close_resources=close_resources,
    )
