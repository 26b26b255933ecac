"""Tests for container wiring."""

import asyncio

import pytest

from meal_browser.adapters.json_file_store import JsonFileKeyValueStore
from meal_browser.config import Settings
from meal_browser.containers import build_container, build_store
from meal_browser.services.storage import InMemoryKeyValueStore


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.controller.catalog is container.catalog_service
    assert isinstance(container.preferences_service.store, InMemoryKeyValueStore)
    assert container.category_chips[-1] == "Vegetarian"
    asyncio.run(container.close_resources())


def test_build_store_uses_json_file(tmp_path) -> None:
    settings = Settings(storage_backend="file", storage_path=str(tmp_path / "s.json"))

    store = build_store(settings)

    assert isinstance(store, JsonFileKeyValueStore)
    assert store.path == tmp_path / "s.json"


def test_build_store_requires_supabase_credentials() -> None:
    settings = Settings(storage_backend="supabase")

    with pytest.raises(ValueError):
        build_store(settings)
