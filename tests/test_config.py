"""Tests for configuration helpers."""

from meal_browser.config import Settings, parse_category_chips


def test_parse_category_chips_trims_and_dedupes() -> None:
    chips = parse_category_chips(" Beef, ,Dessert,Beef ,Seafood")

    assert chips == ["Beef", "Dessert", "Seafood"]


def test_parse_category_chips_handles_missing_value() -> None:
    assert parse_category_chips(None) == []
    assert parse_category_chips("") == []


def test_settings_defaults() -> None:
    settings = Settings(storage_backend="memory")

    assert settings.mealdb_base_url == "https://www.themealdb.com/api/json/v1/1"
    assert settings.fallback_category == "Seafood"
    assert settings.fallback_limit == 12
    assert parse_category_chips(settings.category_chips)[0] == "Breakfast"
    assert len(parse_category_chips(settings.category_chips)) == 9
