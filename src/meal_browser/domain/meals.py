"""Domain models for meals and recipes."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MealSummary:
    """Lightweight meal record used for grid display."""

    id: str
    title: str
    image_url: str
    category: str


@dataclass(frozen=True)
class Ingredient:
    """A single ingredient line of a recipe."""

    ingredient: str
    measure: str


@dataclass(frozen=True)
class MealDetail:
    """Full recipe record including ingredients and instructions."""

    id: str
    title: str
    image_url: str
    category: str
    area: str
    instructions: str
    youtube_url: str
    ingredients: tuple[Ingredient, ...]
