"""View state for the meal browser."""

from dataclasses import dataclass
from enum import Enum

from meal_browser.domain.meals import MealDetail, MealSummary


class Theme(str, Enum):
    """Colour theme preference."""

    DARK = "dark"
    LIGHT = "light"

    def toggled(self) -> "Theme":
        """Return the opposite theme."""
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


class Page(str, Enum):
    """Navigation flag for the current page."""

    HOME = "home"
    SEARCH = "search"


@dataclass(frozen=True)
class ViewState:
    """Immutable snapshot of everything the controller owns."""

    query: str = ""
    category: str = ""
    categories: tuple[str, ...] = ()
    meals: tuple[MealSummary, ...] = ()
    favorites: tuple[str, ...] = ()
    user: str | None = None
    theme: Theme = Theme.DARK
    page: Page = Page.HOME
    selected_id: str | None = None
    detail: MealDetail | None = None
    loading: bool = False

    @property
    def shown_meals(self) -> tuple[MealSummary, ...]:
        """Meals visible in the grid for the active category."""
        if not self.category:
            return self.meals
        return tuple(meal for meal in self.meals if meal.category == self.category)

    @property
    def favorite_count(self) -> int:
        return len(self.favorites)

    @property
    def recipe_not_found(self) -> bool:
        """True when an opened recipe finished loading without a record."""
        return self.selected_id is not None and not self.loading and self.detail is None
