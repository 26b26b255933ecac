"""View-state controller for the meal browser."""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from meal_browser.domain.meals import MealSummary
from meal_browser.domain.state import Page, ViewState
from meal_browser.services.catalog import CatalogUnavailableError, MealCatalogService
from meal_browser.services.preferences import PreferencesService

_logger = logging.getLogger(__name__)

StateListener = Callable[[ViewState], None]


@dataclass
class ViewStateController:
    """Owns the view state and applies every user and network event to it.

    State is never mutated in place: each event builds a new ``ViewState`` and
    hands it to the subscribed listeners. List and detail fetches each carry a
    generation token, and a response is applied only while its token is still
    the latest one issued for that fetch family.
    """

    catalog: MealCatalogService
    preferences: PreferencesService
    rng: random.Random = field(default_factory=random.Random)
    state: ViewState = field(init=False)
    _listeners: list[StateListener] = field(init=False, default_factory=list)
    _list_generation: int = field(init=False, default=0)
    _detail_generation: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        stored = self.preferences.load()
        self.state = ViewState(
            favorites=stored.favorites,
            user=stored.user,
            theme=stored.theme,
        )

    def snapshot(self) -> ViewState:
        """Return the current state."""
        return self.state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for new snapshots; returns an unsubscribe hook."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self) -> None:
        """Load the category list and the initial meal grid."""
        await self.load_categories()
        await self.refresh_meal_list()

    async def load_categories(self) -> None:
        try:
            categories = await self.catalog.list_categories()
        except CatalogUnavailableError as exc:
            _logger.warning("Category list unavailable: %s", exc)
            categories = []
        self._commit(categories=tuple(categories))

    async def set_query(self, text: str) -> None:
        """Update the free-text query and refresh the meal list."""
        self._commit(query=text, page=self._page_for(text, self.state.category))
        await self.refresh_meal_list()

    async def set_category(self, category: str) -> None:
        """Set the category filter; an empty string clears it."""
        self._commit(
            category=category, page=self._page_for(self.state.query, category)
        )
        await self.refresh_meal_list()

    async def toggle_category(self, category: str) -> None:
        """Select a category chip, or clear it when it is already active."""
        await self.set_category("" if self.state.category == category else category)

    async def refresh_meal_list(self) -> None:
        """Fetch meals for the current category or query."""
        self._list_generation += 1
        token = self._list_generation
        category = self.state.category
        query = self.state.query.strip()
        try:
            if category:
                meals = await self.catalog.meals_in_category(category)
            elif query:
                meals = await self.catalog.search(query)
            else:
                meals = await self.catalog.default_listing()
        except CatalogUnavailableError as exc:
            _logger.warning("Meal list unavailable: %s", exc)
            meals = []
        if token != self._list_generation:
            _logger.debug("Discarding stale meal list response (token=%s)", token)
            return
        self._commit(meals=tuple(meals))

    def is_favorite(self, meal_id: str) -> bool:
        return meal_id in self.state.favorites

    def toggle_favorite(self, meal_id: str) -> None:
        """Flip favorite membership and persist the new set."""
        favorites = self.state.favorites
        if meal_id in favorites:
            updated = tuple(item for item in favorites if item != meal_id)
        else:
            updated = (*favorites, meal_id)
        self.preferences.save_favorites(updated)
        self._commit(favorites=updated)

    def filter_to_favorites(self) -> None:
        """Replace the meal list with its favorite entries."""
        favorites = set(self.state.favorites)
        self._commit(
            meals=tuple(meal for meal in self.state.meals if meal.id in favorites)
        )

    def shuffle(self) -> None:
        """Randomly reorder the current meal list."""
        meals: list[MealSummary] = list(self.state.meals)
        self.rng.shuffle(meals)
        self._commit(meals=tuple(meals))

    async def view_recipe(self, meal_id: str) -> None:
        """Open a recipe and load its detail."""
        self._detail_generation += 1
        token = self._detail_generation
        self._commit(selected_id=meal_id, detail=None, loading=True)
        try:
            detail = await self.catalog.get_detail(meal_id)
        except CatalogUnavailableError as exc:
            _logger.warning("Recipe %s unavailable: %s", meal_id, exc)
            detail = None
        if token != self._detail_generation or self.state.selected_id != meal_id:
            _logger.debug("Discarding stale recipe response for %s", meal_id)
            return
        self._commit(detail=detail, loading=False)

    def close_recipe(self) -> None:
        self._detail_generation += 1
        self._commit(selected_id=None, detail=None, loading=False)

    def sign_in(self, name: str) -> bool:
        """Sign in with a display name; blank names are rejected."""
        cleaned = name.strip()
        if not cleaned:
            return False
        self.preferences.save_user(cleaned)
        self._commit(user=cleaned)
        return True

    def sign_out(self) -> None:
        self.preferences.clear_user()
        self._commit(user=None)

    def toggle_theme(self) -> None:
        theme = self.state.theme.toggled()
        self.preferences.save_theme(theme)
        self._commit(theme=theme)

    async def go_home(self) -> None:
        """Clear filters, close the recipe and return to the home page."""
        self.close_recipe()
        self._commit(category="", query="", page=Page.HOME)
        await self.refresh_meal_list()

    @staticmethod
    def _page_for(query: str, category: str) -> Page:
        return Page.SEARCH if query.strip() or category else Page.HOME

    def _commit(self, **changes: object) -> None:
        self.state = replace(self.state, **changes)
        for listener in list(self._listeners):
            listener(self.state)
