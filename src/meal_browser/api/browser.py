"""Browser endpoints mapping onto view-state controller operations."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request

from meal_browser.api.schemas import CategoryUpdate, QueryUpdate, SignInRequest

if TYPE_CHECKING:
    from meal_browser.containers import AppContainer
    from meal_browser.domain.state import ViewState
    from meal_browser.services.controller import ViewStateController

router = APIRouter(tags=["browser"])


def _controller(request: Request) -> ViewStateController:
    container: AppContainer = request.app.state.container
    return container.controller


def serialize_state(state: ViewState) -> dict[str, object]:
    """Render a view state as a JSON-compatible dict."""
    return {
        "query": state.query,
        "category": state.category,
        "categories": list(state.categories),
        "page": state.page.value,
        "theme": state.theme.value,
        "user": state.user,
        "favorites": list(state.favorites),
        "favorite_count": state.favorite_count,
        "meals": [asdict(meal) for meal in state.meals],
        "shown_meals": [asdict(meal) for meal in state.shown_meals],
        "selected_id": state.selected_id,
        "detail": asdict(state.detail) if state.detail else None,
        "loading": state.loading,
        "recipe_not_found": state.recipe_not_found,
    }


@router.get("/state")
async def get_state(request: Request) -> dict[str, object]:
    """Return the current view state."""
    return serialize_state(_controller(request).snapshot())


@router.get("/categories")
async def get_categories(request: Request) -> dict[str, object]:
    """Return upstream categories and the category chips."""
    container: AppContainer = request.app.state.container
    return {
        "categories": list(container.controller.snapshot().categories),
        "chips": container.category_chips,
    }


@router.put("/query")
async def update_query(body: QueryUpdate, request: Request) -> dict[str, object]:
    controller = _controller(request)
    await controller.set_query(body.text)
    return serialize_state(controller.snapshot())


@router.put("/category")
async def update_category(body: CategoryUpdate, request: Request) -> dict[str, object]:
    controller = _controller(request)
    await controller.set_category(body.category)
    return serialize_state(controller.snapshot())


@router.post("/categories/{name}/toggle")
async def toggle_category(name: str, request: Request) -> dict[str, object]:
    controller = _controller(request)
    await controller.toggle_category(name)
    return serialize_state(controller.snapshot())


@router.post("/meals/shuffle")
async def shuffle_meals(request: Request) -> dict[str, object]:
    controller = _controller(request)
    controller.shuffle()
    return serialize_state(controller.snapshot())


@router.post("/meals/favorites")
async def show_favorites(request: Request) -> dict[str, object]:
    """Reduce the meal grid to favorite meals."""
    controller = _controller(request)
    controller.filter_to_favorites()
    return serialize_state(controller.snapshot())


@router.get("/favorites/{meal_id}")
async def favorite_status(meal_id: str, request: Request) -> dict[str, object]:
    return {"id": meal_id, "favorite": _controller(request).is_favorite(meal_id)}


@router.post("/favorites/{meal_id}/toggle")
async def toggle_favorite(meal_id: str, request: Request) -> dict[str, object]:
    controller = _controller(request)
    controller.toggle_favorite(meal_id)
    return serialize_state(controller.snapshot())


@router.get("/recipes/{meal_id}")
async def view_recipe(meal_id: str, request: Request) -> dict[str, object]:
    """Open a recipe and return the state once its detail has loaded."""
    controller = _controller(request)
    await controller.view_recipe(meal_id)
    return serialize_state(controller.snapshot())


@router.delete("/recipes/current")
async def close_recipe(request: Request) -> dict[str, object]:
    controller = _controller(request)
    controller.close_recipe()
    return serialize_state(controller.snapshot())


@router.post("/session")
async def sign_in(body: SignInRequest, request: Request) -> dict[str, object]:
    controller = _controller(request)
    if not controller.sign_in(body.name):
        raise HTTPException(
            status_code=422,
            detail="Name must not be empty",
        )
    return serialize_state(controller.snapshot())


@router.delete("/session")
async def sign_out(request: Request) -> dict[str, object]:
    controller = _controller(request)
    controller.sign_out()
    return serialize_state(controller.snapshot())


@router.post("/theme/toggle")
async def toggle_theme(request: Request) -> dict[str, object]:
    controller = _controller(request)
    controller.toggle_theme()
    return serialize_state(controller.snapshot())


@router.post("/home")
async def go_home(request: Request) -> dict[str, object]:
    controller = _controller(request)
    await controller.go_home()
    return serialize_state(controller.snapshot())
