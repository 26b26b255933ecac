"""ASGI entrypoint for the meal browser API."""

from meal_browser.api.app import create_app
from meal_browser.containers import build_container

app = create_app(build_container())
