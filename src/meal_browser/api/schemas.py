"""Pydantic models for browser request payloads."""

from pydantic import BaseModel


class QueryUpdate(BaseModel):
    """Free-text search query."""

    text: str = ""


class CategoryUpdate(BaseModel):
    """Category filter; an empty string clears it."""

    category: str = ""


class SignInRequest(BaseModel):
    """Display name for signing in."""

    name: str
