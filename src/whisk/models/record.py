"""Persisted form of a recipe, as handed to the document store."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .recipe import RecipeDraft
from ..services.recipe_text import format_recipe_text


class RecipeRecord(BaseModel):
    """A saved recipe in a user's collection."""

    id: Optional[str] = Field(default=None, description="Document id, assigned by the store")
    title: str
    text: str = Field(description="Rendered description, ingredients and instructions")
    prompt: str = Field(default="", description="The meal description the user typed")
    totalTime: Optional[str] = None
    servings: Optional[str] = None
    mealType: str = ""
    timestamp: Optional[datetime] = Field(default=None, description="Server timestamp, assigned by the store")
    isFavorite: bool = False

    @classmethod
    def from_draft(cls, draft: RecipeDraft, prompt: str = "", meal_type: str = "") -> "RecipeRecord":
        return cls(
            title=draft.title,
            text=format_recipe_text(draft),
            prompt=prompt,
            totalTime=draft.totalTime,
            servings=draft.servings,
            mealType=meal_type,
        )
