"""Whisk: turn a meal description into structured recipes from LLM completions."""

from .exceptions import (
    CompletionError,
    MalformedRecipeError,
    NoValidRecipesError,
    RecipeNotFoundError,
    RecipeParseError,
)
from .models.recipe import FieldTypeMismatch, RecipeDraft, RecipeGroup, RecipeParseResult
from .models.record import RecipeRecord
from .services.fragment import locate_recipe_fragment
from .services.history import group_by_time, time_group
from .services.key_order import extract_ordered_keys
from .services.payload import parse_completion, parse_recipe_payload
from .services.sanitize import sanitize
from .generator import RecipeGenerator
from .store import InMemoryRecipeStore, RecipeStore, toggle_favorite

__all__ = [
    "sanitize",
    "extract_ordered_keys",
    "locate_recipe_fragment",
    "parse_recipe_payload",
    "parse_completion",
    "time_group",
    "group_by_time",
    "RecipeGenerator",
    "RecipeGroup",
    "RecipeDraft",
    "RecipeParseResult",
    "FieldTypeMismatch",
    "RecipeRecord",
    "RecipeStore",
    "InMemoryRecipeStore",
    "toggle_favorite",
    "RecipeParseError",
    "MalformedRecipeError",
    "NoValidRecipesError",
    "CompletionError",
    "RecipeNotFoundError",
]
