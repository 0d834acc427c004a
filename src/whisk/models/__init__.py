from .recipe import RecipeGroup, RecipeDraft, FieldTypeMismatch, RecipeParseResult
from .record import RecipeRecord

__all__ = ["RecipeGroup", "RecipeDraft", "FieldTypeMismatch", "RecipeParseResult", "RecipeRecord"]
