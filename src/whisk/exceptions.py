"""Exceptions for the whisk package."""

from .constants import USER_FACING_PARSE_ERROR


class RecipeParseError(Exception):
    """Raised when a completion cannot be turned into any recipe."""

    user_message = USER_FACING_PARSE_ERROR


class MalformedRecipeError(RecipeParseError):
    """The text is not a JSON object, or a single recipe lacks title/description."""
    pass


class NoValidRecipesError(RecipeParseError):
    """A multi-recipe payload decoded but none of its elements was usable."""
    pass


class CompletionError(Exception):
    """Raised when the completion endpoint fails or returns no content."""
    pass


class RecipeNotFoundError(KeyError):
    """Raised when a stored recipe id does not exist for the user."""

    def __init__(self, recipe_id: str):
        super().__init__(recipe_id)
        self.recipe_id = recipe_id

    def __str__(self) -> str:
        return f"Recipe {self.recipe_id} not found"
