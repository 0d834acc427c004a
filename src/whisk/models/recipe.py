"""
Recipe models produced by the completion recovery pipeline.

A `RecipeDraft` is the in-memory, not-yet-persisted recipe parsed out of a
single model completion. Grouped sections (ingredients, instructions, tips)
are kept as ordered tuples of `RecipeGroup` so the order the model wrote them
in survives all the way to rendering.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RecipeGroup(BaseModel):
    """A named subsection of ingredients, instructions or tips."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Group name, e.g. 'Sauce' or 'All' for a flat list")
    items: Tuple[str, ...] = Field(default=(), description="Entries in display order")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("group name cannot be empty")
        return value

    @field_validator("items", mode="before")
    @classmethod
    def validate_items(cls, value):
        return () if value is None else value


class RecipeDraft(BaseModel):
    """Structured recipe parsed from one completion. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Recipe name, usually ending with an emoji")
    description: str = Field(description="Short description of the dish")
    totalTime: Optional[str] = Field(default=None, description="Total time as written by the model")
    servings: Optional[str] = Field(default=None, description="Number of servings as written by the model")
    ingredientGroups: Tuple[RecipeGroup, ...] = ()
    instructionGroups: Tuple[RecipeGroup, ...] = ()
    tipGroups: Tuple[RecipeGroup, ...] = ()

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("title cannot be empty")
        return value

    def all_ingredients(self) -> List[str]:
        """Every ingredient line, group by group."""
        return [item for group in self.ingredientGroups for item in group.items]

    def all_instructions(self) -> List[str]:
        """Every instruction step, group by group."""
        return [item for group in self.instructionGroups for item in group.items]

    def group_names(self, field: str) -> List[str]:
        groups = {
            "ingredients": self.ingredientGroups,
            "instructions": self.instructionGroups,
            "tips": self.tipGroups,
        }[field]
        return [group.name for group in groups]


class FieldTypeMismatch(BaseModel):
    """A grouped field that had an unrecognised shape and was dropped."""

    model_config = ConfigDict(frozen=True)

    recipeTitle: str
    field: str
    found: str = Field(description="Python type name of the offending value")


class RecipeParseResult(BaseModel):
    """Outcome of parsing one completion: one recipe or a batch of them."""

    model_config = ConfigDict(frozen=True)

    recipes: Tuple[RecipeDraft, ...]
    multiple: bool = False
    mismatches: Tuple[FieldTypeMismatch, ...] = ()

    @property
    def single(self) -> RecipeDraft:
        if self.multiple:
            raise ValueError("Payload contained a list of recipes, use .recipes")
        return self.recipes[0]

    def __len__(self) -> int:
        return len(self.recipes)
