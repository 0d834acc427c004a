"""
Plain-text rendering of a recipe, as stored alongside each saved record.

Layout:

    Description:
    <description>

    Ingredients:
    Sauce:
    1 cup tomato sauce
    ...

    Cooking Instructions:
    ...

    Tips:
    ...

Group headers are only written for named groups; a lone "All" group is
rendered as bare lines. A section holding a single empty "All" group is
written as an empty section and reads back as no groups at all.
"""

import re
from typing import List, NamedTuple, Tuple

from ..constants import DEFAULT_GROUP_NAME
from ..models.recipe import RecipeDraft, RecipeGroup

DESCRIPTION_MARKER = "Description:"
INGREDIENTS_MARKER = "Ingredients:"
INSTRUCTIONS_MARKER = "Cooking Instructions:"
TIPS_MARKER = "Tips:"

# A header line names a group: short, ends with a colon, no sentence punctuation
GROUP_HEADER_RE = re.compile(r"^([^.!?:]{1,60}):$")


class StoredRecipeText(NamedTuple):
    description: str
    ingredientGroups: Tuple[RecipeGroup, ...]
    instructionGroups: Tuple[RecipeGroup, ...]
    tipGroups: Tuple[RecipeGroup, ...]


def _render_groups(groups: Tuple[RecipeGroup, ...]) -> str:
    if len(groups) == 1 and groups[0].name == DEFAULT_GROUP_NAME:
        return "\n".join(groups[0].items)

    lines: List[str] = []
    for group in groups:
        lines.append(f"{group.name}:")
        lines.extend(group.items)
    return "\n".join(lines)


def format_recipe_text(draft: RecipeDraft) -> str:
    """Render a draft into the stored text layout."""
    sections = [
        f"{DESCRIPTION_MARKER}\n{draft.description}",
        f"{INGREDIENTS_MARKER}\n{_render_groups(draft.ingredientGroups)}",
        f"{INSTRUCTIONS_MARKER}\n{_render_groups(draft.instructionGroups)}",
    ]
    if draft.tipGroups:
        sections.append(f"{TIPS_MARKER}\n{_render_groups(draft.tipGroups)}")
    return "\n\n".join(sections)


def _read_groups(block: str) -> Tuple[RecipeGroup, ...]:
    lines = [line.strip() for line in block.splitlines() if line.strip()]

    groups: List[RecipeGroup] = []
    name = DEFAULT_GROUP_NAME
    items: List[str] = []
    for line in lines:
        header = GROUP_HEADER_RE.match(line)
        if header:
            if items or name != DEFAULT_GROUP_NAME:
                groups.append(RecipeGroup(name=name, items=tuple(items)))
            name, items = header.group(1).strip(), []
        else:
            items.append(line)

    if items or name != DEFAULT_GROUP_NAME:
        groups.append(RecipeGroup(name=name, items=tuple(items)))
    return tuple(groups)


def parse_recipe_text(text: str) -> StoredRecipeText:
    """
    Split stored recipe text back into description and grouped sections.

    Text without an ingredients marker is treated as a bare description.
    """
    ingredients_at = text.find(INGREDIENTS_MARKER)
    if ingredients_at == -1:
        return StoredRecipeText(text.strip(), (), (), ())

    description = text[:ingredients_at].replace(DESCRIPTION_MARKER, "", 1).strip()
    rest = text[ingredients_at + len(INGREDIENTS_MARKER):]

    instructions_at = rest.find(INSTRUCTIONS_MARKER)
    if instructions_at == -1:
        return StoredRecipeText(description, _read_groups(rest), (), ())

    ingredients_block = rest[:instructions_at]
    rest = rest[instructions_at + len(INSTRUCTIONS_MARKER):]

    tips_block = ""
    # The section marker follows a blank line; a group header named "Tips" does not
    tips_at = rest.rfind(f"\n\n{TIPS_MARKER}")
    if tips_at != -1:
        tips_block = rest[tips_at + len(TIPS_MARKER) + 2:]
        rest = rest[:tips_at]

    return StoredRecipeText(
        description,
        _read_groups(ingredients_block),
        _read_groups(rest),
        _read_groups(tips_block),
    )
