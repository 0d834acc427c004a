"""
Recipe Payload Parser — turns sanitised completion text into RecipeDrafts.

Accepted shapes:
  - a single recipe object: {"title": ..., "description": ..., ...}
  - a batch: {"recipes": [{...}, {...}]}

Each grouped field (ingredients, instructions, tips) may be absent, a flat
list of strings, or a mapping of group name to list of strings. Flat lists
become a single "All" group. Mapping order comes from the raw text via
`extract_ordered_keys`, falling back to the decoded order when the text
cannot be read back reliably.

A grouped field with any other shape is dropped (and reported as a
FieldTypeMismatch) instead of failing the whole parse.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..constants import DEFAULT_GROUP_NAME, GROUPED_FIELDS
from ..exceptions import MalformedRecipeError, NoValidRecipesError
from ..models.recipe import FieldTypeMismatch, RecipeDraft, RecipeGroup, RecipeParseResult
from .fragment import locate_recipe_fragment
from .key_order import extract_ordered_keys
from .sanitize import sanitize

logger = logging.getLogger(__name__)

GROUP_ATTRIBUTES = dict(zip(GROUPED_FIELDS, ("ingredientGroups", "instructionGroups", "tipGroups")))


class _FieldShapeError(ValueError):
    """Internal: a grouped field has neither recognised shape."""


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _ordered_group_names(decoded: Dict[str, Any], textual: Optional[List[str]]) -> List[str]:
    """Textual key order when it matches the decoded keys, decoded order otherwise."""
    if textual is not None and len(textual) == len(decoded) and set(textual) == set(decoded):
        return textual
    if textual is not None:
        logger.debug(f"Textual key order {textual} does not match decoded keys, using decoded order")
    return list(decoded)


def normalize_groups(field: str, value: Any, source_text: str) -> Tuple[RecipeGroup, ...]:
    """
    Normalise one grouped field into ordered RecipeGroups.

    Args:
        field: Field name in the payload ("ingredients", "instructions", "tips")
        value: The decoded value of that field (None when absent)
        source_text: Raw text the recipe was decoded from, used for key order

    Raises:
        _FieldShapeError: If the value is neither a list of strings nor a
            mapping of non-empty names to lists of strings
    """
    if value is None:
        return ()

    if isinstance(value, list):
        if not _is_string_list(value):
            raise _FieldShapeError(type(value).__name__)
        return (RecipeGroup(name=DEFAULT_GROUP_NAME, items=tuple(value)),)

    if isinstance(value, dict):
        for name, items in value.items():
            if not name.strip() or not _is_string_list(items):
                raise _FieldShapeError(type(items).__name__ if name.strip() else "empty group name")

        names = _ordered_group_names(value, extract_ordered_keys(field, source_text))
        return tuple(RecipeGroup(name=name, items=tuple(value[name])) for name in names)

    raise _FieldShapeError(type(value).__name__)


def _optional_text(value: Any) -> Optional[str]:
    """Keep strings, render numbers, drop anything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


def _has_required_fields(data: Dict[str, Any]) -> bool:
    title = data.get("title")
    return (
        isinstance(title, str)
        and bool(title.strip())
        and isinstance(data.get("description"), str)
    )


def build_draft(data: Dict[str, Any], source_text: str) -> Tuple[RecipeDraft, List[FieldTypeMismatch]]:
    """
    Build one RecipeDraft from a decoded recipe object.

    The caller guarantees ``title`` and ``description`` are present.
    Returns the draft along with the grouped fields that had to be dropped.
    """
    title = data["title"].strip()
    groups: Dict[str, Tuple[RecipeGroup, ...]] = {}
    mismatches: List[FieldTypeMismatch] = []

    for field, attribute in GROUP_ATTRIBUTES.items():
        try:
            groups[attribute] = normalize_groups(field, data.get(field), source_text)
        except _FieldShapeError as e:
            logger.warning(f"Ignoring '{field}' of recipe '{title}': unexpected shape ({e})")
            mismatches.append(FieldTypeMismatch(recipeTitle=title, field=field, found=str(e)))
            groups[attribute] = ()

    draft = RecipeDraft(
        title=title,
        description=data["description"].strip(),
        totalTime=_optional_text(data.get("totalTime")),
        servings=_optional_text(data.get("servings")),
        **groups,
    )
    return draft, mismatches


def _decode(sanitized: str) -> Dict[str, Any]:
    try:
        decoded = json.loads(sanitized)
    except json.JSONDecodeError as e:
        logger.warning(f"Completion is not valid JSON: {e}")
        logger.debug(f"Problem section: {sanitized[max(0, e.pos - 50):e.pos + 50]}")
        raise MalformedRecipeError(f"Completion is not valid JSON: {e}") from e
    except (ValueError, RecursionError) as e:
        # Valid JSON the decoder still refuses: oversized integers, runaway nesting
        logger.warning(f"Completion could not be decoded: {type(e).__name__}")
        raise MalformedRecipeError(f"Completion could not be decoded: {type(e).__name__}") from e

    if not isinstance(decoded, dict):
        raise MalformedRecipeError(f"Expected a JSON object, got {type(decoded).__name__}")
    return decoded


def _parse_batch(elements: List[Any], sanitized: str) -> RecipeParseResult:
    drafts: List[RecipeDraft] = []
    mismatches: List[FieldTypeMismatch] = []

    for index, element in enumerate(elements):
        if not isinstance(element, dict) or not _has_required_fields(element):
            logger.warning(f"Skipping recipe #{index + 1}: missing title or description")
            continue

        fragment = locate_recipe_fragment(element["title"], sanitized)
        if fragment is None:
            # Re-serialised text keeps the decoded order
            fragment = json.dumps(element, ensure_ascii=False)

        try:
            draft, found = build_draft(element, fragment)
        except ValidationError as e:
            logger.warning(f"Skipping recipe #{index + 1}: {e}")
            continue
        drafts.append(draft)
        mismatches.extend(found)

    if not drafts:
        raise NoValidRecipesError(f"None of the {len(elements)} recipes had a title and description")

    logger.info(f"Parsed {len(drafts)}/{len(elements)} recipes from payload")
    return RecipeParseResult(recipes=tuple(drafts), multiple=True, mismatches=tuple(mismatches))


def parse_recipe_payload(sanitized: str) -> RecipeParseResult:
    """
    Parse sanitised completion text into one recipe or a batch of recipes.

    Args:
        sanitized: Output of `sanitize`

    Returns:
        RecipeParseResult with ``multiple`` set for batch payloads

    Raises:
        MalformedRecipeError: Not a JSON object, or a single recipe without
            title/description
        NoValidRecipesError: A batch where no element had title/description
    """
    decoded = _decode(sanitized)

    elements = decoded.get("recipes")
    if isinstance(elements, list) and elements:
        return _parse_batch(elements, sanitized)

    if not _has_required_fields(decoded):
        raise MalformedRecipeError("Recipe is missing a title or description")

    try:
        draft, mismatches = build_draft(decoded, sanitized)
    except ValidationError as e:
        raise MalformedRecipeError(str(e)) from e

    logger.info(f"Parsed recipe '{draft.title}'")
    return RecipeParseResult(recipes=(draft,), multiple=False, mismatches=tuple(mismatches))


def parse_completion(raw: str) -> RecipeParseResult:
    """Sanitise a raw completion and parse it."""
    logger.debug(f"Raw completion preview: {raw[:200]}")
    return parse_recipe_payload(sanitize(raw))
