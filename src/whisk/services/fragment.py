"""Locate the original text of one recipe inside a multi-recipe payload."""

import json
import logging
import re
from typing import List, Optional

logger = logging.getLogger(__name__)


def _title_variants(title: str) -> List[str]:
    """Ways the model may have serialised the title (raw unicode or \\u escapes)."""
    variants = []
    for ensure_ascii in (False, True):
        encoded = json.dumps(title, ensure_ascii=ensure_ascii)[1:-1]
        if encoded not in variants:
            variants.append(encoded)
    return variants


def _object_end(text: str, start: int) -> Optional[int]:
    """Index just past the brace closing the object opened at ``start``."""
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
    return None


def locate_recipe_fragment(title: str, full_json: str) -> Optional[str]:
    """
    Find the object literal of the recipe titled ``title`` in ``full_json``.

    The object must open with its title, i.e. ``{ "title": "<title>" ...``.
    The fragment runs from that brace to the brace closing the same object,
    so the separator and the next sibling (or the closing ``]``) are left out.

    Returns:
        The recipe's source text, or None when no object, or more than one
        object, carries exactly that title.
    """
    starts = set()
    for encoded in _title_variants(title):
        pattern = re.compile(r'\{\s*"title"\s*:\s*"' + re.escape(encoded) + '"')
        starts.update(match.start() for match in pattern.finditer(full_json))

    if not starts:
        logger.debug(f"No fragment found for recipe '{title}'")
        return None
    if len(starts) > 1:
        logger.warning(f"Recipe title '{title}' appears {len(starts)} times, ordering falls back to decoded order")
        return None

    start = starts.pop()
    end = _object_end(full_json, start)
    if end is None:
        logger.debug(f"Fragment for recipe '{title}' is not closed")
        return None
    return full_json[start:end]
