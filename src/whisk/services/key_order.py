"""
Key-order recovery for grouped recipe sections.

The model writes grouped sections as JSON objects, e.g.

    "ingredients": {"Sauce": [...], "Protein": [...]}

and the group order matters for display. The raw completion text is the
source of truth for that order, so it is read back from the text directly
instead of trusting whatever mapping a decoder hands back.

Limitation: the field's object literal must not contain nested objects.
Group values are flat lists of strings, so a nested brace means the payload
is off-schema and no order is returned.
"""

import json
import logging
import re
from typing import List, Optional

logger = logging.getLogger(__name__)

# A complete JSON string token, escapes included
STRING_TOKEN = r'"(?:[^"\\]|\\.)*"'

# Object body with no nested braces; braces inside strings are allowed
FLAT_OBJECT_BODY = rf'(?:{STRING_TOKEN}|[^{{}}"])*'

KEY_TOKEN_RE = re.compile(rf'({STRING_TOKEN})(\s*:)?', re.DOTALL)


def _field_block_re(field_name: str) -> re.Pattern:
    name = re.escape(json.dumps(field_name, ensure_ascii=False))
    return re.compile(rf'{name}\s*:\s*\{{({FLAT_OBJECT_BODY}?)\}}', re.DOTALL)


def _unescape(token: str) -> str:
    """Decode a quoted JSON string token, keeping it raw if it is not valid JSON."""
    try:
        return json.loads(token)
    except json.JSONDecodeError:
        return token[1:-1]


def extract_ordered_keys(field_name: str, json_text: str) -> Optional[List[str]]:
    """
    Recover the textual order of the keys of ``field_name``'s object literal.

    Args:
        field_name: Top-level field to look for, e.g. "ingredients"
        json_text: Raw JSON-like text (a whole payload or one recipe fragment)

    Returns:
        Key names in the order they appear, or None if the field is missing
        or is not a flat object literal (a list, a string, nested objects...).
    """
    match = _field_block_re(field_name).search(json_text)
    if not match:
        return None

    keys: List[str] = []
    seen = set()
    # Every string token is consumed whole, so a ':' inside a value is never
    # mistaken for a key separator
    for token in KEY_TOKEN_RE.finditer(match.group(1)):
        if token.group(2) is None:
            continue
        key = _unescape(token.group(1))
        if key not in seen:
            seen.add(key)
            keys.append(key)

    logger.debug(f"Recovered key order for '{field_name}': {keys}")
    return keys
