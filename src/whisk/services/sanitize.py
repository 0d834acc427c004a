"""Strip conversational wrapping and code fences from a raw completion."""

import logging

logger = logging.getLogger(__name__)


def sanitize(raw: str) -> str:
    """
    Isolate the JSON object inside a raw model completion.

    Everything before the first ``{`` is dropped, as is everything after the
    last ``}`` (typically a closing code fence). Text with no ``{`` at all is
    returned unchanged and will fail to decode downstream.

    Args:
        raw: Full text content of the completion

    Returns:
        The candidate JSON text, stripped of surrounding whitespace
    """
    json_start = raw.find("{")
    if json_start == -1:
        logger.debug("No JSON object found in completion")
        return raw

    json_text = raw[json_start:]
    json_end = json_text.rfind("}")
    if json_end != -1:
        json_text = json_text[:json_end + 1]

    return json_text.strip()
