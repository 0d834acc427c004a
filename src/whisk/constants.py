"""Constants for the whisk package."""

import os
from typing import Literal

# Get provider from environment variable, fallback to openai if not set
DEFAULT_PROVIDER: Literal["openai", "openrouter"] = os.getenv("WHISK_LLM_PROVIDER", "openai")

# Validate that the provider is supported
if DEFAULT_PROVIDER not in ["openai", "openrouter"]:
    raise ValueError(f"Unsupported LLM provider: {DEFAULT_PROVIDER}. Must be one of: openai, openrouter")

# Optional model override for whichever provider is active
MODEL_OVERRIDE = os.getenv("WHISK_MODEL")

MAX_TOKENS = int(os.getenv("WHISK_MAX_TOKENS", "800"))

# Name given to a grouped field that arrived as a flat list
DEFAULT_GROUP_NAME = "All"

GROUPED_FIELDS = ("ingredients", "instructions", "tips")

USER_FACING_PARSE_ERROR = "Could not generate a recipe, try rephrasing."
