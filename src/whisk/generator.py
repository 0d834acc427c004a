"""
Recipe generator — asks a chat-completion endpoint for recipe JSON and
recovers typed RecipeDrafts from whatever text comes back.

The network call is the only asynchronous step. Everything after it
(sanitising, key-order recovery, parsing) is pure and synchronous.
"""

import logging
import os
from typing import Literal, Optional

from openai import AsyncOpenAI, OpenAIError

from .constants import DEFAULT_PROVIDER, MAX_TOKENS, MODEL_OVERRIDE
from .exceptions import CompletionError
from .models.recipe import RecipeParseResult
from .prompts.recipe import SYSTEM_PROMPT, get_user_prompt
from .services.payload import parse_completion

logger = logging.getLogger(__name__)

# Provider configurations
PROVIDERS = {
    "openai": {
        "base_url": "https://api.openai.com/v1",
        "model": "gpt-4o",
        "env_key": "OPENAI_API_KEY",
    },
    "openrouter": {
        "base_url": "https://openrouter.ai/api/v1",
        "model": "openai/gpt-4o",
        "env_key": "OPENROUTER_API_KEY",
    },
}

# Multi-recipe answers need room for every recipe
TOKENS_PER_EXTRA_RECIPE = 600


class RecipeGenerator:
    """Generate recipes from a free-text meal description."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        provider: Literal["openai", "openrouter"] = DEFAULT_PROVIDER,
        model: Optional[str] = None,
    ):
        """
        Initialize the generator.

        Args:
            api_key: API key. If not provided, reads from env var based on provider.
            provider: "openai" (default) or "openrouter".
            model: Model name; defaults to WHISK_MODEL or the provider's default.
        """
        if provider not in PROVIDERS:
            raise ValueError(f"Unsupported provider: {provider}. Must be one of: {', '.join(PROVIDERS)}")

        self.provider = provider
        config = PROVIDERS[provider]

        self.api_key = api_key or os.getenv(config["env_key"])
        if not self.api_key:
            raise ValueError(
                f"{provider.upper()} API key is required. "
                f"Set {config['env_key']} env var or pass api_key."
            )

        self.model = model or MODEL_OVERRIDE or config["model"]
        self.client = AsyncOpenAI(api_key=self.api_key, base_url=config["base_url"])

        logger.info(f"RecipeGenerator initialized with {provider}: {self.model}")

    async def complete(self, description: str, count: int = 1) -> str:
        """
        Request recipe JSON from the endpoint and return the raw text content.

        Raises:
            CompletionError: If the request fails or the response has no content
        """
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": get_user_prompt(description, count)},
        ]

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=MAX_TOKENS + TOKENS_PER_EXTRA_RECIPE * max(count - 1, 0),
            )
        except OpenAIError as e:
            logger.error(f"Completion request failed: {e}")
            raise CompletionError(f"Error from {self.provider}: {e}") from e

        if not response.choices or not response.choices[0].message.content:
            raise CompletionError("Empty response from completion endpoint")

        content = response.choices[0].message.content
        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.info(
                f"Completion received: {len(content)} chars "
                f"({usage.prompt_tokens} input + {usage.completion_tokens} output tokens)"
            )
        return content

    async def generate(self, description: str, count: int = 1) -> RecipeParseResult:
        """
        Generate ``count`` recipes for a meal description.

        Args:
            description: What the user wants to eat, in their own words
            count: Number of recipes to ask for; more than one uses the
                {"recipes": [...]} payload shape

        Returns:
            RecipeParseResult with the parsed drafts

        Raises:
            ValueError: If the description is empty
            CompletionError: If the endpoint fails
            RecipeParseError: If the completion cannot be parsed into a recipe
        """
        description = description.strip()
        if not description:
            raise ValueError("Please describe your meal.")
        if count < 1:
            raise ValueError("count must be at least 1")

        logger.info(f"Generating {count} recipe(s) for: {description[:80]}")
        content = await self.complete(description, count)
        return parse_completion(content)
