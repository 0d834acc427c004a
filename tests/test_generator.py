"""
Tests for RecipeGenerator.

The completion endpoint is mocked; no API key or network access is needed.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import OpenAIError

from whisk.exceptions import CompletionError, MalformedRecipeError
from whisk.generator import MAX_TOKENS, TOKENS_PER_EXTRA_RECIPE, RecipeGenerator
from whisk.prompts.recipe import SYSTEM_PROMPT, get_user_prompt


# ── Fixtures ──────────────────────────────────────────────────────────────────

def _response(content):
    """Mock a chat completion response carrying ``content``."""
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    response.usage = MagicMock(prompt_tokens=120, completion_tokens=300)
    return response


@pytest.fixture
def generator():
    """Generator with a fake API key and a mocked client."""
    gen = RecipeGenerator(api_key="test-api-key", provider="openai")
    gen.client = MagicMock()
    gen.client.chat.completions.create = AsyncMock()
    return gen


# ── Init ──────────────────────────────────────────────────────────────────────

class TestRecipeGeneratorInit:

    def test_init_with_api_key(self):
        gen = RecipeGenerator(api_key="test-key", provider="openai")
        assert gen.api_key == "test-key"
        assert gen.model == "gpt-4o"

    def test_init_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")
        gen = RecipeGenerator(provider="openrouter")
        assert gen.api_key == "env-key"
        assert gen.model == "openai/gpt-4o"

    def test_explicit_model(self):
        gen = RecipeGenerator(api_key="k", provider="openai", model="gpt-4o-mini")
        assert gen.model == "gpt-4o-mini"

    def test_init_fails_without_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            RecipeGenerator(provider="openai")

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            RecipeGenerator(api_key="k", provider="mistral")


# ── Generate ──────────────────────────────────────────────────────────────────

class TestGenerate:

    @pytest.mark.asyncio
    async def test_single_recipe(self, generator, caesar_salad):
        generator.client.chat.completions.create.return_value = _response(caesar_salad)

        result = await generator.generate("a crunchy salad")

        draft = result.single
        assert draft.title == "Caesar Salad 🥗"
        assert draft.group_names("ingredients") == ["Dressing", "Salad"]

        kwargs = generator.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["max_tokens"] == MAX_TOKENS
        assert kwargs["messages"] == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": get_user_prompt("a crunchy salad")},
        ]

    @pytest.mark.asyncio
    async def test_fenced_batch(self, generator, three_recipes):
        generator.client.chat.completions.create.return_value = _response(f"```json\n{three_recipes}\n```")

        result = await generator.generate("three breakfasts", count=3)

        assert result.multiple is True
        assert len(result.recipes) == 3
        kwargs = generator.client.chat.completions.create.call_args.kwargs
        assert kwargs["max_tokens"] == MAX_TOKENS + 2 * TOKENS_PER_EXTRA_RECIPE
        assert '"recipes"' in kwargs["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_empty_description(self, generator):
        with pytest.raises(ValueError, match="describe your meal"):
            await generator.generate("   ")
        generator.client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_count(self, generator):
        with pytest.raises(ValueError):
            await generator.generate("soup", count=0)

    @pytest.mark.asyncio
    async def test_endpoint_failure(self, generator):
        generator.client.chat.completions.create.side_effect = OpenAIError("rate limited")

        with pytest.raises(CompletionError, match="rate limited"):
            await generator.generate("soup")

    @pytest.mark.asyncio
    async def test_empty_content(self, generator):
        generator.client.chat.completions.create.return_value = _response(None)

        with pytest.raises(CompletionError, match="Empty response"):
            await generator.generate("soup")

    @pytest.mark.asyncio
    async def test_refusal_is_malformed(self, generator):
        generator.client.chat.completions.create.return_value = _response("Sorry, I can't help with that.")

        with pytest.raises(MalformedRecipeError):
            await generator.generate("something inedible")


class TestPrompts:

    def test_single_prompt_mentions_description(self):
        prompt = get_user_prompt("spicy noodles")
        assert '"spicy noodles"' in prompt
        assert '"recipes"' not in prompt
        assert "code fences" in prompt

    def test_batch_prompt_asks_for_count(self):
        prompt = get_user_prompt("spicy noodles", count=3)
        assert "exactly 3 recipes" in prompt

