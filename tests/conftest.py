import json

import pytest


CAESAR_SALAD = (
    '{"title":"Caesar Salad 🥗","description":"Crisp salad.",'
    '"ingredients":{"Dressing":["dressing"],"Salad":["lettuce","croutons"]},'
    '"instructions":["Toss.","Serve."]}'
)


def make_recipe(title: str, description: str = "Tasty.", **fields) -> dict:
    """Build a decoded recipe object with sensible defaults."""
    recipe = {
        "title": title,
        "description": description,
        "ingredients": ["1 egg"],
        "instructions": ["Cook it."],
    }
    recipe.update(fields)
    return recipe


@pytest.fixture
def caesar_salad() -> str:
    return CAESAR_SALAD


@pytest.fixture
def three_recipes() -> str:
    """A batch payload, pretty-printed the way models usually answer."""
    return json.dumps(
        {
            "recipes": [
                make_recipe(
                    "Shakshuka 🍳",
                    totalTime="30 minutes",
                    servings="2",
                    ingredients={"Sauce": ["4 tomatoes", "1 pepper"], "Eggs": ["4 eggs"]},
                ),
                make_recipe(
                    "Pad Thai 🍜",
                    instructions={"Prep": ["Soak noodles."], "Wok": ["Fry.", "Toss."]},
                    tips={"Serving": ["Add lime."], "Storage": ["Eat fresh."]},
                ),
                make_recipe("Pancakes 🥞"),
            ]
        },
        indent=2,
        ensure_ascii=False,
    )
