"""Prompts sent to the completion endpoint."""

SYSTEM_PROMPT = "You are a helpful recipe generator named Whisk."

RECIPE_SCHEMA = """{
  "title": a concise recipe name (include an emoji at the end to represent the recipe),
  "description": a short description of the dish,
  "totalTime": total preparation and cooking time, e.g. "30 minutes",
  "servings": number of servings, e.g. "4",
  "ingredients": an object mapping group names (e.g. "Sauce", "Salad") to arrays of strings,
      or a plain array of strings when the recipe has no natural groups,
  "instructions": an object mapping section names (e.g. "Preparation", "Assembly") to arrays of steps,
      or a plain array of strings,
  "tips": an object mapping tip categories to arrays of strings (optional)
}"""


def get_user_prompt(description: str, count: int = 1) -> str:
    """Build the user message asking for ``count`` recipes matching ``description``."""
    if count <= 1:
        shape = f"Return your answer as a single valid JSON object with these keys:\n{RECIPE_SCHEMA}"
    else:
        shape = (
            f'Return your answer as valid JSON of the form {{"recipes": [...]}} containing exactly {count} '
            f"recipes with distinct titles, each an object with these keys:\n{RECIPE_SCHEMA}"
        )

    return f"""Generate a recipe based on the following description: "{description}".
{shape}
Group values must be flat arrays of strings, never nested objects.
Do not include any extra text, markdown formatting, or code fences."""
