import json
import logging

from whisk.app.db import models
from whisk.app.services.llm_client import LLMClient, LLMError, strip_code_fences

logger = logging.getLogger(__name__)

NO_RESPONSE = "I couldn't generate a proper response."
CHAT_UNAVAILABLE = "I'm sorry, I couldn't process your question right now. Please try again later."

CHAT_PROMPT = """
You are a helpful cooking assistant. A user is asking about this specific recipe:

{context}

User question: {message}

Please provide a structured response with:
1. A main response answering their question
2. If they're asking about substitutions, provide an array of ingredient substitution suggestions
3. Any relevant cooking tips

Respond with a JSON object of the form:
{{"response": string, "suggestions": [{{"ingredient": string, "substitutes": [string], "notes": string}}], "tips": [string]}}
Be helpful, friendly, and concise.
"""


def _numbered(items) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items or [], start=1))


def build_recipe_context(recipe: models.Recipe) -> str:
    return (
        f"Recipe: {recipe.name}\n"
        f"Description: {recipe.description or ''}\n"
        f"Prep Time: {recipe.prep_time or ''}\n"
        f"Cook Time: {recipe.cook_time or ''}\n"
        f"Total Time: {recipe.total_time or ''}\n"
        f"Serves: {recipe.recipe_yield or ''}\n"
        f"Category: {', '.join(recipe.category or [])}\n"
        f"Cuisine: {', '.join(recipe.cuisine or [])}\n"
        "\n"
        f"Ingredients:\n{_numbered(recipe.ingredients)}\n"
        "\n"
        f"Instructions:\n{_numbered(recipe.instructions)}\n"
    )


def extract_chat_reply(raw: str) -> str:
    """Pull the ``response`` field out of a JSON reply, or use the text as-is."""
    try:
        data = json.loads(strip_code_fences(raw))
    except json.JSONDecodeError:
        logger.warning("Failed to parse JSON chat response, falling back to plain text")
        return raw.strip()
    if isinstance(data, dict):
        reply = data.get("response")
        return reply if isinstance(reply, str) and reply.strip() else NO_RESPONSE
    return raw.strip()


async def chat_about_recipe(llm: LLMClient, recipe: models.Recipe, message: str) -> str:
    logger.info("Processing chat about recipe: %s", recipe.name)
    prompt = CHAT_PROMPT.format(context=build_recipe_context(recipe), message=message)
    try:
        raw = await llm.complete(prompt, temperature=0.7, max_tokens=1024, json_mode=True)
    except LLMError as exc:
        logger.error("Error in recipe chat AI: %s", exc)
        return CHAT_UNAVAILABLE
    return extract_chat_reply(raw)
