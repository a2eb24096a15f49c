"""AI-based recipe normalization and category enhancement."""

import json
import logging
from typing import Any, List

from whisk.app.core.config import get_settings
from whisk.app.services.llm_client import LLMClient, LLMError, parse_ai_json
from whisk.app.services.recipe_extraction.models import ExtractedRecipe, NormalizationResult
from whisk.app.services.recipe_extraction.parsing_utils import (
    coerce_string_list,
    extract_image,
    first_text,
    host_from_url,
)

logger = logging.getLogger(__name__)

MANUAL_INPUT = "manual-input"
INGREDIENTS_NOT_SPECIFIED = "Ingredients not clearly specified - please check the original recipe"
INSTRUCTIONS_NOT_SPECIFIED = "Instructions not clearly specified - please check the original recipe"
CONTENT_CONTINUES = "...[content continues]"

EXTRACTION_PROMPT = """
Analyze this webpage content and extract recipe information. URL: {url}

Content:
{content}

Extract recipe details and return a JSON object with this structure:
{{
  "name": "Recipe Title",
  "description": "Brief description",
  "image": "image URL as string or empty string",
  "cookTime": "cooking time",
  "prepTime": "prep time",
  "totalTime": "total time",
  "category": ["category1", "category2"],
  "cuisine": ["cuisine1"],
  "ingredients": ["ingredient 1 with quantity", "ingredient 2"],
  "instructions": ["step 1", "step 2", "step 3"],
  "yield": "servings"
}}

IMPORTANT:
- For image field, return ONLY the URL string, not an object
- Extract the actual recipe name from the content
- Find ALL ingredients listed (even if formatting is unclear)
- Extract ALL cooking steps/instructions
- Return valid JSON only, no markdown formatting

JSON:"""

ENHANCE_PROMPT = """
Improve categorization for this recipe:

Name: {name}
Current categories: {category}
Current cuisines: {cuisine}
First 3 ingredients: {ingredients}

Return only JSON:
{{
  "category": ["improved categories"],
  "cuisine": ["improved cuisines"]
}}

Categories: Appetizer, Main Course, Dessert, Breakfast, Snack, Side Dish, Soup, Salad
Cuisines: Indian, Italian, Mexican, Asian, American, Mediterranean, Chinese, etc."""


class InsufficientContentError(ValueError):
    """Raised when there is too little text to attempt extraction."""


def _source_label(source_url: str) -> str:
    if source_url == MANUAL_INPUT:
        return "manual input"
    return host_from_url(source_url) or source_url or "unknown source"


def _clean_str(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _list_or_default(value: Any, default: List[str]) -> List[str]:
    items = coerce_string_list(value)
    return items or list(default)


def fallback_recipe(source_url: str) -> ExtractedRecipe:
    """Deterministic stub built only from the source hostname."""
    settings = get_settings()
    label = _source_label(source_url)
    has_url = source_url and source_url != MANUAL_INPUT
    ingredients = ["Ingredients not available - please visit the original recipe"]
    instructions = ["Instructions not available - please visit the original recipe"]
    if has_url:
        ingredients.append(f"Original URL: {source_url}")
        instructions.append(f"Please visit: {source_url}")
    return ExtractedRecipe(
        name=f"Recipe from {label}",
        description=f"Recipe from {source_url} - content could not be fully extracted",
        category=list(settings.ai_default_category),
        cuisine=["Indian"] if "indian" in label.lower() else ["Unknown"],
        ingredients=ingredients,
        instructions=instructions,
        recipe_yield=settings.ai_default_yield,
        source_url=source_url,
        has_placeholders=True,
    )


def coerce_ai_recipe(data: dict, source_url: str) -> ExtractedRecipe:
    """Coerce a parsed AI response into the canonical recipe shape."""
    settings = get_settings()
    ingredients = coerce_string_list(data.get("ingredients")) if isinstance(data.get("ingredients"), list) else []
    instructions = (
        coerce_string_list(data.get("instructions")) if isinstance(data.get("instructions"), list) else []
    )
    has_placeholders = not ingredients or not instructions

    return ExtractedRecipe(
        name=_clean_str(data.get("name")) or f"Recipe from {_source_label(source_url)}",
        description=_clean_str(data.get("description")) or "A delicious recipe",
        image=extract_image(data.get("image")),
        cook_time=first_text(data.get("cookTime")),
        prep_time=first_text(data.get("prepTime")),
        total_time=first_text(data.get("totalTime")),
        category=_list_or_default(data.get("category"), settings.ai_default_category),
        cuisine=_list_or_default(data.get("cuisine"), settings.ai_default_cuisine),
        ingredients=ingredients or [INGREDIENTS_NOT_SPECIFIED],
        instructions=instructions or [INSTRUCTIONS_NOT_SPECIFIED],
        recipe_yield=first_text(data.get("yield")) or settings.ai_default_yield,
        source_url=source_url,
        has_placeholders=has_placeholders,
    )


def build_extraction_prompt(text: str, source_url: str) -> str:
    budget = get_settings().ai_content_char_budget
    content = text[:budget] + CONTENT_CONTINUES if len(text) > budget else text
    return EXTRACTION_PROMPT.format(url=source_url, content=content)


async def request_ai_recipe(llm: LLMClient, text: str, source_url: str) -> ExtractedRecipe:
    """Single AI extraction attempt. Service and JSON errors propagate."""
    prompt = build_extraction_prompt(text, source_url)
    logger.info("Sending %d characters to AI for %s", len(text), source_url)
    raw = await llm.complete(prompt, temperature=0.2, max_tokens=2048)
    logger.info("AI raw response length: %d", len(raw))
    data = parse_ai_json(raw)
    return coerce_ai_recipe(data, source_url)


async def normalize_recipe_text(llm: LLMClient, text: str, source_url: str) -> NormalizationResult:
    """Turn page or user text into a recipe, degrading to a hostname stub on failure.

    Only too-short input raises (InsufficientContentError); every other
    failure yields ``degraded=True`` with the fallback recipe.
    """
    min_length = get_settings().ai_min_content_length
    if len(text or "") < min_length:
        raise InsufficientContentError("Insufficient content to parse recipe")

    try:
        recipe = await request_ai_recipe(llm, text, source_url)
    except (LLMError, ValueError) as exc:
        logger.warning("AI parsing failed for %s, using fallback recipe: %s", source_url, exc)
        return NormalizationResult(recipe=fallback_recipe(source_url), degraded=True, reason=str(exc))

    logger.info(
        "AI recipe: name=%s, ingredients=%d, instructions=%d",
        recipe.name,
        len(recipe.ingredients),
        len(recipe.instructions),
    )
    return NormalizationResult(recipe=recipe)


def _needs_enhancement(recipe: ExtractedRecipe) -> bool:
    return bool(recipe.name.strip()) and not recipe.has_placeholders


async def enhance_recipe(llm: LLMClient, recipe: ExtractedRecipe) -> ExtractedRecipe:
    """Ask the AI for better category/cuisine tags. Never fails."""
    if not _needs_enhancement(recipe):
        logger.info("Skipping enhancement - insufficient data")
        return recipe

    prompt = ENHANCE_PROMPT.format(
        name=recipe.name,
        category=json.dumps(recipe.category),
        cuisine=json.dumps(recipe.cuisine),
        ingredients=", ".join(recipe.ingredients[:3]),
    )
    try:
        raw = await llm.complete(prompt, temperature=0.1)
        enhanced = parse_ai_json(raw)
    except (LLMError, ValueError) as exc:
        logger.warning("Enhancement failed for %s: %s", recipe.name, exc)
        return recipe

    category = coerce_string_list(enhanced.get("category"))
    cuisine = coerce_string_list(enhanced.get("cuisine"))
    return recipe.model_copy(
        update={
            "category": category or recipe.category,
            "cuisine": cuisine or recipe.cuisine,
        }
    )
