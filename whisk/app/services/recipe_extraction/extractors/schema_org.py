"""Schema.org JSON-LD recipe extraction."""

import json
import logging
from typing import Any, Optional

from bs4 import BeautifulSoup

from whisk.app.db.models import ParsingMethod
from whisk.app.services.recipe_extraction.models import ExtractedRecipe
from whisk.app.services.recipe_extraction.parsing_utils import (
    clean_text,
    coerce_string_list,
    extract_image,
    extract_instruction_text,
    first_text,
    format_duration,
)

logger = logging.getLogger(__name__)


def is_recipe_type(obj: Any) -> bool:
    """True when a JSON-LD node's ``@type`` includes "Recipe"."""
    if not isinstance(obj, dict):
        return False
    obj_type = obj.get("@type")
    if isinstance(obj_type, str):
        return obj_type == "Recipe"
    if isinstance(obj_type, list):
        return "Recipe" in obj_type
    return False


def find_json_ld(soup: BeautifulSoup) -> Optional[dict]:
    """Return the candidate JSON-LD node from the first ld+json script, if any."""
    script = soup.find("script", attrs={"type": "application/ld+json"})
    if script is None:
        logger.info("No JSON-LD found, will use HTML parsing")
        return None

    raw_json = script.string or script.get_text()
    if not raw_json or not raw_json.strip():
        logger.debug("JSON-LD block is empty")
        return None
    try:
        data = json.loads(raw_json)
    except json.JSONDecodeError as exc:
        logger.warning("JSON-LD block failed to parse: %s (first 200 chars: %s)", exc, raw_json[:200])
        return None

    if isinstance(data, list):
        candidate = data[0] if data else None
        return candidate if isinstance(candidate, dict) else None
    if isinstance(data, dict):
        graph = data.get("@graph")
        if isinstance(graph, list):
            logger.info("Found @graph with %d items", len(graph))
            for node in graph:
                if is_recipe_type(node):
                    return node
            return None
        return data
    return None


def extract_recipe_from_json_ld(obj: dict) -> Optional[ExtractedRecipe]:
    """Map a schema.org Recipe node onto the canonical recipe shape."""
    if not is_recipe_type(obj):
        logger.debug("JSON-LD node is not a Recipe (type: %s)", obj.get("@type") if isinstance(obj, dict) else None)
        return None

    description = obj.get("description")
    recipe = ExtractedRecipe(
        name=clean_text(obj.get("name") if isinstance(obj.get("name"), str) else ""),
        description=clean_text(description) if isinstance(description, str) else None,
        image=extract_image(obj.get("image")),
        cook_time=format_duration(obj.get("cookTime")),
        prep_time=format_duration(obj.get("prepTime")),
        total_time=format_duration(obj.get("totalTime")),
        category=coerce_string_list(obj.get("recipeCategory")),
        cuisine=coerce_string_list(obj.get("recipeCuisine")),
        ingredients=coerce_string_list(obj.get("recipeIngredient")),
        instructions=extract_instruction_text(obj.get("recipeInstructions")),
        recipe_yield=first_text(obj.get("recipeYield")),
        parsing_method=ParsingMethod.JSON_LD,
    )
    logger.info(
        "JSON-LD recipe: name=%s, ingredients=%d, instructions=%d",
        recipe.name[:50] or "None",
        len(recipe.ingredients),
        len(recipe.instructions),
    )
    return recipe


def extract_recipe_from_schema_org(soup: BeautifulSoup) -> Optional[ExtractedRecipe]:
    """Structured-data stage: a recipe with a non-blank name, or None to fall through."""
    node = find_json_ld(soup)
    if node is None:
        return None
    recipe = extract_recipe_from_json_ld(node)
    if recipe is None or not recipe.name.strip():
        logger.info("JSON-LD data incomplete, falling back to AI parsing")
        return None
    return recipe
