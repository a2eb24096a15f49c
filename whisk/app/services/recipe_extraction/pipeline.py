"""Import pipeline: fetch, JSON-LD, content reduction, AI normalization, enhancement."""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from whisk.app.db.models import ParsingMethod
from whisk.app.services.llm_client import LLMClient
from whisk.app.services.recipe_extraction.extractors.content_reducer import reduce_html_to_text
from whisk.app.services.recipe_extraction.extractors.llm import (
    MANUAL_INPUT,
    InsufficientContentError,
    enhance_recipe,
    normalize_recipe_text,
)
from whisk.app.services.recipe_extraction.extractors.schema_org import extract_recipe_from_schema_org
from whisk.app.services.recipe_extraction.html_fetcher import fetch_page
from whisk.app.services.recipe_extraction.models import (
    ExtractedRecipe,
    ImportResult,
    ImportStatus,
)
from whisk.app.services.recipe_extraction.parsing_utils import clean_text
from whisk.app.services.recipe_extraction.validation import validate_recipe_data

logger = logging.getLogger(__name__)

MIN_REDUCED_TEXT_LENGTH = 200


def sanitize_recipe(
    recipe: ExtractedRecipe,
    source_url: str,
    parsing_method: ParsingMethod,
) -> ExtractedRecipe:
    name = clean_text(recipe.name)
    description = (recipe.description or "").strip() or f"A recipe for {name}"
    return recipe.model_copy(
        update={
            "name": name,
            "description": description,
            "source_url": source_url,
            "parsing_method": parsing_method,
        }
    )


async def _validate_and_enhance(llm: LLMClient, recipe: ExtractedRecipe, degraded: bool) -> ImportResult:
    errors = validate_recipe_data(recipe)
    if errors:
        logger.error("Validation failed: %s", ", ".join(errors))
        return ImportResult(
            status=ImportStatus.VALIDATION_ERROR,
            recipe=recipe,
            degraded=degraded,
            validation_errors=errors,
        )
    enhanced = await enhance_recipe(llm, recipe)
    return ImportResult(status=ImportStatus.OK, recipe=enhanced, degraded=degraded)


async def import_recipe_from_url(url: str, llm: LLMClient) -> ImportResult:
    logger.info("Starting recipe parsing for: %s", url)
    fetched = await fetch_page(url)
    if fetched.blocked:
        logger.info("Website blocked the request for %s: %s", url, fetched.error)
        return ImportResult(status=ImportStatus.BLOCKED, error_message=fetched.error)

    soup = BeautifulSoup(fetched.html or "", "lxml")
    degraded = False
    recipe = extract_recipe_from_schema_org(soup)
    if recipe is not None:
        parsing_method = ParsingMethod.JSON_LD
        logger.info("Successfully parsed with JSON-LD: %s", recipe.name)
    else:
        logger.info("Using AI parsing for %s", url)
        content = reduce_html_to_text(soup)
        if len(content) < MIN_REDUCED_TEXT_LENGTH:
            return ImportResult(
                status=ImportStatus.EXTRACTION_FAILED,
                error_message="Insufficient content extracted from webpage",
            )
        try:
            normalized = await normalize_recipe_text(llm, content, url)
        except InsufficientContentError as exc:
            return ImportResult(status=ImportStatus.EXTRACTION_FAILED, error_message=str(exc))
        recipe = normalized.recipe
        degraded = normalized.degraded
        parsing_method = ParsingMethod.AI

    recipe = sanitize_recipe(recipe, url, parsing_method)
    return await _validate_and_enhance(llm, recipe, degraded)


async def import_recipe_from_text(text: str, llm: LLMClient, url: Optional[str] = None) -> ImportResult:
    """Manual entry: user-supplied text goes straight to AI normalization."""
    source_url = url or MANUAL_INPUT
    logger.info("Processing manually provided recipe text (%d chars)", len(text))
    try:
        normalized = await normalize_recipe_text(llm, text, source_url)
    except InsufficientContentError as exc:
        return ImportResult(status=ImportStatus.EXTRACTION_FAILED, error_message=str(exc))

    recipe = sanitize_recipe(normalized.recipe, source_url, ParsingMethod.MANUAL_AI)
    return await _validate_and_enhance(llm, recipe, normalized.degraded)
