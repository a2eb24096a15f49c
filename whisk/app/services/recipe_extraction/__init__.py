"""Recipe import package.

Imports a recipe from a URL (schema.org JSON-LD first, then AI extraction
over reduced page text) or from user-supplied text, and validates it before
persistence.
"""

from whisk.app.services.recipe_extraction.html_fetcher import fetch_page
from whisk.app.services.recipe_extraction.models import (
    ExtractedRecipe,
    FetchResult,
    ImportResult,
    ImportStatus,
    NormalizationResult,
)
from whisk.app.services.recipe_extraction.parsing_utils import (
    clean_text,
    coerce_string_list,
    extract_image,
    extract_instruction_text,
    format_duration,
)
from whisk.app.services.recipe_extraction.validation import validate_recipe_data

__all__ = [
    # Models
    "ExtractedRecipe",
    "FetchResult",
    "ImportResult",
    "ImportStatus",
    "NormalizationResult",
    # Fetching
    "fetch_page",
    # Parsing utilities
    "clean_text",
    "coerce_string_list",
    "extract_image",
    "extract_instruction_text",
    "format_duration",
    # Validation
    "validate_recipe_data",
]
