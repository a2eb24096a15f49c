"""Recipe extractors for the different import stages."""

from whisk.app.services.recipe_extraction.extractors.content_reducer import reduce_html_to_text
from whisk.app.services.recipe_extraction.extractors.llm import enhance_recipe, normalize_recipe_text
from whisk.app.services.recipe_extraction.extractors.schema_org import (
    extract_recipe_from_json_ld,
    extract_recipe_from_schema_org,
    find_json_ld,
)

__all__ = [
    "enhance_recipe",
    "extract_recipe_from_json_ld",
    "extract_recipe_from_schema_org",
    "find_json_ld",
    "normalize_recipe_text",
    "reduce_html_to_text",
]
