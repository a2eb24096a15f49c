from typing import Any, List

NAME_REQUIRED = "Recipe name is required"
INGREDIENTS_REQUIRED = "Recipe must have ingredients information"
INSTRUCTIONS_REQUIRED = "Recipe must have instructions information"


def validate_recipe_data(recipe: Any) -> List[str]:
    """Collect every reason a recipe cannot be persisted; empty means valid."""
    errors: List[str] = []
    name = getattr(recipe, "name", None)
    ingredients = getattr(recipe, "ingredients", None)
    instructions = getattr(recipe, "instructions", None)

    if not isinstance(name, str) or not name.strip():
        errors.append(NAME_REQUIRED)
    if not isinstance(ingredients, list) or len(ingredients) == 0:
        errors.append(INGREDIENTS_REQUIRED)
    if not isinstance(instructions, list) or len(instructions) == 0:
        errors.append(INSTRUCTIONS_REQUIRED)
    return errors
