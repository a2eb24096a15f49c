from types import SimpleNamespace
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from whisk.app.core.errors import validation_failed
from whisk.app.db import models
from whisk.app.schemas.recipe import RecipeCreate, RecipeFacets, RecipeUpdate
from whisk.app.services.recipe_extraction.models import ExtractedRecipe
from whisk.app.services.recipe_extraction.validation import validate_recipe_data

NON_NULLABLE_FIELDS = (
    "name",
    "image",
    "cook_time",
    "prep_time",
    "total_time",
    "category",
    "cuisine",
    "ingredients",
    "instructions",
    "recipe_yield",
)


def _contains(values: Optional[List[str]], wanted: str) -> bool:
    wanted = wanted.strip().lower()
    return any(isinstance(v, str) and v.strip().lower() == wanted for v in values or [])


def _matches_query(recipe: models.Recipe, q: str) -> bool:
    needle = q.strip().lower()
    haystacks = [recipe.name or "", recipe.description or ""] + list(recipe.ingredients or [])
    return any(needle in str(text).lower() for text in haystacks)


def create_recipe(
    db: Session,
    user_id: str,
    data: RecipeCreate,
    parsing_method: models.ParsingMethod = models.ParsingMethod.MANUAL,
) -> models.Recipe:
    recipe = models.Recipe(
        user_id=str(user_id),
        name=data.name.strip(),
        description=data.description,
        image=data.image or "",
        cook_time=data.cook_time,
        prep_time=data.prep_time,
        total_time=data.total_time,
        category=list(data.category),
        cuisine=list(data.cuisine),
        ingredients=list(data.ingredients),
        instructions=list(data.instructions),
        recipe_yield=data.recipe_yield,
        source_url=data.source_url,
        parsing_method=parsing_method,
    )
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe


def create_from_extracted(db: Session, user_id: str, extracted: ExtractedRecipe) -> models.Recipe:
    payload = RecipeCreate(
        name=extracted.name,
        description=extracted.description,
        image=extracted.image,
        cook_time=extracted.cook_time,
        prep_time=extracted.prep_time,
        total_time=extracted.total_time,
        category=extracted.category,
        cuisine=extracted.cuisine,
        ingredients=extracted.ingredients,
        instructions=extracted.instructions,
        recipe_yield=extracted.recipe_yield,
        source_url=extracted.source_url,
    )
    return create_recipe(db, user_id, payload, extracted.parsing_method or models.ParsingMethod.MANUAL)


def list_recipes(
    db: Session,
    user_id: str,
    q: Optional[str] = None,
    category: Optional[str] = None,
    cuisine: Optional[str] = None,
) -> List[models.Recipe]:
    stmt = (
        select(models.Recipe)
        .where(models.Recipe.user_id == str(user_id))
        .order_by(models.Recipe.created_at.desc(), models.Recipe.id.desc())
    )
    recipes = list(db.scalars(stmt).all())
    # JSON list columns are filtered in Python to stay portable across backends.
    if q and q.strip():
        recipes = [r for r in recipes if _matches_query(r, q)]
    if category and category.strip():
        recipes = [r for r in recipes if _contains(r.category, category)]
    if cuisine and cuisine.strip():
        recipes = [r for r in recipes if _contains(r.cuisine, cuisine)]
    return recipes


def list_facets(db: Session, user_id: str) -> RecipeFacets:
    categories: dict = {}
    cuisines: dict = {}
    for recipe in list_recipes(db, user_id):
        for value in recipe.category or []:
            categories.setdefault(value.lower(), value)
        for value in recipe.cuisine or []:
            cuisines.setdefault(value.lower(), value)
    return RecipeFacets(
        categories=sorted(categories.values(), key=str.lower),
        cuisines=sorted(cuisines.values(), key=str.lower),
    )


def get_recipe(db: Session, user_id: str, recipe_id: int) -> models.Recipe:
    stmt = select(models.Recipe).where(
        models.Recipe.user_id == str(user_id), models.Recipe.id == recipe_id
    )
    recipe = db.scalars(stmt).first()
    if not recipe:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return recipe


def update_recipe(db: Session, user_id: str, recipe_id: int, data: RecipeUpdate) -> models.Recipe:
    recipe = get_recipe(db, user_id, recipe_id)

    changes = data.model_dump(exclude_unset=True)
    # An explicit null clears description or source_url; other columns are NOT NULL.
    for field in NON_NULLABLE_FIELDS:
        if field in changes and changes[field] is None:
            del changes[field]
    if "name" in changes:
        changes["name"] = changes["name"].strip()

    merged = SimpleNamespace(
        name=changes.get("name", recipe.name),
        ingredients=changes.get("ingredients", recipe.ingredients),
        instructions=changes.get("instructions", recipe.instructions),
    )
    errors = validate_recipe_data(merged)
    if errors:
        raise validation_failed(errors)

    for field, value in changes.items():
        setattr(recipe, field, value)

    db.commit()
    db.refresh(recipe)
    return recipe


def delete_recipe(db: Session, user_id: str, recipe_id: int) -> None:
    recipe = get_recipe(db, user_id, recipe_id)
    db.delete(recipe)
    db.commit()
