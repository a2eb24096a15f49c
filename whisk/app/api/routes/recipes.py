import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from whisk.app.api.deps import get_current_user, get_db_session, get_llm
from whisk.app.core.errors import blocked_by_firewall, extraction_failed, validation_failed
from whisk.app.schemas.auth import CurrentUser
from whisk.app.schemas.recipe import (
    ManualRecipeRequest,
    ParseUrlRequest,
    RecipeCreate,
    RecipeFacets,
    RecipeRead,
    RecipeUpdate,
)
from whisk.app.services import recipes_service
from whisk.app.services.llm_client import LLMClient
from whisk.app.services.recipe_extraction import pipeline
from whisk.app.services.recipe_extraction.models import ImportResult, ImportStatus
from whisk.app.services.recipe_extraction.validation import validate_recipe_data

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _save_import(db: Session, user_id: str, result: ImportResult, url: str):
    if result.status == ImportStatus.BLOCKED:
        raise blocked_by_firewall(url, result.error_message)
    if result.status == ImportStatus.EXTRACTION_FAILED:
        raise extraction_failed(result.error_message)
    if result.status == ImportStatus.VALIDATION_ERROR:
        raise validation_failed(result.validation_errors)

    if result.degraded:
        logger.warning("Saving placeholder recipe for %s; AI extraction degraded", url)
    recipe = recipes_service.create_from_extracted(db, user_id, result.recipe)
    logger.info("Recipe saved successfully: %s", recipe.name)
    return recipe


@router.get("", response_model=list[RecipeRead])
def list_recipes(
    q: Optional[str] = None,
    category: Optional[str] = None,
    cuisine: Optional[str] = None,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return recipes_service.list_recipes(db, current_user.id, q=q, category=category, cuisine=cuisine)


@router.get("/facets", response_model=RecipeFacets)
def list_facets(
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return recipes_service.list_facets(db, current_user.id)


@router.post("", response_model=RecipeRead, status_code=status.HTTP_201_CREATED)
def create_recipe(
    payload: RecipeCreate,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    errors = validate_recipe_data(payload)
    if errors:
        raise validation_failed(errors)
    return recipes_service.create_recipe(db, current_user.id, payload)


@router.post("/parse", response_model=RecipeRead, status_code=status.HTTP_201_CREATED)
async def parse_recipe_from_url(
    payload: ParseUrlRequest,
    db: Session = Depends(get_db_session),
    llm: LLMClient = Depends(get_llm),
    current_user: CurrentUser = Depends(get_current_user),
):
    url = (payload.url or "").strip()
    if not url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="URL is required")

    result = await pipeline.import_recipe_from_url(url, llm)
    return _save_import(db, current_user.id, result, url)


@router.post("/manual", response_model=RecipeRead, status_code=status.HTTP_201_CREATED)
async def create_recipe_from_text(
    payload: ManualRecipeRequest,
    db: Session = Depends(get_db_session),
    llm: LLMClient = Depends(get_llm),
    current_user: CurrentUser = Depends(get_current_user),
):
    text = (payload.recipe_text or "").strip()
    if not text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Recipe text is required")

    url = (payload.url or "").strip() or None
    result = await pipeline.import_recipe_from_text(text, llm, url=url)
    return _save_import(db, current_user.id, result, url or "manual-input")


@router.get("/{recipe_id}", response_model=RecipeRead)
def get_recipe(
    recipe_id: int,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return recipes_service.get_recipe(db, current_user.id, recipe_id)


@router.put("/{recipe_id}", response_model=RecipeRead)
def update_recipe(
    recipe_id: int,
    payload: RecipeUpdate,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return recipes_service.update_recipe(db, current_user.id, recipe_id, payload)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: int,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    recipes_service.delete_recipe(db, current_user.id, recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
