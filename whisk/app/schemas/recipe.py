from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from whisk.app.db.models import ParsingMethod

_YIELD_FIELD = dict(
    validation_alias=AliasChoices("yield", "recipe_yield"),
    serialization_alias="yield",
)


class RecipeBase(BaseModel):
    name: str
    description: Optional[str] = None
    image: str = ""
    cook_time: str = ""
    prep_time: str = ""
    total_time: str = ""
    category: List[str] = Field(default_factory=list)
    cuisine: List[str] = Field(default_factory=list)
    recipe_yield: str = Field("", **_YIELD_FIELD)
    source_url: Optional[str] = None


class RecipeCreate(RecipeBase):
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)


class RecipeUpdate(BaseModel):
    """Partial update. Ownership is not part of the payload and cannot change."""

    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    cook_time: Optional[str] = None
    prep_time: Optional[str] = None
    total_time: Optional[str] = None
    category: Optional[List[str]] = None
    cuisine: Optional[List[str]] = None
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[str]] = None
    recipe_yield: Optional[str] = Field(None, **_YIELD_FIELD)
    source_url: Optional[str] = None


class RecipeRead(RecipeBase):
    id: int
    user_id: str
    ingredients: List[str]
    instructions: List[str]
    parsing_method: ParsingMethod
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RecipeFacets(BaseModel):
    categories: List[str] = Field(default_factory=list)
    cuisines: List[str] = Field(default_factory=list)


class ParseUrlRequest(BaseModel):
    url: Optional[str] = None


class ManualRecipeRequest(BaseModel):
    recipe_text: Optional[str] = Field(
        None, validation_alias=AliasChoices("recipe_text", "recipeText")
    )
    url: Optional[str] = None
