"""Pydantic models for the recipe import pipeline."""

import enum
from typing import List, Optional

from pydantic import BaseModel, Field

from whisk.app.db.models import ParsingMethod


class FetchResult(BaseModel):
    """Outcome of fetching a page. Callers must check ``blocked`` first."""

    blocked: bool = False
    html: Optional[str] = None
    status_code: Optional[int] = None
    error: Optional[str] = None


class ExtractedRecipe(BaseModel):
    """A recipe in canonical shape, before persistence."""

    name: str = ""
    description: Optional[str] = None
    image: str = ""
    cook_time: str = ""
    prep_time: str = ""
    total_time: str = ""
    category: List[str] = Field(default_factory=list)
    cuisine: List[str] = Field(default_factory=list)
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    recipe_yield: str = ""
    source_url: Optional[str] = None
    parsing_method: Optional[ParsingMethod] = None
    # Set when ingredients or instructions hold stand-in text rather than
    # content taken from the source.
    has_placeholders: bool = False


class NormalizationResult(BaseModel):
    """Result of AI normalization. ``degraded`` marks the hostname-only stub."""

    recipe: ExtractedRecipe
    degraded: bool = False
    reason: Optional[str] = None


class ImportStatus(str, enum.Enum):
    OK = "ok"
    BLOCKED = "blocked"
    EXTRACTION_FAILED = "extraction_failed"
    VALIDATION_ERROR = "validation_error"


class ImportResult(BaseModel):
    status: ImportStatus
    recipe: Optional[ExtractedRecipe] = None
    degraded: bool = False
    error_message: Optional[str] = None
    validation_errors: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == ImportStatus.OK
