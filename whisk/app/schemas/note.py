from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from whisk.app.db.models import NoteType


class NoteCreate(BaseModel):
    content: Optional[str] = None
    type: Optional[NoteType] = None


class NoteRead(BaseModel):
    id: int
    recipe_id: int
    user_id: str
    content: str
    type: NoteType
    is_from_ai: bool
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class ChatRequest(BaseModel):
    message: Optional[str] = None


class ChatExchange(BaseModel):
    user_message: NoteRead
    ai_response: NoteRead


class ClearNotesResult(BaseModel):
    message: str
    deleted_count: int
