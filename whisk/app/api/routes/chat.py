import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from whisk.app.api.deps import get_current_user, get_db_session, get_llm
from whisk.app.db.models import NoteType
from whisk.app.schemas.auth import CurrentUser
from whisk.app.schemas.note import ChatExchange, ChatRequest, ClearNotesResult, NoteCreate, NoteRead
from whisk.app.services import notes_service, recipe_chat, recipes_service
from whisk.app.services.llm_client import LLMClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/recipes/{recipe_id}/notes", response_model=list[NoteRead])
def list_notes(
    recipe_id: int,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return notes_service.list_notes(db, current_user.id, recipe_id)


@router.post("/recipes/{recipe_id}/notes", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
def create_note(
    recipe_id: int,
    payload: NoteCreate,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    if not payload.content or not payload.content.strip() or payload.type is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Content and type are required")
    return notes_service.create_note(db, current_user.id, recipe_id, payload.content, payload.type)


@router.delete("/recipes/{recipe_id}/notes", response_model=ClearNotesResult)
def clear_all_notes(
    recipe_id: int,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    deleted = notes_service.clear_all_notes(db, current_user.id, recipe_id)
    return ClearNotesResult(message=f"Cleared {deleted} notes and chat messages", deleted_count=deleted)


@router.delete("/recipes/{recipe_id}/chat", response_model=ClearNotesResult)
def clear_chat(
    recipe_id: int,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    deleted = notes_service.clear_chat(db, current_user.id, recipe_id)
    return ClearNotesResult(message=f"Cleared {deleted} chat messages", deleted_count=deleted)


@router.post("/recipes/{recipe_id}/chat", response_model=ChatExchange)
async def chat_about_recipe(
    recipe_id: int,
    payload: ChatRequest,
    db: Session = Depends(get_db_session),
    llm: LLMClient = Depends(get_llm),
    current_user: CurrentUser = Depends(get_current_user),
):
    message = (payload.message or "").strip()
    if not message:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message is required")

    recipe = recipes_service.get_recipe(db, current_user.id, recipe_id)
    user_note = notes_service.add_chat_turn(db, current_user.id, recipe, message, is_from_ai=False)
    reply = await recipe_chat.chat_about_recipe(llm, recipe, message)
    ai_note = notes_service.add_chat_turn(db, current_user.id, recipe, reply, is_from_ai=True)
    return ChatExchange(
        user_message=NoteRead.model_validate(user_note),
        ai_response=NoteRead.model_validate(ai_note),
    )


@router.delete("/notes/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(
    note_id: int,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    notes_service.delete_note(db, current_user.id, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
