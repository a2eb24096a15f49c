import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from whisk.app.db import models
from whisk.app.services import recipes_service

logger = logging.getLogger(__name__)


def list_notes(db: Session, user_id: str, recipe_id: int) -> List[models.Note]:
    recipes_service.get_recipe(db, user_id, recipe_id)
    stmt = (
        select(models.Note)
        .where(models.Note.recipe_id == recipe_id, models.Note.user_id == str(user_id))
        .order_by(models.Note.timestamp.asc(), models.Note.id.asc())
    )
    notes = list(db.scalars(stmt).all())
    logger.info("Found %d notes for recipe %s", len(notes), recipe_id)
    return notes


def _add_note(
    db: Session,
    user_id: str,
    recipe_id: int,
    content: str,
    note_type: models.NoteType,
    is_from_ai: bool,
) -> models.Note:
    note = models.Note(
        recipe_id=recipe_id,
        user_id=str(user_id),
        content=content,
        type=note_type,
        is_from_ai=is_from_ai,
    )
    db.add(note)
    db.commit()
    db.refresh(note)
    return note


def create_note(
    db: Session,
    user_id: str,
    recipe_id: int,
    content: str,
    note_type: models.NoteType,
    is_from_ai: bool = False,
) -> models.Note:
    recipes_service.get_recipe(db, user_id, recipe_id)
    return _add_note(db, user_id, recipe_id, content, note_type, is_from_ai)


def add_chat_turn(db: Session, user_id: str, recipe: models.Recipe, content: str, is_from_ai: bool) -> models.Note:
    """Append one turn to a recipe's chat log; the recipe must already be owned."""
    return _add_note(db, user_id, recipe.id, content, models.NoteType.CHAT, is_from_ai)


def delete_note(db: Session, user_id: str, note_id: int) -> None:
    stmt = select(models.Note).where(models.Note.id == note_id, models.Note.user_id == str(user_id))
    note = db.scalars(stmt).first()
    if not note:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    db.delete(note)
    db.commit()


def _delete_where(db: Session, *criteria) -> int:
    result = db.execute(delete(models.Note).where(*criteria))
    db.commit()
    return result.rowcount or 0


def clear_chat(db: Session, user_id: str, recipe_id: int) -> int:
    """Delete the chat turns for a recipe, keeping free-standing notes."""
    recipes_service.get_recipe(db, user_id, recipe_id)
    deleted = _delete_where(
        db,
        models.Note.recipe_id == recipe_id,
        models.Note.user_id == str(user_id),
        models.Note.type == models.NoteType.CHAT,
    )
    logger.info("Cleared %d chat messages for recipe %s", deleted, recipe_id)
    return deleted


def clear_all_notes(db: Session, user_id: str, recipe_id: int) -> int:
    recipes_service.get_recipe(db, user_id, recipe_id)
    deleted = _delete_where(
        db,
        models.Note.recipe_id == recipe_id,
        models.Note.user_id == str(user_id),
    )
    logger.info("Cleared %d notes and chat messages for recipe %s", deleted, recipe_id)
    return deleted
