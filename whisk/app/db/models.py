from datetime import datetime
import enum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from whisk.app.db.base import Base


class ParsingMethod(str, enum.Enum):
    JSON_LD = "JSON-LD"
    AI = "AI"
    MANUAL_AI = "Manual + AI"
    MANUAL = "Manual"


class NoteType(str, enum.Enum):
    CHAT = "chat"
    NOTE = "note"


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    image = Column(String, nullable=False, default="")
    description = Column(Text)
    cook_time = Column(String, nullable=False, default="")
    prep_time = Column(String, nullable=False, default="")
    total_time = Column(String, nullable=False, default="")
    category = Column(JSON, nullable=False, default=list)
    cuisine = Column(JSON, nullable=False, default=list)
    ingredients = Column(JSON, nullable=False)
    instructions = Column(JSON, nullable=False)
    recipe_yield = Column("yield", String, nullable=False, default="")
    source_url = Column(String)
    parsing_method = Column(
        Enum(ParsingMethod, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ParsingMethod.MANUAL,
    )
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    notes = relationship(
        "Note",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="Note.timestamp",
    )


class Note(Base):
    __tablename__ = "notes"
    __table_args__ = (Index("ix_notes_recipe_user", "recipe_id", "user_id"),)

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, nullable=False, index=True)
    content = Column(Text, nullable=False)
    type = Column(
        Enum(NoteType, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    is_from_ai = Column(Boolean, nullable=False, default=False)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)

    recipe = relationship("Recipe", back_populates="notes")
