"""Note model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, Index, LargeBinary
from sqlmodel import Field, Relationship, SQLModel

from app.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.models.user import User


class Note(SQLModel, table=True):  # type: ignore
    """Rich-text note owned by a single user."""

    __tablename__ = "notes"  # type: ignore

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)

    # Content (HTML from the editor)
    title: str = Field(default="Untitled Note")
    content: str = Field(default="")
    template_id: int | None = Field(default=None, foreign_key="templates.id")

    # Vector embedding of title + content (float32 BLOB), cleared on edit
    embedding: bytes | None = Field(default=None, sa_column=Column(LargeBinary))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, index=True)

    # Relationships
    user: "User" = Relationship(back_populates="notes")

    __table_args__ = (Index("ix_notes_user_updated", "user_id", "updated_at"),)
