"""Note schemas."""

from datetime import datetime

from pydantic import BaseModel


class NoteCreate(BaseModel):
    """Schema for creating a blank note or one based on a template."""

    title: str | None = None
    content: str | None = None
    template_id: int | None = None


class NoteUpdate(BaseModel):
    """Schema for note updates."""

    title: str | None = None
    content: str | None = None


class NoteResponse(BaseModel):
    """Schema for note response."""

    id: int
    title: str
    content: str
    template_id: int | None
    has_embedding: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_note(cls, note) -> "NoteResponse":
        """Build a response from a Note, exposing only whether an embedding exists."""
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            template_id=note.template_id,
            has_embedding=note.embedding is not None,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class NoteListResponse(BaseModel):
    """Schema for paginated note list."""

    notes: list[NoteResponse]
    total: int
