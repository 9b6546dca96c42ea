"""Search and chat schemas."""

from pydantic import BaseModel, Field

from app.schemas.note import NoteResponse


class SearchRequest(BaseModel):
    """Schema for semantic search request."""

    query: str
    limit: int = Field(default=5, ge=1, le=50)


class SearchResponse(BaseModel):
    """Notes in relevance order. Scores are not exposed."""

    results: list[NoteResponse]


class ChatRequest(BaseModel):
    """Question about the user's notes."""

    question: str = Field(min_length=1)


class ChatResponse(BaseModel):
    """Answer text plus the notes it was based on."""

    answer: str
    ai_enabled: bool
    notes: list[NoteResponse]
