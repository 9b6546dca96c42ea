"""Shared test helpers."""

from datetime import datetime

import numpy as np
from sqlmodel import Session

from app.models import Note
from app.utils.result import FailureReason, Outcome
from app.utils.vector import serialize_vector


def unit(*components: float) -> list[float]:
    """Normalize a vector so 1 - L2^2/2 equals cosine similarity."""
    vector = np.array(components, dtype=np.float64)
    return (vector / np.linalg.norm(vector)).tolist()


def vector_with_similarity(similarity: float) -> list[float]:
    """2-D unit vector whose similarity to (1, 0) is the given value."""
    return [similarity, float(np.sqrt(1.0 - similarity**2))]


def make_note(
    session: Session,
    user_id: int,
    title: str,
    content: str = "",
    embedding: list[float] | None = None,
    updated_at: datetime | None = None,
) -> Note:
    """Persist a note directly, bypassing the service layer."""
    note = Note(
        user_id=user_id,
        title=title,
        content=content,
        embedding=serialize_vector(embedding) if embedding is not None else None,
    )
    if updated_at is not None:
        note.updated_at = updated_at
    session.add(note)
    session.commit()
    session.refresh(note)
    return note


class FakeProvider:
    """Stand-in for OpenAIService that records every call."""

    def __init__(
        self,
        embeddings: dict[str, list[float]] | None = None,
        default_embedding: list[float] | None = None,
        embedding_failure: FailureReason | None = None,
        query_reply: str | None = None,
        chat_reply: str = "Here is what your notes say.",
        chat_failure: FailureReason | None = None,
    ):
        self.embeddings = embeddings or {}
        self.default_embedding = default_embedding
        self.embedding_failure = embedding_failure
        self.query_reply = query_reply
        self.chat_reply = chat_reply
        self.chat_failure = chat_failure
        self.embed_calls: list[str] = []
        self.chat_calls: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.embed_calls) + len(self.chat_calls)

    async def generate_embedding(self, text: str) -> Outcome[list[float]]:
        self.embed_calls.append(text)
        if self.embedding_failure:
            return Outcome.failed(self.embedding_failure, "fake failure")
        if text in self.embeddings:
            return Outcome.success(self.embeddings[text])
        if self.default_embedding is not None:
            return Outcome.success(self.default_embedding)
        return Outcome.failed(FailureReason.PROVIDER_ERROR, "no fake embedding")

    async def generate_chat_response(
        self, prompt: str, system_prompt: str | None = None, response_format: dict | None = None
    ) -> Outcome[str]:
        self.chat_calls.append(prompt)
        if response_format is not None:
            # Structured query analysis
            if self.query_reply is None:
                return Outcome.failed(FailureReason.PROVIDER_ERROR, "no fake analysis")
            return Outcome.success(self.query_reply)
        if self.chat_failure:
            return Outcome.failed(self.chat_failure, "fake failure")
        return Outcome.success(self.chat_reply)


