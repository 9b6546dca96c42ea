"""Keeps stored note embeddings in step with note content."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.models.note import Note
from app.repositories.note_repository import NoteRepository
from app.services.openai_service import OpenAIService

logger = logging.getLogger(__name__)


def note_embedding_text(note: Note) -> str:
    """Title and content combined for better semantic search."""
    return f"{note.title}\n\n{note.content}"


async def update_note_embedding(
    session: Session,
    note: Note,
    provider: OpenAIService | None,
    ai_enabled: bool,
) -> bool:
    """
    Generate and store the embedding for a note.

    Failures are logged and leave the note without an embedding.

    Args:
        session: Database session the note belongs to
        note: Note to embed
        provider: Embedding provider
        ai_enabled: Process-wide AI capability flag

    Returns:
        True if a new embedding was stored
    """
    if not ai_enabled or provider is None:
        logger.warning("Skipping note embedding update: AI chat is disabled")
        return False

    text = note_embedding_text(note)
    outcome = await provider.generate_embedding(text)
    if not outcome.ok or outcome.value is None:
        logger.warning(f"No embedding generated for note {note.id}: {outcome.failure}")
        return False

    try:
        session.refresh(note)
        if note_embedding_text(note) != text:
            # Edited while we were embedding; the newer edit schedules its own refresh
            logger.info(f"Note {note.id} changed during embedding, discarding result")
            return False
        NoteRepository(session).save_embedding(note, outcome.value)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error updating note embedding for note {note.id}: {e}")
        return False

    logger.info(f"Updated embedding for note {note.id}")
    return True
