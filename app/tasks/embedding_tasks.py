"""Background embedding refresh for notes."""

import logging

from sqlmodel import Session

from app.database import engine
from app.models.note import Note
from app.services.embeddings import update_note_embedding
from app.services.openai_service import OpenAIService

logger = logging.getLogger(__name__)


async def refresh_note_embedding(
    note_id: int, provider: OpenAIService | None, ai_enabled: bool
) -> None:
    """
    Regenerate a note's embedding after it was created or edited.
    """
    if not ai_enabled:
        return

    with Session(engine) as session:
        note = session.get(Note, note_id)
        if not note:
            logger.error(f"Note {note_id} not found for embedding refresh")
            return
        await update_note_embedding(session, note, provider, ai_enabled)
