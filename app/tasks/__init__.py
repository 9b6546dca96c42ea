"""Background tasks module."""

from app.tasks.embedding_tasks import refresh_note_embedding

__all__ = ["refresh_note_embedding"]
