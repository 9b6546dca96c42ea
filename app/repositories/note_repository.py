"""Owner-scoped note queries used by retrieval."""

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import Float, case
from sqlmodel import Session, func, select

from app.models.note import Note
from app.utils.ranking import RankedNote
from app.utils.datetime import to_storage
from app.utils.vector import serialize_vector


class NoteRepository:
    """Read access to a single user's notes plus embedding write-back."""

    def __init__(self, session: Session):
        self.session = session

    def list_for_owner(
        self,
        owner_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Note]:
        """
        Notes of one owner, newest update first.

        Args:
            owner_id: Owner user ID
            start: Inclusive lower bound on updated_at
            end: Inclusive upper bound on updated_at

        Returns:
            List of notes
        """
        statement = select(Note).where(Note.user_id == owner_id)
        if start is not None:
            statement = statement.where(Note.updated_at >= to_storage(start))
        if end is not None:
            statement = statement.where(Note.updated_at <= to_storage(end))
        statement = statement.order_by(
            Note.updated_at.desc(),  # type: ignore[attr-defined]
            Note.id.desc(),  # type: ignore[union-attr]
        )
        return list(self.session.exec(statement).all())

    def match_notes(
        self,
        query_embedding: Sequence[float],
        match_threshold: float,
        match_count: int,
        owner_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[RankedNote]:
        """
        Nearest-neighbour search executed by sqlite-vec.

        Uses the same similarity as SimilarityRanker, 1 - L2^2 / 2, and returns
        notes above the threshold ordered by descending similarity.
        Requires the sqlite-vec extension on the session's connection.
        """
        query_blob = serialize_vector(list(query_embedding))
        # vec_distance_l2 raises on a dimension mismatch
        same_size = func.length(Note.embedding) == len(query_blob)
        distance = case(
            (same_size, func.vec_distance_l2(Note.embedding, query_blob, type_=Float)),
            else_=None,
        )
        similarity = 1.0 - (distance * distance) / 2.0

        statement = select(Note, similarity.label("similarity")).where(
            Note.user_id == owner_id,
            Note.embedding.is_not(None),  # type: ignore[union-attr]
            same_size,
            similarity > match_threshold,
        )
        if start is not None:
            statement = statement.where(Note.updated_at >= to_storage(start))
        if end is not None:
            statement = statement.where(Note.updated_at <= to_storage(end))
        statement = statement.order_by(
            similarity.desc(),
            Note.updated_at.desc(),  # type: ignore[attr-defined]
            Note.id.desc(),  # type: ignore[union-attr]
        ).limit(match_count)

        rows = self.session.exec(statement).all()
        return [RankedNote(note=note, score=float(score)) for note, score in rows]

    def save_embedding(self, note: Note, embedding: Sequence[float]) -> Note:
        """Store a freshly computed embedding without touching updated_at."""
        note.embedding = serialize_vector(list(embedding))
        self.session.add(note)
        self.session.commit()
        self.session.refresh(note)
        return note
