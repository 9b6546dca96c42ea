"""Shared ranking helpers for retrieval strategies."""

from collections.abc import Iterable
from dataclasses import dataclass

from app.models.note import Note


@dataclass
class RankedNote:
    """A note with the score it earned for one query. Never persisted."""

    note: Note
    score: float


def top_ranked(ranked: list[RankedNote], limit: int) -> list[RankedNote]:
    """Sort by score descending and truncate. Ties keep their input order."""
    return sorted(ranked, key=lambda item: item.score, reverse=True)[: max(limit, 0)]


def dedupe_notes(notes: Iterable[Note]) -> list[Note]:
    """Drop repeated notes by id, keeping the first occurrence."""
    seen: set[int | None] = set()
    unique = []
    for note in notes:
        if note.id in seen:
            continue
        seen.add(note.id)
        unique.append(note)
    return unique
