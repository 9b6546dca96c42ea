"""Deterministic keyword fallback for note search."""

from collections.abc import Sequence

from app.models.note import Note
from app.utils.ranking import RankedNote, top_ranked
from app.services.time_range import TIME_PHRASES

MIN_TERM_LENGTH = 3


def extract_search_terms(query: str) -> list[str]:
    """
    Lowercase the query, drop time phrases and short words.

    Repeated words are kept and each one scores separately.
    """
    text = query.lower()
    for phrase in TIME_PHRASES:
        text = text.replace(phrase, "")
    return [term for term in text.split() if len(term) >= MIN_TERM_LENGTH]


class KeywordSearchEngine:
    """Scores notes by how many query terms they contain."""

    def score(self, terms: list[str], note: Note) -> int:
        title = note.title.lower()
        content = note.content.lower()
        # One point per term, whether it hits the title, the content or both
        return sum(1 for term in terms if term in title or term in content)

    def search(self, query: str, candidates: Sequence[Note], limit: int) -> list[RankedNote]:
        """
        Rank candidates by term matches.

        Args:
            query: Raw user question
            candidates: Notes to consider, in their preferred tie-break order
            limit: Maximum results to return

        Returns:
            Notes with a score above zero, best first
        """
        terms = extract_search_terms(query)
        if not terms:
            return []

        ranked = []
        for note in candidates:
            matches = self.score(terms, note)
            if matches > 0:
                ranked.append(RankedNote(note=note, score=matches))
        return top_ranked(ranked, limit)
