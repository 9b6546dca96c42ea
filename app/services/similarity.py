"""Embedding similarity ranking."""

import logging
from collections.abc import Sequence

import numpy as np

from app.models.note import Note
from app.utils.ranking import RankedNote, top_ranked
from app.utils.vector import deserialize_vector

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.5


def embedding_similarity(query: np.ndarray, candidate: np.ndarray) -> float:
    """
    Similarity of two unit vectors: 1 - squared euclidean distance / 2.

    For normalized embeddings this equals cosine similarity.
    """
    diff = candidate.astype(np.float64) - query.astype(np.float64)
    return float(1.0 - np.sum(diff * diff) / 2.0)


class SimilarityRanker:
    """Ranks notes by their stored embedding against a query vector."""

    def rank(
        self,
        query_vector: Sequence[float] | np.ndarray,
        candidates: Sequence[Note],
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        limit: int = 5,
    ) -> list[RankedNote]:
        """
        Score candidates and keep those above the threshold.

        Notes without an embedding, or with one of another dimension, are skipped.
        """
        query = np.asarray(query_vector, dtype=np.float64)
        ranked = []
        skipped = 0

        for note in candidates:
            if not note.embedding:
                continue
            vector = deserialize_vector(note.embedding)
            if vector.shape != query.shape:
                skipped += 1
                continue
            similarity = embedding_similarity(query, vector)
            if similarity > threshold:
                ranked.append(RankedNote(note=note, score=similarity))

        if skipped:
            logger.warning(f"Skipped {skipped} notes with mismatched embedding size")
        return top_ranked(ranked, limit)
