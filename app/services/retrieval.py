"""Question-to-notes retrieval with graceful degradation to keyword search."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from app.config import Settings
from app.models.note import Note
from app.repositories.note_repository import NoteRepository
from app.schemas.query import ParsedQuery, ParsedTimeRange
from app.services.keyword_search import KeywordSearchEngine
from app.services.openai_service import OpenAIService
from app.services.query_parser import QueryParser
from app.services.similarity import DEFAULT_SIMILARITY_THRESHOLD, SimilarityRanker
from app.services.time_range import parse_relative_time
from app.utils.ranking import RankedNote

logger = logging.getLogger(__name__)

RetrievalMode = Literal["keyword", "semantic", "failed"]


@dataclass(frozen=True)
class RetrievalConfig:
    """Retrieval behaviour fixed at startup."""

    ai_enabled: bool
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    strategy: Literal["local", "database"] = "local"

    @classmethod
    def from_settings(cls, config: Settings) -> "RetrievalConfig":
        return cls(
            ai_enabled=config.ai_enabled,
            similarity_threshold=config.similarity_threshold,
            strategy=config.retrieval_strategy,
        )


@dataclass
class RetrievalResult:
    """Ranked notes plus what was learned about the question along the way."""

    ranked: list[RankedNote] = field(default_factory=list)
    parsed_query: ParsedQuery | None = None
    time_range: ParsedTimeRange | None = None
    mode: RetrievalMode = "keyword"

    @property
    def notes(self) -> list[Note]:
        return [item.note for item in self.ranked]


class RetrievalOrchestrator:
    """
    Entry point for finding the notes relevant to a question.

    With AI disabled the pipeline is purely local: phrase-based time
    filtering followed by keyword scoring. With AI enabled the question is
    analysed by the chat model, embedded, and ranked by similarity; if no
    embedding can be produced the keyword path runs over the same candidates.
    """

    def __init__(
        self,
        repository: NoteRepository,
        config: RetrievalConfig,
        provider: OpenAIService | None = None,
        query_parser: QueryParser | None = None,
        keyword_engine: KeywordSearchEngine | None = None,
        ranker: SimilarityRanker | None = None,
    ):
        self.repository = repository
        self.config = config
        self.provider = provider
        self.query_parser = query_parser or QueryParser(provider, config.ai_enabled)
        self.keyword_engine = keyword_engine or KeywordSearchEngine()
        self.ranker = ranker or SimilarityRanker()

    async def find_similar_notes(
        self, query: str, owner_id: int, limit: int = 5
    ) -> list[Note]:
        """
        Notes of one owner most relevant to the query, best first.

        Never raises; any failure yields an empty list.
        """
        result = await self.retrieve(query, owner_id, limit)
        return result.notes

    async def retrieve(
        self,
        query: str,
        owner_id: int,
        limit: int = 5,
        now: datetime | None = None,
    ) -> RetrievalResult:
        """
        Run the full retrieval pipeline and keep the intermediate analysis.

        Args:
            query: Raw user question
            owner_id: Only this user's notes are considered
            limit: Maximum results to return
            now: Reference time for relative phrases

        Returns:
            RetrievalResult, empty with mode "failed" on unexpected errors
        """
        try:
            return await self._retrieve(query, owner_id, limit, now)
        except Exception as e:
            logger.exception(f"Error in find_similar_notes for user {owner_id}: {e}")
            return RetrievalResult(mode="failed")

    async def _retrieve(
        self, query: str, owner_id: int, limit: int, now: datetime | None
    ) -> RetrievalResult:
        provider = self.provider if self.config.ai_enabled else None
        ai_enabled = provider is not None

        parsed_query = None
        if ai_enabled:
            parsed = await self.query_parser.parse(query, now)
            if parsed.ok:
                parsed_query = parsed.value
            else:
                logger.warning(f"Query analysis unavailable ({parsed.failure}): {parsed.detail}")

        time_range = parsed_query.time_range if parsed_query else None
        if time_range is None and not ai_enabled:
            time_range = parse_relative_time(query, now)

        start = time_range.start if time_range else None
        end = time_range.end if time_range else None
        result = RetrievalResult(parsed_query=parsed_query, time_range=time_range)

        if provider is None:
            candidates = self.repository.list_for_owner(owner_id, start, end)
            result.ranked = self.keyword_engine.search(query, candidates, limit)
            return result

        embed_text = " ".join(parsed_query.topics) if parsed_query else query
        embedding = await provider.generate_embedding(embed_text)

        if not embedding.ok or embedding.value is None:
            logger.warning(
                f"Failed to generate embedding for query ({embedding.failure}), "
                "falling back to text search"
            )
            candidates = self.repository.list_for_owner(owner_id, start, end)
            result.ranked = self.keyword_engine.search(query, candidates, limit)
            return result

        result.mode = "semantic"
        if self.config.strategy == "database":
            result.ranked = self.repository.match_notes(
                embedding.value,
                self.config.similarity_threshold,
                limit,
                owner_id,
                start,
                end,
            )
        else:
            candidates = self.repository.list_for_owner(owner_id, start, end)
            result.ranked = self.ranker.rank(
                embedding.value, candidates, self.config.similarity_threshold, limit
            )

        logger.info(f"Semantic search found {len(result.ranked)} results")
        return result
