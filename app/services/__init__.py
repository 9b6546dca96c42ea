"""Service modules for business logic."""

from app.services.chat import ChatResponder
from app.services.keyword_search import KeywordSearchEngine
from app.services.note_service import NoteService
from app.services.openai_service import OpenAIService
from app.services.query_parser import QueryParser
from app.services.retrieval import RetrievalConfig, RetrievalOrchestrator
from app.services.similarity import SimilarityRanker

__all__ = [
    "ChatResponder",
    "KeywordSearchEngine",
    "NoteService",
    "OpenAIService",
    "QueryParser",
    "RetrievalConfig",
    "RetrievalOrchestrator",
    "SimilarityRanker",
]
