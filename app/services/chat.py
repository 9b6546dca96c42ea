"""Answers questions about a user's notes."""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime

from app.models.note import Note
from app.schemas.query import ParsedQuery
from app.services.openai_service import OpenAIService
from app.services.retrieval import RetrievalOrchestrator
from app.utils.datetime import from_storage, local_now
from app.utils.ranking import dedupe_notes

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = (
    "Sorry, there was an error processing your request. Please try again later."
)
EMPTY_RESPONSE = "No response generated"
NO_MATCHES_RESPONSE = "I couldn't find any notes related to your question."
BASIC_MODE_HEADER = "AI chat is disabled. These notes match your question:"


def describe_relative_date(moment: datetime, now: datetime | None = None) -> str:
    """
    Human wording for how long ago a note was updated.

    Args:
        moment: Stored timestamp (naive values are UTC)
        now: Reference time, defaults to current local time

    Returns:
        "today", "yesterday", "N days ago", "last week", "last month" or a date
    """
    now = now or local_now()
    local_moment = from_storage(moment).astimezone(now.tzinfo)
    days = (now.date() - local_moment.date()).days

    if days <= 0:
        return "today"
    if days == 1:
        return "yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 14:
        return "last week"
    if days < 30:
        return f"{days} days ago"
    if days < 60:
        return "last month"
    return local_moment.strftime("%Y-%m-%d")


def build_chat_prompt(
    question: str,
    notes: list[Note],
    parsed_query: ParsedQuery | None = None,
    now: datetime | None = None,
) -> str:
    """Prompt with every note's title, age and content, then the question."""
    context_parts = []
    for i, note in enumerate(notes, 1):
        updated = describe_relative_date(note.updated_at, now)
        context_parts.append(
            f"Note {i}: {note.title} (updated {updated})\n{note.content}"
        )
    context = "\n\n---\n\n".join(context_parts) or "No relevant notes were found."

    analysis = ""
    if parsed_query is not None:
        analysis = (
            "\nQuery analysis (JSON):\n"
            f"{json.dumps(parsed_query.model_dump(mode='json'), indent=2)}\n"
        )

    return f"""You are a helpful assistant answering questions based on the user's personal notes.
Use the following notes as context to answer the question. If the answer cannot be found in the notes, say so.

Context Notes:
{context}
{analysis}
Question: {question}

Answer:"""


@dataclass
class ChatAnswer:
    text: str
    ai_enabled: bool
    notes: list[Note] = field(default_factory=list)


class ChatResponder:
    """Retrieves context notes and turns them into an answer."""

    def __init__(
        self,
        orchestrator: RetrievalOrchestrator,
        provider: OpenAIService | None,
        ai_enabled: bool,
        limit: int = 5,
    ):
        self.orchestrator = orchestrator
        self.provider = provider
        self.ai_enabled = ai_enabled and provider is not None
        self.limit = limit

    def _basic_answer(self, notes: list[Note]) -> str:
        if not notes:
            return NO_MATCHES_RESPONSE
        lines = [f"- {note.title}" for note in notes]
        return "\n".join([BASIC_MODE_HEADER, *lines])

    async def respond(
        self, question: str, owner_id: int, now: datetime | None = None
    ) -> ChatAnswer:
        """
        Answer a question from the owner's notes.

        Always returns some text: the model's answer, the error fallback, or
        a plain listing of matching notes when AI is disabled.
        """
        result = await self.orchestrator.retrieve(question, owner_id, self.limit, now)
        notes = dedupe_notes(result.notes)

        provider = self.provider if self.ai_enabled else None
        if provider is None:
            return ChatAnswer(text=self._basic_answer(notes), ai_enabled=False, notes=notes)

        try:
            prompt = build_chat_prompt(question, notes, result.parsed_query, now)
            outcome = await provider.generate_chat_response(prompt)
        except Exception as e:
            logger.exception(f"Error building chat response: {e}")
            return ChatAnswer(text=FALLBACK_RESPONSE, ai_enabled=True, notes=notes)

        if not outcome.ok:
            logger.error(f"Chat completion failed ({outcome.failure}): {outcome.detail}")
            return ChatAnswer(text=FALLBACK_RESPONSE, ai_enabled=True, notes=notes)

        text = (outcome.value or "").strip() or EMPTY_RESPONSE
        return ChatAnswer(text=text, ai_enabled=True, notes=notes)
