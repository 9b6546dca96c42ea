"""Structured intent extraction from free-text questions."""

import logging
from datetime import datetime

from pydantic import ValidationError

from app.schemas.query import ParsedQuery
from app.services.openai_service import OpenAIService
from app.utils.datetime import local_now
from app.utils.result import FailureReason, Outcome

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You extract search intent from questions about a user's personal notes. "
    "You MUST respond ONLY with a valid JSON object."
)

PARSED_QUERY_SCHEMA = {
    "type": "json_schema",
    "json_schema": {
        "name": "parsed_query",
        "schema": {
            "type": "object",
            "properties": {
                "topics": {"type": "array", "items": {"type": "string"}, "minItems": 1},
                "time_range": {
                    "type": ["object", "null"],
                    "properties": {
                        "kind": {"type": "string", "enum": ["relative", "absolute"]},
                        "start": {"type": "string"},
                        "end": {"type": "string"},
                        "phrase": {"type": ["string", "null"]},
                    },
                    "required": ["start", "end"],
                },
                "action": {"type": ["string", "null"]},
                "content_type": {"type": ["string", "null"]},
            },
            "required": ["topics"],
        },
    },
}


def _strip_code_fence(content: str) -> str:
    # Some models wrap the JSON in markdown code blocks
    if "```json" in content:
        return content.split("```json")[1].split("```")[0].strip()
    if "```" in content:
        return content.split("```")[1].split("```")[0].strip()
    return content.strip()


class QueryParser:
    """Turns a question into a ParsedQuery using the chat model."""

    def __init__(self, provider: OpenAIService | None, ai_enabled: bool):
        self.provider = provider
        self.ai_enabled = ai_enabled

    def _build_prompt(self, query: str, now: datetime) -> str:
        return f"""Current local time: {now.isoformat()}

Analyze this question about the user's notes and extract:
1. topics: the subjects to search for (at least one short phrase)
2. time_range: if the question refers to a period, its inclusive start and end as ISO 8601 timestamps with offset, the matched phrase, and kind "relative" or "absolute"; otherwise null
3. action: what the user wants done (e.g. "summarize", "list", "find"), or null
4. content_type: the kind of note referenced (e.g. "meeting", "todo"), or null

Question: {query}"""

    async def parse(self, query: str, now: datetime | None = None) -> Outcome[ParsedQuery]:
        """
        Extract structured intent from a question.

        Args:
            query: Raw user question
            now: Reference time for relative expressions

        Returns:
            Outcome with the ParsedQuery, or why it could not be produced
        """
        if not self.ai_enabled or self.provider is None:
            return Outcome.failed(FailureReason.CONFIG_ABSENT, "AI features are disabled")

        outcome = await self.provider.generate_chat_response(
            self._build_prompt(query, now or local_now()),
            system_prompt=SYSTEM_PROMPT,
            response_format=PARSED_QUERY_SCHEMA,
        )
        if not outcome.ok:
            return Outcome.failed(outcome.failure, outcome.detail)

        try:
            parsed = ParsedQuery.model_validate_json(_strip_code_fence(outcome.value or ""))
        except ValidationError as e:
            logger.warning(f"Failed to parse query analysis: {e}")
            return Outcome.failed(FailureReason.PARSE_ERROR, str(e))

        logger.info(f"Parsed query topics={parsed.topics} time_range={parsed.time_range}")
        return Outcome.success(parsed)
