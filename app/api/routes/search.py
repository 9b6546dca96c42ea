"""Search and chat endpoints."""

import logging

from fastapi import APIRouter

from app.api.deps import ChatResponderDep, CurrentUserIdDep, OrchestratorDep
from app.schemas.note import NoteResponse
from app.schemas.search import ChatRequest, ChatResponse, SearchRequest, SearchResponse
from app.utils.exceptions import ConflictError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["search"])

# Users with a chat request in flight
_active_chats: set[int] = set()


@router.post("/search", response_model=SearchResponse)
async def semantic_search(
    request: SearchRequest,
    user_id: CurrentUserIdDep,
    orchestrator: OrchestratorDep,
) -> SearchResponse:
    """
    Find the notes most relevant to a question.

    Uses embeddings when AI is configured, keyword matching otherwise.
    """
    notes = await orchestrator.find_similar_notes(request.query, user_id, request.limit)
    return SearchResponse(results=[NoteResponse.from_note(n) for n in notes])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    user_id: CurrentUserIdDep,
    responder: ChatResponderDep,
) -> ChatResponse:
    """
    Answer a question using the user's notes as context.

    Only one chat request per user may run at a time.
    """
    if user_id in _active_chats:
        logger.warning(f"Rejected concurrent chat request for user {user_id}")
        raise ConflictError("A chat request is already in progress").to_http_exception()

    _active_chats.add(user_id)
    try:
        answer = await responder.respond(request.question, user_id)
    finally:
        _active_chats.discard(user_id)

    return ChatResponse(
        answer=answer.text,
        ai_enabled=answer.ai_enabled,
        notes=[NoteResponse.from_note(n) for n in answer.notes],
    )
