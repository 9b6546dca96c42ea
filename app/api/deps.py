"""API dependencies for dependency injection."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from app.config import settings
from app.database import get_session
from app.models.user import User
from app.repositories.note_repository import NoteRepository
from app.services.auth_service import resolve_token
from app.services.chat import ChatResponder
from app.services.openai_service import OpenAIService
from app.services.retrieval import RetrievalConfig, RetrievalOrchestrator

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """Get database session dependency."""
    yield from get_session()


SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    session: SessionDep,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    request: Request,
) -> User:
    """
    Get the current authenticated user.

    Accepts a JWT or long-lived API token as a Bearer header, or a JWT in
    the 'access_token' cookie.

    Raises:
        HTTPException: If authentication fails
    """
    for candidate in (token, request.cookies.get("access_token")):
        if not candidate:
            continue
        user = resolve_token(session, candidate)
        if user:
            return user

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_current_user_id(current_user: CurrentUserDep) -> int:
    """Get the current user's ID, asserting it's not None."""
    assert current_user.id is not None
    return current_user.id


CurrentUserIdDep = Annotated[int, Depends(get_current_user_id)]


def get_openai_service(request: Request) -> OpenAIService | None:
    """Provider created once at startup, or None when AI is disabled."""
    return getattr(request.app.state, "openai_service", None)


OpenAIServiceDep = Annotated[OpenAIService | None, Depends(get_openai_service)]


def get_retrieval_config() -> RetrievalConfig:
    return RetrievalConfig.from_settings(settings)


RetrievalConfigDep = Annotated[RetrievalConfig, Depends(get_retrieval_config)]


def get_orchestrator(
    session: SessionDep,
    config: RetrievalConfigDep,
    provider: OpenAIServiceDep,
) -> RetrievalOrchestrator:
    """Retrieval pipeline bound to the request's session."""
    return RetrievalOrchestrator(NoteRepository(session), config, provider)


OrchestratorDep = Annotated[RetrievalOrchestrator, Depends(get_orchestrator)]


def get_chat_responder(
    orchestrator: OrchestratorDep,
    config: RetrievalConfigDep,
    provider: OpenAIServiceDep,
) -> ChatResponder:
    return ChatResponder(
        orchestrator, provider, config.ai_enabled, limit=settings.default_search_limit
    )


ChatResponderDep = Annotated[ChatResponder, Depends(get_chat_responder)]
