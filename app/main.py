"""Notewise API - Main Application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes.auth import router as auth_router
from app.api.routes.notes import router as notes_router
from app.api.routes.search import router as search_router
from app.config import settings
from app.database import create_db_and_tables
from app.services.openai_service import get_openai_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    create_db_and_tables()

    # One provider per process; absent when no API key is configured
    _app.state.openai_service = get_openai_service() if settings.ai_enabled else None
    logger.info(f"AI features enabled: {settings.ai_enabled}")

    yield

    if _app.state.openai_service is not None:
        await _app.state.openai_service.aclose()
    _app.state.openai_service = None


app = FastAPI(
    title=settings.app_name,
    description="A note-taking service with semantic search and chat over your notes",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(auth_router)
app.include_router(notes_router)
app.include_router(search_router)


@app.get("/health")
async def health_check(request: Request) -> dict:
    """
    System health check.

    Returns status of the application and its dependencies.
    """
    provider = getattr(request.app.state, "openai_service", None)
    provider_connected = await provider.check_connection() if provider else False

    # Database is connected if we reached this point
    db_connected = True

    return {
        "status": "ok",
        "ai_enabled": provider is not None,
        "provider_connected": provider_connected,
        "db_connected": db_connected,
    }
