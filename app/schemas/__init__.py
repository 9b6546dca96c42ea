"""Pydantic schemas for request/response validation."""

from app.schemas.auth import Token, TokenData, UserCreate, UserResponse
from app.schemas.calendar import CalendarEvent
from app.schemas.note import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate
from app.schemas.query import ParsedQuery, ParsedTimeRange
from app.schemas.search import ChatRequest, ChatResponse, SearchRequest, SearchResponse
from app.schemas.template import TemplateCreate, TemplateResponse, TemplateUpdate

__all__ = [
    "Token",
    "TokenData",
    "UserCreate",
    "UserResponse",
    "CalendarEvent",
    "NoteCreate",
    "NoteListResponse",
    "NoteResponse",
    "NoteUpdate",
    "ParsedQuery",
    "ParsedTimeRange",
    "ChatRequest",
    "ChatResponse",
    "SearchRequest",
    "SearchResponse",
    "TemplateCreate",
    "TemplateResponse",
    "TemplateUpdate",
]
