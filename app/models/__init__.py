"""Database models."""

from app.models.note import Note
from app.models.template import Template
from app.models.user import User

__all__ = ["User", "Note", "Template"]
