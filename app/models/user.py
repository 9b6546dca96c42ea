"""User model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship, SQLModel

from app.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.models.note import Note


class User(SQLModel, table=True):
    """User account model."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=utc_now)

    # Long-lived API token for scripts and integrations
    api_token: str | None = Field(default=None, unique=True, index=True)

    # Relationships
    notes: list["Note"] = Relationship(back_populates="user")
