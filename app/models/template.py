"""Template model."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from app.utils.datetime import utc_now


class Template(SQLModel, table=True):  # type: ignore
    """Reusable note body."""

    __tablename__ = "templates"  # type: ignore

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    name: str
    content: str = Field(default="")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
