"""Template schemas."""

from datetime import datetime

from pydantic import BaseModel


class TemplateCreate(BaseModel):
    """Schema for template creation."""

    name: str
    content: str = ""


class TemplateUpdate(BaseModel):
    """Schema for template updates."""

    name: str | None = None
    content: str | None = None


class TemplateResponse(BaseModel):
    """Schema for template response."""

    id: int
    name: str
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}
