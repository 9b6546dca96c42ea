"""Structured query intent extracted from a user question."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from app.utils.datetime import ensure_aware


class ParsedTimeRange(BaseModel):
    """Inclusive time window referenced by a question."""

    kind: Literal["relative", "absolute"] = "absolute"
    start: datetime
    end: datetime
    phrase: str | None = None

    @field_validator("start", "end")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @model_validator(mode="after")
    def _ordered(self) -> "ParsedTimeRange":
        if self.start > self.end:
            raise ValueError("time range start must not be after end")
        return self


class ParsedQuery(BaseModel):
    """Intent of one question. Lives for a single retrieval call."""

    topics: list[str] = Field(min_length=1)
    time_range: ParsedTimeRange | None = None
    action: str | None = None
    content_type: str | None = None
