"""Explicit success/failure values for calls into optional AI features."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class FailureReason(StrEnum):
    """Why an optional enhancement produced no value."""

    CONFIG_ABSENT = "config_absent"
    PROVIDER_ERROR = "provider_error"
    PARSE_ERROR = "parse_error"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value or a failure reason, never both."""

    value: T | None = None
    failure: FailureReason | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, reason: FailureReason, detail: str | None = None) -> "Outcome[T]":
        return cls(failure=reason, detail=detail)
