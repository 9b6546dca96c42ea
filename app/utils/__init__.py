"""Utility modules."""

from app.utils.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    NotewiseException,
)
from app.utils.result import FailureReason, Outcome

__all__ = [
    "AuthenticationError",
    "ConflictError",
    "NotFoundError",
    "NotewiseException",
    "FailureReason",
    "Outcome",
]
