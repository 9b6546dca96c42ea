"""Datetime utility functions."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


def local_now() -> datetime:
    """Return the current local time as an aware datetime."""
    return datetime.now().astimezone()


def ensure_aware(value: datetime) -> datetime:
    """
    Attach a timezone to a datetime.

    Naive values are interpreted as local time.
    """
    if value.tzinfo is None:
        return value.astimezone()
    return value


def to_storage(value: datetime) -> datetime:
    """
    Convert a datetime to UTC for comparison against stored timestamps.

    The value stays timezone-aware; datetime columns reject naive bind values.
    """
    return ensure_aware(value).astimezone(UTC)


def from_storage(value: datetime) -> datetime:
    """Interpret a stored timestamp as an aware UTC datetime; naive values are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
