"""Relative time phrase parsing used when the language model is unavailable."""

import calendar
from collections.abc import Callable
from datetime import datetime, timedelta, tzinfo

from app.schemas.query import ParsedTimeRange


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=999000)


def _one_month_before(moment: datetime) -> datetime:
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _last_week(now: datetime) -> tuple[datetime, datetime]:
    end = end_of_day(now)
    return start_of_day(end - timedelta(days=7)), end


def _yesterday(now: datetime) -> tuple[datetime, datetime]:
    day = now - timedelta(days=1)
    return start_of_day(day), end_of_day(day)


def _last_month(now: datetime) -> tuple[datetime, datetime]:
    end = end_of_day(now)
    return start_of_day(_one_month_before(end)), end


def _today(now: datetime) -> tuple[datetime, datetime]:
    return start_of_day(now), end_of_day(now)


# Checked in order, first match wins.
TIME_PHRASE_TABLE: list[tuple[str, Callable[[datetime], tuple[datetime, datetime]]]] = [
    ("last week", _last_week),
    ("yesterday", _yesterday),
    ("last month", _last_month),
    ("today", _today),
]

TIME_PHRASES: tuple[str, ...] = tuple(phrase for phrase, _ in TIME_PHRASE_TABLE)


def _localize(wall: datetime, zone: tzinfo | None) -> datetime:
    """Attach a zone to a wall-clock time; no zone means the system local zone."""
    if zone is None:
        return wall.astimezone()
    return wall.replace(tzinfo=zone)


def parse_relative_time(query: str, now: datetime | None = None) -> ParsedTimeRange | None:
    """
    Extract a time window from phrases like "yesterday" or "last week".

    Args:
        query: Free-text question
        now: Reference time, defaults to the current local time. Aware values
            keep their zone, naive ones are read as system local time

    Returns:
        Inclusive range in local time, or None when no phrase matches
    """
    now = now or datetime.now()
    zone = now.tzinfo
    # Day arithmetic on the wall clock; each boundary gets its own UTC offset
    wall = now.replace(tzinfo=None)
    lowered = query.lower()

    for phrase, compute in TIME_PHRASE_TABLE:
        if phrase in lowered:
            start, end = compute(wall)
            return ParsedTimeRange(
                kind="relative",
                start=_localize(start, zone),
                end=_localize(end, zone),
                phrase=phrase,
            )

    return None
