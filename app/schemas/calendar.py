"""Calendar event payload accepted for meeting notes."""

from datetime import datetime

from pydantic import BaseModel, Field


class EventTime(BaseModel):
    date_time: datetime = Field(alias="dateTime")
    time_zone: str | None = Field(default=None, alias="timeZone")


class EventAttendee(BaseModel):
    email: str
    display_name: str | None = Field(default=None, alias="displayName")
    response_status: str | None = Field(default=None, alias="responseStatus")


class CalendarEvent(BaseModel):
    """Event as returned by the Google Calendar events API."""

    id: str
    summary: str
    description: str | None = None
    start: EventTime
    end: EventTime
    attendees: list[EventAttendee] = []
