"""Request bodies accepted by the events service."""

from datetime import datetime

from pydantic import Field

from backend.validation import RequestModel


class CreateEventRequest(RequestModel):
    user_id: int = Field(alias="userId", strict=True)
    event_name: str = Field(min_length=1, alias="eventName")
    venue: str = Field(min_length=1)
    # ISO-8601, e.g. "2025-05-01T10:00:00Z" or "2025-05-01T10:00"
    date_time: datetime = Field(alias="dateTime")
