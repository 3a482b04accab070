"""Pydantic schemas for calendar events."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from ward_api.db.enums import EventType


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    date: dt.date
    time: dt.time
    location: str | None = Field(None, max_length=500)
    description: str | None = None
    attendees: list[str] = Field(default_factory=list)
    type: EventType = EventType.OTHER


class EventUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    date: dt.date | None = None
    time: dt.time | None = None
    location: str | None = Field(None, max_length=500)
    description: str | None = None
    attendees: list[str] | None = None
    type: EventType | None = None


class EventRead(BaseModel):
    id: UUID
    title: str
    date: dt.date
    time: dt.time
    location: str | None
    description: str | None
    attendees: list[str]
    type: EventType
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = {"from_attributes": True}

    @field_validator("attendees", mode="before")
    @classmethod
    def _attendees_default(cls, v):
        return v or []
