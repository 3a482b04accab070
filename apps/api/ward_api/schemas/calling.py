"""Pydantic schemas for callings."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ward_api.db.enums import CallingStatus
from ward_api.schemas.task import FollowUpTaskRead


class CallingCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    organization: str = Field(..., min_length=1, max_length=255)
    status: CallingStatus = CallingStatus.VACANT
    member_id: UUID | None = None
    sustained_date: date | None = None
    is_set_apart: bool = False
    notes: str | None = None


class CallingUpdate(BaseModel):
    """Edit-form submission (partial); sustained/set-apart changes enqueue LCR tasks."""
    title: str | None = Field(None, min_length=1, max_length=255)
    organization: str | None = Field(None, min_length=1, max_length=255)
    status: CallingStatus | None = None
    member_id: UUID | None = None
    sustained_date: date | None = None
    is_set_apart: bool | None = None
    notes: str | None = None


class CallingAssign(BaseModel):
    member_id: UUID


class MemberRef(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}


class CallingRead(BaseModel):
    id: UUID
    title: str
    organization: str
    status: CallingStatus
    member_id: UUID | None
    member: MemberRef | None = None
    sustained_date: date | None
    is_set_apart: bool
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CallingChangeResponse(BaseModel):
    """Calling after a change plus any LCR update tasks it enqueued."""
    calling: CallingRead
    tasks_created: list[FollowUpTaskRead]
