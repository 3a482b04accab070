"""Pydantic schemas for LCR follow-up tasks."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from ward_api.db.enums import FollowUpTaskType


class FollowUpTaskRead(BaseModel):
    id: UUID
    type: FollowUpTaskType
    description: str
    details: dict[str, Any]
    created_by: str
    completed: bool
    completed_at: datetime | None
    completed_by: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class FollowUpTaskListResponse(BaseModel):
    items: list[FollowUpTaskRead]
    total: int
    pending: int
