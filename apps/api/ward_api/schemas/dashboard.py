"""Pydantic schemas for dashboard statistics."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel


class RecentActivity(BaseModel):
    id: UUID
    kind: Literal["survey", "task"]
    description: str
    occurred_at: datetime


class DashboardStats(BaseModel):
    total_members: int
    open_callings: int
    members_needing_callings: int
    pending_tasks: int
    recent_activity: list[RecentActivity]
