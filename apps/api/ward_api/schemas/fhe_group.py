"""Pydantic schemas for FHE groups."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class FheGroupCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    leader_id: UUID | None = None
    location: str | None = Field(None, max_length=500)
    meeting_time: str | None = Field(None, max_length=100)


class FheGroupUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    leader_id: UUID | None = None
    location: str | None = Field(None, max_length=500)
    meeting_time: str | None = Field(None, max_length=100)


class GroupMemberAssign(BaseModel):
    member_id: UUID


class GroupMemberRead(BaseModel):
    id: UUID
    name: str
    email: str | None
    phone: str | None

    model_config = {"from_attributes": True}


class LeaderRead(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}


class FheGroupRead(BaseModel):
    id: UUID
    name: str
    leader_id: UUID | None
    leader: LeaderRead | None = None
    location: str | None
    meeting_time: str | None
    activity_image: str | None
    members: list[GroupMemberRead] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
