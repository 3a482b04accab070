"""Pydantic schemas for ward members."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from ward_api.db.enums import MemberStatus


class MemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)
    status: MemberStatus = MemberStatus.ACTIVE
    skills: list[str] = Field(default_factory=list)
    fhe_group_id: UUID | None = None
    notes: str | None = None


class MemberUpdate(BaseModel):
    """Partial update; explicit nulls clear optional fields."""
    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)
    status: MemberStatus | None = None
    skills: list[str] | None = None
    fhe_group_id: UUID | None = None
    notes: str | None = None


class GroupRef(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}


class CallingRef(BaseModel):
    id: UUID
    title: str
    organization: str

    model_config = {"from_attributes": True}


class MemberRead(BaseModel):
    id: UUID
    name: str
    email: str | None
    phone: str | None
    address: str | None
    status: MemberStatus
    skills: list[str]
    fhe_group_id: UUID | None
    fhe_group: GroupRef | None = None
    callings: list[CallingRef] = []
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("skills", mode="before")
    @classmethod
    def _skills_default(cls, v):
        return v or []


class MemberListResponse(BaseModel):
    items: list[MemberRead]
    total: int
