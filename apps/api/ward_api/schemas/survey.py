"""Pydantic schemas for the new member survey."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ward_api.schemas.member import MemberRead
from ward_api.schemas.task import FollowUpTaskRead


class SurveySubmission(BaseModel):
    """Intake form payload. Only the name is required."""
    full_name: str = Field(..., min_length=1, max_length=255)
    record_number: str | None = Field(None, max_length=50)
    birth_date: date | None = None
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)
    family_members: str | None = None
    marital_status: str | None = Field(None, max_length=50)
    previous_ward: str | None = Field(None, max_length=255)
    previous_stake: str | None = Field(None, max_length=255)
    move_in_date: date | None = None
    is_homeowner: bool = False
    is_renting: bool = False
    skills: str | None = None
    interests: str | None = None
    calling_preferences: str | None = None
    additional_info: str | None = None


class SurveyResponseRead(SurveySubmission):
    id: UUID
    submitted_at: datetime
    processed: bool

    model_config = {"from_attributes": True}


class SurveyResponseList(BaseModel):
    items: list[SurveyResponseRead]
    total: int


class MemberFromSurveyResponse(BaseModel):
    """Result of creating a member from a survey response."""
    member: MemberRead
    response: SurveyResponseRead
    task: FollowUpTaskRead
