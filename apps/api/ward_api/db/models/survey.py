"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import Boolean, Date, Index, String, Text, Uuid, func, text
from sqlalchemy.orm import Mapped, mapped_column

from ward_api.db.base import Base, TimestampMixin


class SurveyResponse(TimestampMixin, Base):
    """
    Raw new-member intake submission.

    processed flips to true when a Member is created from it; operators may
    flip it back. Responses are never deleted.
    """

    __tablename__ = "survey_responses"
    __table_args__ = (Index("idx_survey_responses_submitted", "submitted_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    record_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    family_members: Mapped[str | None] = mapped_column(Text, nullable=True)
    marital_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    previous_ward: Mapped[str | None] = mapped_column(String(255), nullable=True)
    previous_stake: Mapped[str | None] = mapped_column(String(255), nullable=True)
    move_in_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_homeowner: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=text("false"), nullable=False
    )
    is_renting: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=text("false"), nullable=False
    )
    skills: Mapped[str | None] = mapped_column(Text, nullable=True)
    interests: Mapped[str | None] = mapped_column(Text, nullable=True)
    calling_preferences: Mapped[str | None] = mapped_column(Text, nullable=True)
    additional_info: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    processed: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=text("false"), nullable=False
    )
