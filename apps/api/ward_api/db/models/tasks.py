"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from ward_api.db.base import Base, TimestampMixin
from ward_api.db.enums import FollowUpTaskType


class FollowUpTask(TimestampMixin, Base):
    """
    Reminder to replicate a local change into the membership records system (LCR).

    Created only by workflow rules. Never deleted; operators toggle completed.
    created_by/completed_by hold display names, not user ids.
    """

    __tablename__ = "lcr_update_tasks"
    __table_args__ = (
        Index("idx_lcr_tasks_completed_created", "completed", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    type: Mapped[str] = mapped_column(
        String(50), default=FollowUpTaskType.OTHER.value, nullable=False
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    details: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    created_by: Mapped[str] = mapped_column(String(255), nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=text("false"), nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(nullable=True)
    completed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
