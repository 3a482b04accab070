"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
import datetime as dt

from sqlalchemy import JSON, Date, Index, String, Text, Time, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ward_api.db.base import Base, TimestampMixin
from ward_api.db.enums import EventType


class Event(TimestampMixin, Base):
    """Calendar entry; date + time determine ordering."""

    __tablename__ = "events"
    __table_args__ = (Index("idx_events_date_time", "date", "time"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    location: Mapped[str | None] = mapped_column(String(500), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    attendees: Mapped[list | None] = mapped_column(JSON, nullable=True)
    type: Mapped[str] = mapped_column(
        String(20), default=EventType.OTHER.value, nullable=False
    )
