"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ward_api.db.base import Base, TimestampMixin
from ward_api.db.enums import CallingStatus, MemberStatus


class Member(TimestampMixin, Base):
    """
    Ward directory entry.

    A member belongs to at most one FHE group and may hold any number of callings.
    """

    __tablename__ = "members"
    __table_args__ = (
        Index("idx_members_name", "name"),
        Index("idx_members_fhe_group", "fhe_group_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=MemberStatus.ACTIVE.value, nullable=False
    )
    skills: Mapped[list | None] = mapped_column(JSON, nullable=True)
    fhe_group_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("fhe_groups.id", ondelete="SET NULL"), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    fhe_group: Mapped["FheGroup | None"] = relationship(
        back_populates="members", foreign_keys=[fhe_group_id]
    )
    callings: Mapped[list["Calling"]] = relationship(back_populates="member")


class Calling(TimestampMixin, Base):
    """
    Volunteer role slot.

    status is filled iff member_id is set; a vacant calling carries no
    sustained date and is not set apart.
    """

    __tablename__ = "callings"
    __table_args__ = (
        Index("idx_callings_org_title", "organization", "title"),
        Index("idx_callings_member", "member_id"),
        Index("idx_callings_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    organization: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=CallingStatus.VACANT.value, nullable=False
    )
    member_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("members.id", ondelete="SET NULL"), nullable=True
    )
    sustained_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_set_apart: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=text("false"), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    member: Mapped["Member | None"] = relationship(back_populates="callings")

    @property
    def is_filled(self) -> bool:
        return self.status == CallingStatus.FILLED.value


class FheGroup(TimestampMixin, Base):
    """Small recurring meeting roster with an optional leader."""

    __tablename__ = "fhe_groups"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    leader_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("members.id", ondelete="SET NULL", use_alter=True),
        nullable=True,
    )
    location: Mapped[str | None] = mapped_column(String(500), nullable=True)
    meeting_time: Mapped[str | None] = mapped_column(String(100), nullable=True)
    activity_image: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    leader: Mapped["Member | None"] = relationship(
        foreign_keys=[leader_id], post_update=True
    )
    members: Mapped[list["Member"]] = relationship(
        back_populates="fhe_group",
        foreign_keys="Member.fhe_group_id",
        order_by="Member.name",
    )
