"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from ward_api.db.base import Base, TimestampMixin
from ward_api.db.enums import Role, UserStatus


class User(TimestampMixin, Base):
    """
    Dashboard operator.

    The id is the identity provider's user id. No credentials are stored here;
    sign-in is delegated to the provider.

    permissions holds a custom grant list ([{"resource", "action"}, ...]) or
    NULL, in which case the role defaults apply.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(50), default=Role.MEMBER.value, nullable=False
    )
    permissions: Mapped[list | None] = mapped_column(JSON, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=UserStatus.ACTIVE.value, nullable=False
    )
    token_version: Mapped[int] = mapped_column(
        Integer, default=1, server_default=text("1"), nullable=False
    )
    last_login: Mapped[datetime | None] = mapped_column(nullable=True)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE.value
