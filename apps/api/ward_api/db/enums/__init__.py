"""Enum definitions for application constants."""

from ward_api.db.enums.auth import AuthEvent, Role, UserStatus
from ward_api.db.enums.directory import CallingStatus, EventType, MemberStatus
from ward_api.db.enums.tasks import FollowUpTaskStatus, FollowUpTaskType

__all__ = [
    "AuthEvent",
    "CallingStatus",
    "EventType",
    "FollowUpTaskStatus",
    "FollowUpTaskType",
    "MemberStatus",
    "Role",
    "UserStatus",
]
