"""Ward directory enums (members, callings, calendar)."""

from enum import Enum


class MemberStatus(str, Enum):
    ACTIVE = "active"
    LESS_ACTIVE = "less-active"


class CallingStatus(str, Enum):
    """A calling is filled iff a member is assigned."""

    FILLED = "filled"
    VACANT = "vacant"


class EventType(str, Enum):
    MEETING = "meeting"
    ACTIVITY = "activity"
    SERVICE = "service"
    OTHER = "other"
