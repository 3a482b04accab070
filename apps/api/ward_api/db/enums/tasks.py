"""Follow-up task enums."""

from enum import Enum


class FollowUpTaskType(str, Enum):
    """Kinds of changes a clerk must replicate into the membership records system."""

    CALLING_SUSTAINED = "calling_sustained"
    CALLING_SET_APART = "calling_set_apart"
    NEW_MEMBER = "new_member"
    RELEASED_FROM_CALLING = "released_from_calling"
    OTHER = "other"


class FollowUpTaskStatus(str, Enum):
    """List filter for follow-up tasks."""

    PENDING = "pending"
    COMPLETED = "completed"
    ALL = "all"
