"""Auth-related enums."""

from enum import Enum


class Role(str, Enum):
    """
    Operator roles.

    - ADMIN: everything, including user management
    - BISHOPRIC: view everything, edit everything except users
    - WARD_CLERK: records (members, callings, calendar, survey responses)
    - ELDERS_QUORUM / RELIEF_SOCIETY: organization presidencies (groups, calendar)
    - MEMBER: read-only access plus the new member survey
    """

    ADMIN = "admin"
    BISHOPRIC = "bishopric"
    WARD_CLERK = "ward_clerk"
    ELDERS_QUORUM = "elders_quorum"
    RELIEF_SOCIETY = "relief_society"
    MEMBER = "member"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_


class UserStatus(str, Enum):
    """Operator account status."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class AuthEvent(str, Enum):
    """Events published on sign-in/sign-out."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
