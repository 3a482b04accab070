"""Permission service - stored grants, custom detection and the identity passed to checks."""

import logging

from ward_api.core.permissions import (
    Grant,
    default_grants_for_role,
    dedupe_grants,
    effective_grants,
    has_custom_permissions,
    parse_grants,
    serialize_grants,
)
from ward_api.db.models import User
from ward_api.schemas.auth import PermissionGrant, UserSession
from ward_api.schemas.user import RoleDefaultsRead, UserPermissionsRead

logger = logging.getLogger(__name__)


def stored_grants(user: User) -> list[Grant] | None:
    """
    Grants stored on the user row, or None when role defaults apply.

    A stored list that no longer parses resolves to an empty custom list so
    a corrupted row never widens access.
    """
    if user.permissions is None:
        return None
    try:
        return parse_grants(user.permissions)
    except (ValueError, KeyError, TypeError):
        logger.warning("Unparseable stored permissions user_id=%s", user.id)
        return []


def identity_for_user(user: User) -> UserSession:
    return UserSession(
        user_id=user.id,
        email=user.email,
        display_name=user.name,
        role=user.role,
        permissions=stored_grants(user),
    )


def user_has_custom_permissions(user: User) -> bool:
    return has_custom_permissions(user.role, stored_grants(user))


def normalize_submitted(grants: list[PermissionGrant]) -> list[dict[str, str]]:
    """Submitted grants -> stored JSON, duplicates dropped."""
    return serialize_grants(dedupe_grants(g.to_grant() for g in grants))


def role_defaults_json(role: str) -> list[dict[str, str]]:
    return serialize_grants(default_grants_for_role(role))


def to_schema(grants: list[Grant]) -> list[PermissionGrant]:
    return [PermissionGrant.from_grant(g) for g in grants]


def permissions_summary(user: User) -> UserPermissionsRead:
    identity = identity_for_user(user)
    return UserPermissionsRead(
        user_id=user.id,
        role=user.role,
        effective=to_schema(effective_grants(identity)),
        defaults=to_schema(default_grants_for_role(user.role)),
        is_custom=has_custom_permissions(user.role, identity.permissions),
    )


def role_defaults(role: str) -> RoleDefaultsRead:
    return RoleDefaultsRead(role=role, grants=to_schema(default_grants_for_role(role)))
