"""Authentication-related Pydantic schemas."""

from uuid import UUID

from pydantic import BaseModel, Field

from ward_api.core.permissions import Action, Grant, Resource


class PermissionGrant(BaseModel):
    """(resource, action) pair as exchanged with clients and stored in users.permissions."""
    resource: Resource
    action: Action

    def to_grant(self) -> Grant:
        return Grant(self.resource, self.action)

    @classmethod
    def from_grant(cls, grant: Grant) -> "PermissionGrant":
        return cls(resource=grant.resource, action=grant.action)


class UserSession(BaseModel):
    """
    Identity of the signed-in operator.

    Returned by the get_current_session dependency and passed explicitly to
    permission checks and workflow rules.

    role is the raw stored value; an unrecognized role resolves to no grants.
    permissions is None when the role defaults apply.
    """
    user_id: UUID
    email: str
    display_name: str
    role: str
    permissions: list[Grant] | None = None


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class NavItemRead(BaseModel):
    title: str
    href: str
    resource: Resource


class MeResponse(BaseModel):
    """Response schema for GET /auth/me."""
    user_id: UUID
    email: str
    display_name: str
    role: str
    grants: list[PermissionGrant]
    capabilities: dict[str, dict[str, bool]]
    navigation: list[NavItemRead]
    has_custom_permissions: bool
