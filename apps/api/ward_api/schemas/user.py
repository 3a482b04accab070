"""Pydantic schemas for operator accounts."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ward_api.db.enums import UserStatus
from ward_api.schemas.auth import PermissionGrant


class UserCreate(BaseModel):
    """Create operator: provider account + users row."""
    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field("member", min_length=1, max_length=50)
    password: str = Field(..., min_length=8)
    permissions: list[PermissionGrant] | None = Field(
        None, description="Custom grants; omitted = role defaults"
    )


class UserUpdate(BaseModel):
    """
    Partial update.

    use_custom_permissions=False resets grants to the (new) role defaults;
    True stores the submitted permissions list.
    """
    email: str | None = Field(None, min_length=3, max_length=255)
    name: str | None = Field(None, min_length=1, max_length=255)
    role: str | None = Field(None, min_length=1, max_length=50)
    use_custom_permissions: bool | None = None
    permissions: list[PermissionGrant] | None = None


class PasswordReset(BaseModel):
    password: str = Field(..., min_length=8)


class UserStatusUpdate(BaseModel):
    active: bool


class PermissionsUpdate(BaseModel):
    permissions: list[PermissionGrant]


class UserRead(BaseModel):
    id: UUID
    email: str
    name: str
    role: str
    status: UserStatus
    permissions: list[PermissionGrant] | None
    has_custom_permissions: bool
    last_login: datetime | None
    created_at: datetime
    updated_at: datetime


class UserPermissionsRead(BaseModel):
    """Effective vs default grants for the permissions editor."""
    user_id: UUID
    role: str
    effective: list[PermissionGrant]
    defaults: list[PermissionGrant]
    is_custom: bool


class RoleDefaultsRead(BaseModel):
    role: str
    grants: list[PermissionGrant]
