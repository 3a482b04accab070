"""User service - operator accounts, roles and custom permissions."""

import logging
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from ward_api.db.enums import Role, UserStatus
from ward_api.db.models import User
from ward_api.schemas.auth import PermissionGrant, UserSession
from ward_api.schemas.user import UserCreate, UserRead, UserUpdate
from ward_api.services import identity_service, permission_service

logger = logging.getLogger(__name__)


def _check_role(role: str) -> None:
    if not Role.has_value(role):
        raise ValueError(f"Unknown role '{role}'")


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.name).all()


def get_user(db: Session, user_id: UUID) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get user by email (case-insensitive)."""
    return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


def to_read(user: User) -> UserRead:
    stored = permission_service.stored_grants(user)
    return UserRead(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        status=UserStatus(user.status),
        permissions=permission_service.to_schema(stored) if stored is not None else None,
        has_custom_permissions=permission_service.user_has_custom_permissions(user),
        last_login=user.last_login,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def create_user(db: Session, data: UserCreate) -> User:
    """
    Create the provider account, then the users row.

    The row gets the submitted custom grants or the role defaults. If the
    row insert fails the provider account is deleted again.

    Raises:
        ValueError: unknown role or email already in use
        IdentityProviderError: provider refused or is unavailable
    """
    _check_role(data.role)
    email = data.email.strip().lower()
    if get_user_by_email(db, email):
        raise ValueError("Email already in use")

    provider_user = identity_service.admin_create_user(email, data.password, data.name)
    permissions = (
        permission_service.normalize_submitted(data.permissions)
        if data.permissions is not None
        else permission_service.role_defaults_json(data.role)
    )
    user = User(
        id=provider_user.id,
        email=email,
        name=data.name.strip(),
        role=data.role,
        permissions=permissions,
        status=UserStatus.ACTIVE.value,
    )
    try:
        db.add(user)
        db.commit()
    except Exception:
        db.rollback()
        logger.error("User row insert failed, removing provider account id=%s", provider_user.id)
        try:
            identity_service.admin_delete_user(provider_user.id)
        except identity_service.IdentityProviderError:
            logger.error("Provider account cleanup failed id=%s", provider_user.id)
        raise

    db.refresh(user)
    logger.info("Created user_id=%s role=%s", user.id, user.role)
    return user


def update_user(db: Session, user: User, data: UserUpdate) -> User:
    """
    Update profile, role and grants.

    use_custom_permissions=False resets grants to the (possibly new) role's
    defaults; True stores the submitted list. When the flag is omitted, a
    role change moves non-customized grants to the new role's defaults and
    leaves customized grants alone.
    """
    update_data = data.model_dump(exclude_unset=True)
    was_custom = permission_service.user_has_custom_permissions(user)
    previous_role = user.role

    if update_data.get("role") is not None:
        _check_role(update_data["role"])
        user.role = update_data["role"]
    if update_data.get("name") is not None:
        user.name = update_data["name"].strip()
    if update_data.get("email") is not None:
        email = update_data["email"].strip().lower()
        existing = get_user_by_email(db, email)
        if existing and existing.id != user.id:
            raise ValueError("Email already in use")
        user.email = email

    use_custom = update_data.get("use_custom_permissions")
    if use_custom is False:
        user.permissions = permission_service.role_defaults_json(user.role)
    elif use_custom is True:
        if data.permissions is None:
            raise ValueError("permissions are required when use_custom_permissions is true")
        user.permissions = permission_service.normalize_submitted(data.permissions)
    elif user.role != previous_role and not was_custom:
        # Role defaults follow the role unless the grants were customized
        user.permissions = permission_service.role_defaults_json(user.role)

    db.commit()
    db.refresh(user)
    return user


def set_permissions(db: Session, user: User, grants: list[PermissionGrant]) -> User:
    user.permissions = permission_service.normalize_submitted(grants)
    db.commit()
    db.refresh(user)
    logger.info("Replaced permissions user_id=%s", user.id)
    return user


def set_status(db: Session, user: User, active: bool, actor: UserSession) -> User:
    """
    Activate or deactivate an operator. Deactivation revokes sessions.

    Raises:
        ValueError: an operator cannot deactivate themselves
    """
    if not active and user.id == actor.user_id:
        raise ValueError("You cannot deactivate your own account")

    new_status = UserStatus.ACTIVE.value if active else UserStatus.INACTIVE.value
    if user.status != new_status:
        user.status = new_status
        if not active:
            user.token_version += 1
        db.commit()
        db.refresh(user)
    return user


def reset_password(user: User, password: str) -> None:
    identity_service.admin_update_password(user.id, password)
    logger.info("Password reset user_id=%s", user.id)


def delete_user(db: Session, user: User, actor: UserSession) -> None:
    """
    Delete the provider account, then the users row.

    A provider failure leaves the row in place so the delete can be retried.
    An account the provider no longer knows (404) is treated as deleted.

    Raises:
        ValueError: an operator cannot delete themselves
    """
    if user.id == actor.user_id:
        raise ValueError("You cannot delete your own account")

    user_id = user.id
    try:
        identity_service.admin_delete_user(user_id)
    except identity_service.IdentityProviderError as exc:
        if exc.status_code != 404:
            logger.error("Provider account delete failed id=%s", user_id)
            raise
    db.delete(user)
    db.commit()
    logger.info("Deleted user_id=%s", user_id)
