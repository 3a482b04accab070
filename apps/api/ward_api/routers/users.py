"""Users router - operator accounts and permission management."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ward_api.core.deps import get_db, require_csrf_header, require_permission
from ward_api.core.permissions import Action, Resource
from ward_api.schemas.auth import UserSession
from ward_api.schemas.user import (
    PasswordReset,
    PermissionsUpdate,
    RoleDefaultsRead,
    UserCreate,
    UserPermissionsRead,
    UserRead,
    UserStatusUpdate,
    UserUpdate,
)
from ward_api.services import permission_service, user_service
from ward_api.services.identity_service import IdentityProviderError

router = APIRouter()

can_view = require_permission(Resource.USERS, Action.VIEW)
can_edit = require_permission(Resource.USERS, Action.EDIT)


def _get_or_404(db: Session, user_id: UUID):
    user = user_service.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def _provider_http_error(exc: IdentityProviderError) -> HTTPException:
    if exc.is_rejection:
        return HTTPException(status_code=400, detail=str(exc))
    return HTTPException(status_code=502, detail="Identity provider unavailable")


@router.get("", response_model=list[UserRead], dependencies=[Depends(can_view)])
def list_users(db: Session = Depends(get_db)):
    return [user_service.to_read(u) for u in user_service.list_users(db)]


@router.get(
    "/role-defaults/{role}",
    response_model=RoleDefaultsRead,
    dependencies=[Depends(can_view)],
)
def get_role_defaults(role: str):
    """Default grants for a role (empty for an unknown role)."""
    return permission_service.role_defaults(role)


@router.get("/{user_id}", response_model=UserRead, dependencies=[Depends(can_view)])
def get_user(user_id: UUID, db: Session = Depends(get_db)):
    return user_service.to_read(_get_or_404(db, user_id))


@router.post(
    "",
    response_model=UserRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header), Depends(can_edit)],
)
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    """Create the identity provider account and the operator row."""
    try:
        user = user_service.create_user(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IdentityProviderError as e:
        raise _provider_http_error(e)
    return user_service.to_read(user)


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    dependencies=[Depends(require_csrf_header), Depends(can_edit)],
)
def update_user(user_id: UUID, data: UserUpdate, db: Session = Depends(get_db)):
    user = _get_or_404(db, user_id)
    try:
        user = user_service.update_user(db, user, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return user_service.to_read(user)


@router.delete(
    "/{user_id}",
    status_code=204,
    dependencies=[Depends(require_csrf_header)],
)
def delete_user(
    user_id: UUID,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    user = _get_or_404(db, user_id)
    try:
        user_service.delete_user(db, user, session)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IdentityProviderError as e:
        raise _provider_http_error(e)
    return None


@router.post(
    "/{user_id}/reset-password",
    dependencies=[Depends(require_csrf_header), Depends(can_edit)],
)
def reset_password(user_id: UUID, data: PasswordReset, db: Session = Depends(get_db)):
    user = _get_or_404(db, user_id)
    try:
        user_service.reset_password(user, data.password)
    except IdentityProviderError as e:
        raise _provider_http_error(e)
    return {"status": "password_reset"}


@router.patch(
    "/{user_id}/status",
    response_model=UserRead,
    dependencies=[Depends(require_csrf_header)],
)
def set_status(
    user_id: UUID,
    data: UserStatusUpdate,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    """Activate or deactivate an operator. Deactivation revokes their sessions."""
    user = _get_or_404(db, user_id)
    try:
        user = user_service.set_status(db, user, data.active, session)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return user_service.to_read(user)


# =============================================================================
# Permissions
# =============================================================================

@router.get(
    "/{user_id}/permissions",
    response_model=UserPermissionsRead,
    dependencies=[Depends(can_view)],
)
def get_permissions(user_id: UUID, db: Session = Depends(get_db)):
    """Effective and default grants, and whether the user is customized."""
    return permission_service.permissions_summary(_get_or_404(db, user_id))


@router.put(
    "/{user_id}/permissions",
    response_model=UserPermissionsRead,
    dependencies=[Depends(require_csrf_header), Depends(can_edit)],
)
def replace_permissions(
    user_id: UUID,
    data: PermissionsUpdate,
    db: Session = Depends(get_db),
):
    user = user_service.set_permissions(db, _get_or_404(db, user_id), data.permissions)
    return permission_service.permissions_summary(user)
