"""FastAPI dependencies for authentication, authorization, and database access."""

from typing import Generator
from uuid import UUID

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ward_api.core.permissions import Action, Resource, is_granted
from ward_api.core.security import decode_session_token
from ward_api.db.models import User
from ward_api.db.session import SessionLocal
from ward_api.schemas.auth import UserSession
from ward_api.services import permission_service


# Cookie and header names
COOKIE_NAME = "ward_session"
CSRF_HEADER = "X-Requested-With"
CSRF_HEADER_VALUE = "XMLHttpRequest"


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
) -> User:
    """
    Get authenticated user from session cookie.

    Validates:
    - Session cookie exists
    - JWT is valid and not expired
    - User exists and is active
    - Token version matches (for revocation support)

    Raises:
        HTTPException 401: Authentication failed
    """
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = decode_session_token(token)
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid session")

    user = db.get(User, _parse_subject(payload.get("sub")))
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    if not user.is_active:
        raise HTTPException(status_code=401, detail="Account disabled")

    # Token version check (revocation support)
    if user.token_version != payload.get("token_version"):
        raise HTTPException(status_code=401, detail="Session revoked")

    return user


def _parse_subject(sub) -> UUID:
    try:
        return UUID(str(sub))
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid session")


def get_current_session(
    request: Request,
    db: Session = Depends(get_db)
) -> UserSession:
    """
    Get full session context: user_id, role and grants.

    This is the PRIMARY auth dependency for most endpoints.
    Role and grants are read fresh from the users table on every request.

    Raises:
        HTTPException 401: Not authenticated
    """
    user = get_current_user(request, db)
    return permission_service.identity_for_user(user)


def require_permission(resource: Resource, action: Action):
    """
    Dependency factory for grant-based authorization.

    Usage:
        @router.post("", dependencies=[Depends(require_permission(Resource.MEMBERS, Action.EDIT))])
    """
    def dependency(request: Request, db: Session = Depends(get_db)) -> UserSession:
        session = get_current_session(request, db)
        if not is_granted(session, resource, action):
            raise HTTPException(
                status_code=403,
                detail=f"Missing permission {resource.value}:{action.value}",
            )
        return session
    return dependency


def require_csrf_header(request: Request) -> None:
    """
    Verify CSRF header on mutations.

    Apply to state-changing endpoints (POST, PATCH, PUT, DELETE).

    Raises:
        HTTPException 403: Missing or invalid CSRF header
    """
    if request.headers.get(CSRF_HEADER) != CSRF_HEADER_VALUE:
        raise HTTPException(
            status_code=403,
            detail=f"Missing CSRF header. Include '{CSRF_HEADER}: {CSRF_HEADER_VALUE}'"
        )
