"""Authentication router - password sign-in, session info and sign-out."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from ward_api.core.config import settings
from ward_api.core.deps import COOKIE_NAME, get_current_session, get_db, require_csrf_header
from ward_api.core.permissions import (
    capabilities,
    effective_grants,
    has_custom_permissions,
    visible_navigation,
)
from ward_api.core.rate_limit import LOGIN_LIMIT, limiter
from ward_api.schemas.auth import LoginRequest, MeResponse, NavItemRead, UserSession
from ward_api.services import auth_service, permission_service
from ward_api.services.identity_service import IdentityProviderError

router = APIRouter()


def build_me(identity: UserSession) -> MeResponse:
    return MeResponse(
        user_id=identity.user_id,
        email=identity.email,
        display_name=identity.display_name,
        role=identity.role,
        grants=permission_service.to_schema(effective_grants(identity)),
        capabilities=capabilities(identity),
        navigation=[
            NavItemRead(title=item.title, href=item.href, resource=item.resource)
            for item in visible_navigation(identity)
        ],
        has_custom_permissions=has_custom_permissions(identity.role, identity.permissions),
    )


# =============================================================================
# Session Endpoints
# =============================================================================

@router.post(
    "/login",
    response_model=MeResponse,
    dependencies=[Depends(require_csrf_header)],
)
@limiter.limit(LOGIN_LIMIT)
def login(
    request: Request,
    response: Response,
    data: LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Sign in with email and password.

    Credentials are verified by the identity provider; the operator must
    also have an active users row. Sets the HttpOnly session cookie.
    """
    try:
        user, token = auth_service.sign_in(db, data.email, data.password)
    except auth_service.AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except IdentityProviderError:
        raise HTTPException(status_code=502, detail="Identity provider unavailable")

    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRES_HOURS * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        path="/",
    )
    return build_me(permission_service.identity_for_user(user))


@router.get("/me", response_model=MeResponse)
def get_me(session: UserSession = Depends(get_current_session)):
    """Current operator with grants, capability flags and visible navigation."""
    return build_me(session)


@router.post("/logout", dependencies=[Depends(require_csrf_header)])
def logout(
    response: Response,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Clear session cookie and revoke outstanding tokens.

    Requires X-Requested-With header for CSRF protection.
    """
    auth_service.sign_out(db, session)
    response.delete_cookie(COOKIE_NAME, path="/")
    return {"status": "logged_out"}
