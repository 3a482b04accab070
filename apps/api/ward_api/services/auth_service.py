"""Authentication service - password sign-in via the identity provider and session revocation."""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from ward_api.core.security import create_session_token
from ward_api.db.enums import AuthEvent
from ward_api.db.models import User
from ward_api.schemas.auth import UserSession
from ward_api.services import identity_service, permission_service

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Sign-in refused (bad credentials, unknown or disabled operator)."""


def sign_in(db: Session, email: str, password: str) -> tuple[User, str]:
    """
    Verify credentials with the identity provider and open a session.

    Returns (user, session_token).

    Raises:
        AuthenticationError: credentials rejected, no users row, or account disabled
        IdentityProviderError: provider unreachable or failing
    """
    try:
        provider_user = identity_service.sign_in_with_password(email.strip(), password)
    except identity_service.IdentityProviderError as exc:
        if exc.is_rejection:
            raise AuthenticationError("Invalid email or password") from exc
        raise

    user = db.get(User, provider_user.id)
    if not user:
        logger.info("Sign-in for unknown operator provider_id=%s", provider_user.id)
        raise AuthenticationError("User not found")
    if not user.is_active:
        raise AuthenticationError("Account disabled")

    user.last_login = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    token = create_session_token(user.id, user.role, user.token_version)
    identity_service.auth_events.publish(
        AuthEvent.SIGNED_IN, permission_service.identity_for_user(user)
    )
    logger.info("Signed in user_id=%s", user.id)
    return user, token


def sign_out(db: Session, identity: UserSession) -> None:
    """Revoke every outstanding session token for the operator."""
    user = db.get(User, identity.user_id)
    if user:
        user.token_version += 1
        db.commit()
    identity_service.auth_events.publish(AuthEvent.SIGNED_OUT, identity)
    logger.info("Signed out user_id=%s", identity.user_id)
