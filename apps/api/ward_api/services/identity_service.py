"""
Identity provider client and auth event bus.

Credentials are never checked or stored here. Sign-in and account
administration are delegated to a GoTrue-compatible auth API over HTTP.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable
from uuid import UUID

import httpx

from ward_api.core.config import settings
from ward_api.db.enums import AuthEvent
from ward_api.schemas.auth import UserSession

logger = logging.getLogger(__name__)

REJECTION_STATUSES = {400, 401, 403, 404, 422}


class IdentityProviderError(Exception):
    """Provider rejected the call or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_rejection(self) -> bool:
        """True when the provider answered and refused (bad credentials, duplicate email)."""
        return self.status_code in REJECTION_STATUSES


@dataclass(frozen=True)
class ProviderUser:
    id: UUID
    email: str


# =============================================================================
# HTTP client
# =============================================================================

def _client() -> httpx.Client:
    return httpx.Client(timeout=settings.IDENTITY_PROVIDER_TIMEOUT_SECONDS)


def _headers(admin: bool) -> dict[str, str]:
    key = (
        settings.IDENTITY_PROVIDER_SERVICE_KEY
        if admin
        else settings.IDENTITY_PROVIDER_ANON_KEY
    )
    headers = {"Content-Type": "application/json"}
    if key:
        headers["apikey"] = key
        headers["Authorization"] = f"Bearer {key}"
    return headers


def _request(
    method: str,
    path: str,
    *,
    admin: bool = False,
    params: dict[str, str] | None = None,
    json: dict[str, Any] | None = None,
) -> dict[str, Any]:
    url = f"{settings.IDENTITY_PROVIDER_URL.rstrip('/')}{path}"
    try:
        with _client() as client:
            response = client.request(
                method, url, params=params, json=json, headers=_headers(admin)
            )
    except httpx.RequestError as exc:
        logger.warning("Identity provider unreachable path=%s", path, exc_info=exc)
        raise IdentityProviderError("Identity provider unavailable") from exc

    if response.status_code >= 400:
        message = _error_message(response)
        logger.info(
            "Identity provider refused path=%s status=%s", path, response.status_code
        )
        raise IdentityProviderError(message, status_code=response.status_code)

    if not response.content:
        return {}
    return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"Identity provider returned {response.status_code}"
    return (
        body.get("error_description")
        or body.get("msg")
        or body.get("message")
        or f"Identity provider returned {response.status_code}"
    )


def _provider_user(payload: dict[str, Any]) -> ProviderUser:
    try:
        return ProviderUser(id=UUID(str(payload["id"])), email=payload.get("email") or "")
    except (KeyError, ValueError) as exc:
        raise IdentityProviderError("Malformed identity provider response") from exc


# =============================================================================
# Provider operations
# =============================================================================

def sign_in_with_password(email: str, password: str) -> ProviderUser:
    """Verify credentials; returns the provider's user."""
    body = _request(
        "POST",
        "/auth/v1/token",
        params={"grant_type": "password"},
        json={"email": email, "password": password},
    )
    return _provider_user(body.get("user") or {})


def admin_create_user(email: str, password: str, name: str) -> ProviderUser:
    body = _request(
        "POST",
        "/auth/v1/admin/users",
        admin=True,
        json={
            "email": email,
            "password": password,
            "email_confirm": True,
            "user_metadata": {"name": name},
        },
    )
    return _provider_user(body)


def admin_delete_user(user_id: UUID) -> None:
    _request("DELETE", f"/auth/v1/admin/users/{user_id}", admin=True)


def admin_update_password(user_id: UUID, password: str) -> None:
    _request(
        "PUT", f"/auth/v1/admin/users/{user_id}", admin=True, json={"password": password}
    )


# =============================================================================
# Auth events
# =============================================================================

AuthListener = Callable[[AuthEvent, UserSession], None]


class AuthEventBus:
    """
    Process-wide sign-in/sign-out notifications.

    Listeners receive (event, identity). A failing listener is logged and
    never interrupts sign-in or sign-out.
    """

    def __init__(self) -> None:
        self._listeners: list[AuthListener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: AuthEvent, identity: UserSession) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event, identity)
            except Exception:
                logger.exception(
                    "Auth event listener failed event=%s user_id=%s",
                    event.value,
                    identity.user_id,
                )


auth_events = AuthEventBus()


def subscribe(listener: AuthListener) -> Callable[[], None]:
    return auth_events.subscribe(listener)
