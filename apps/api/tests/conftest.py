"""
Test configuration and fixtures.

Provides:
- In-memory SQLite database, schema created and dropped per test
- Operator factories for each role
- JWT token minting for authenticated tests
- HTTPX AsyncClient with proper headers
"""
import os
import uuid
from datetime import date
from typing import AsyncGenerator, Callable, Generator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"

from ward_api.main import app
from ward_api.core.deps import COOKIE_NAME, get_db
from ward_api.core.security import create_session_token
from ward_api.db.base import Base
from ward_api.db.enums import CallingStatus, Role
from ward_api.db.models import Calling, Member, User
from ward_api.db.session import SessionLocal, engine
from ward_api.schemas.auth import UserSession
from ward_api.services import permission_service


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema per test; app code commits for real."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


# =============================================================================
# Operator Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def make_user(db: Session) -> Callable[..., User]:
    """Factory: make_user(role, permissions=None, status="active")."""
    def _make(
        role: str = Role.ADMIN.value,
        permissions: list[dict] | None = None,
        status: str = "active",
        name: str | None = None,
    ) -> User:
        user = User(
            id=uuid.uuid4(),
            email=f"{role}-{uuid.uuid4().hex[:8]}@example.org",
            name=name or f"{role.replace('_', ' ').title()} Operator",
            role=role,
            permissions=permissions,
            status=status,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture(scope="function")
def admin_user(make_user) -> User:
    return make_user(Role.ADMIN.value, name="Admin Operator")


@pytest.fixture(scope="function")
def clerk_user(make_user) -> User:
    return make_user(Role.WARD_CLERK.value, name="Clerk Operator")


@pytest.fixture(scope="function")
def member_user(make_user) -> User:
    return make_user(Role.MEMBER.value, name="Member Operator")


@pytest.fixture(scope="function")
def clerk_identity(clerk_user: User) -> UserSession:
    return permission_service.identity_for_user(clerk_user)


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def member(db: Session) -> Member:
    m = Member(name="Alice Example", email="alice@example.org", phone="555-0100", skills=[])
    db.add(m)
    db.commit()
    db.refresh(m)
    return m


@pytest.fixture(scope="function")
def vacant_calling(db: Session) -> Calling:
    calling = Calling(title="Primary Teacher", organization="Primary")
    db.add(calling)
    db.commit()
    db.refresh(calling)
    return calling


@pytest.fixture(scope="function")
def filled_calling(db: Session, member: Member) -> Calling:
    calling = Calling(
        title="Sunday School Teacher",
        organization="Sunday School",
        status=CallingStatus.FILLED.value,
        member_id=member.id,
        sustained_date=date(2026, 1, 4),
        is_set_apart=False,
    )
    db.add(calling)
    db.commit()
    db.refresh(calling)
    return calling


# =============================================================================
# Client Fixtures
# =============================================================================

def session_cookie(user: User) -> dict[str, str]:
    token = create_session_token(
        user_id=user.id,
        role=user.role,
        token_version=user.token_version,
    )
    return {COOKIE_NAME: token}


@pytest.fixture(scope="function")
async def client_for(db: Session) -> AsyncGenerator[Callable[..., AsyncClient], None]:
    """
    Factory for AsyncClients bound to the test session.

    client_for(user) adds the session cookie; client_for() is anonymous.
    Every client sends the CSRF header unless csrf=False.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    clients: list[AsyncClient] = []

    def _make(user: User | None = None, csrf: bool = True) -> AsyncClient:
        c = AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
            cookies=session_cookie(user) if user else None,
            headers={"X-Requested-With": "XMLHttpRequest"} if csrf else None,
        )
        clients.append(c)
        return c

    yield _make

    for c in clients:
        await c.aclose()
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(client_for) -> AsyncClient:
    """Unauthenticated client."""
    return client_for()


@pytest.fixture(scope="function")
async def authed_client(client_for, admin_user: User) -> AsyncClient:
    """Admin client with JWT cookie and CSRF header."""
    return client_for(admin_user)


@pytest.fixture(scope="function")
async def clerk_client(client_for, clerk_user: User) -> AsyncClient:
    return client_for(clerk_user)


@pytest.fixture(scope="function")
async def member_client(client_for, member_user: User) -> AsyncClient:
    return client_for(member_user)
