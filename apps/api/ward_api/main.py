"""FastAPI application entry point."""
import logging
import uuid

import jwt
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ward_api.core.config import settings
from ward_api.core.deps import COOKIE_NAME
from ward_api.core.security import decode_session_token
from ward_api.core.structured_logging import build_log_context, configure_logging
from ward_api.db.session import engine

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ============================================================================
# Sentry Integration (optional, for production error tracking)
# ============================================================================

if settings.SENTRY_DSN and settings.ENV not in ("dev", "test"):
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,  # Member records are personal data
    )
    logger.info("Sentry initialized for error tracking")

# ============================================================================
# Rate Limiting
# ============================================================================

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from ward_api.core.rate_limit import limiter

# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Ward Dashboard API",
    description="Ward directory, callings, FHE groups, calendar, intake survey and LCR follow-up tasks",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware - must be added before routers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,  # Required for cookies
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


def _session_user_id(request: Request) -> str | None:
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        return None
    try:
        return decode_session_token(token).get("sub")
    except jwt.InvalidTokenError:
        return None


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Assign/propagate X-Request-ID and log one line per request."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    route = request.scope.get("route")
    logger.info(
        "request",
        extra=build_log_context(
            user_id=_session_user_id(request),
            request_id=request_id,
            route=getattr(route, "path", request.url.path),
            method=request.method,
            status_code=response.status_code,
        ),
    )
    return response


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    request_id = getattr(request.state, "request_id", None)
    logger.error(
        "Database operation failed",
        exc_info=exc,
        extra=build_log_context(
            request_id=request_id, route=request.url.path, method=request.method
        ),
    )
    return JSONResponse(status_code=503, content={"detail": "Database operation failed"})


# ============================================================================
# Routers
# ============================================================================

from ward_api.routers import (
    auth,
    callings,
    dashboard,
    events,
    fhe_groups,
    lcr_updates,
    members,
    survey,
    survey_responses,
    users,
)

app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
app.include_router(members.router, prefix="/members", tags=["members"])
app.include_router(callings.router, prefix="/callings", tags=["callings"])
app.include_router(fhe_groups.router, prefix="/fhe-groups", tags=["fhe-groups"])
app.include_router(events.router, prefix="/events", tags=["events"])
app.include_router(survey.router, prefix="/survey", tags=["survey"])
app.include_router(survey_responses.router, prefix="/survey-responses", tags=["survey"])
app.include_router(lcr_updates.router, prefix="/lcr-updates", tags=["lcr-updates"])
app.include_router(users.router, prefix="/users", tags=["users"])


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}
