"""Rate limiting configuration for the ward API."""

import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from ward_api.core.config import settings

# Tests always use in-memory storage; otherwise RATE_LIMIT_STORAGE_URI
# (memory:// by default, redis://... for multi-worker deployments)
IS_TESTING = settings.ENV == "test" or os.getenv("TESTING", "").lower() in ("1", "true", "yes")

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://" if IS_TESTING else settings.RATE_LIMIT_STORAGE_URI,
    enabled=not IS_TESTING,
)

LOGIN_LIMIT = f"{settings.RATE_LIMIT_AUTH}/minute"
