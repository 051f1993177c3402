"""Rate limiting configuration for the CRM API."""

import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

# Counters live in process memory; each worker limits independently
IS_TESTING = os.getenv("TESTING", "").lower() in ("1", "true", "yes")
DEFAULT_LIMITS = (
    []
    if IS_TESTING or settings.RATE_LIMIT_API <= 0
    else [f"{settings.RATE_LIMIT_API}/minute"]
)

# Applied to login / register / password reset endpoints
AUTH_LIMIT = f"{settings.RATE_LIMIT_AUTH}/minute"

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
    default_limits=DEFAULT_LIMITS,
    enabled=not IS_TESTING,
)
