"""Per-client rate limiting for the admin API using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from cms_admin.config import settings

# Convenience limit string built from config
ADMIN_LIMIT = f"{settings.rate_limit_admin}/minute"

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[ADMIN_LIMIT],
    enabled=settings.rate_limit_enabled,
    headers_enabled=settings.rate_limit_headers,
)
