"""
Rate Limiting for Ministry Hub API
==================================
Implements rate limiting using slowapi, backed by Redis when REDIS_URL is set
and in-process memory otherwise.

Special endpoints have their own limits:
- /auth/login: 5 req/min (brute force protection)
- /auth/register: 3 req/min
- /leads (public connect form): 5 req/min
- AI operations (journal reflection, lead scoring): 10 req/min
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from ministry_hub.core.config import settings
from ministry_hub.core.logging_config import logger


def get_member_identifier(request: Request) -> str:
    """
    Get rate limit key based on member authentication.

    Priority:
    1. Authenticated member ID (set on request.state by the auth dependency)
    2. API key (for integrations)
    3. IP address (for anonymous visitors)
    """
    member_id = getattr(request.state, 'member_id', None)
    if member_id:
        return f"member:{member_id}"

    api_key = request.headers.get("X-API-Key")
    if api_key:
        return f"apikey:{api_key[:16]}"  # Use first 16 chars for privacy

    return f"ip:{get_remote_address(request)}"


def get_storage_uri() -> str:
    """Redis when configured, otherwise in-memory"""
    return settings.REDIS_URL or "memory://"


limiter = Limiter(
    key_func=get_member_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=get_storage_uri(),
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Return a JSON 429 with a Retry-After header"""
    retry_after = "60"

    logger.warning(
        f"[RateLimit] Exceeded for {get_member_identifier(request)}: {exc.detail}",
        extra={"event_type": "rate_limit", "http_path": request.url.path}
    )

    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please slow down.",
            "detail": str(exc.detail),
            "retry_after_seconds": int(retry_after),
        },
        headers={
            "Retry-After": retry_after,
            "X-RateLimit-Limit": str(settings.RATE_LIMIT_PER_MINUTE),
        }
    )


def strict_rate_limit():
    """Very strict rate limit for account creation (3/min)"""
    return limiter.limit("3/minute", key_func=get_member_identifier)


def auth_rate_limit():
    """Rate limit for auth and public form endpoints (5/min)"""
    return limiter.limit("5/minute", key_func=get_member_identifier)


def ai_operation_rate_limit():
    """Rate limit for AI operations (10/min)"""
    return limiter.limit("10/minute", key_func=get_member_identifier)
