"""
Redis-backed rate limiter for public write endpoints (lead submissions).
Uses fixed window counter pattern.
"""
from __future__ import annotations

import logging

from fastapi import HTTPException, Request, status
from redis.asyncio import Redis

from app.core.config import settings
from app.core.redis import get_redis_client

logger = logging.getLogger(__name__)

LEAD_RATE_WINDOW = 60  # seconds


def client_ip(request: Request) -> str:
    """
    Socket peer address. Behind a reverse proxy run uvicorn with
    --proxy-headers and --forwarded-allow-ips so this is the real client.
    """
    return request.client.host if request.client else "unknown"


async def check_rate_limit(
    request: Request,
    *,
    prefix: str = "rl:leads",
    limit: int | None = None,
    window: int = LEAD_RATE_WINDOW,
) -> None:
    """
    Check rate limit for the request IP. Raises 429 if exceeded.

    Args:
        request: FastAPI request (used for client IP).
        prefix: Redis key prefix for this limiter.
        limit: Max requests per window (defaults to LEAD_RATE_LIMIT_PER_MINUTE).
        window: Window size in seconds.

    Raises:
        HTTPException: 429 Too Many Requests.
    """
    max_requests = settings.LEAD_RATE_LIMIT_PER_MINUTE if limit is None else limit
    ip = client_ip(request)
    key = f"{prefix}:{ip}"

    try:
        redis: Redis = get_redis_client()
        current = await redis.incr(key)
        if current == 1:
            await redis.expire(key, window)

        if current > max_requests:
            ttl = await redis.ttl(key)
            logger.warning("rate_limit_exceeded ip=%s key=%s count=%d limit=%d", ip, key, current, max_requests)
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Per daug užklausų. Bandykite dar kartą vėliau.",
                headers={"Retry-After": str(max(ttl, 1))},
            )
    except HTTPException:
        raise
    except Exception:
        # Redis outage must not block lead intake (fail-open)
        logger.exception("rate_limit redis error, allowing request")


async def lead_rate_limit(request: Request) -> None:
    """FastAPI dependency wrapper for the lead submission limiter."""
    await check_rate_limit(request)
