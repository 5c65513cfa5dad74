"""
Lead rate limiter tests with an in-memory Redis stand-in.
"""
from __future__ import annotations

import pytest
from fastapi import HTTPException, status
from starlette.requests import Request

from app.core import rate_limit


class FakeRedis:
    def __init__(self) -> None:
        self.counters: dict[str, int] = {}

    async def incr(self, key: str) -> int:
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]

    async def expire(self, key: str, seconds: int) -> bool:
        return True

    async def ttl(self, key: str) -> int:
        return 42


class BrokenRedis:
    async def incr(self, key: str) -> int:
        raise ConnectionError("redis down")


def _request(host: str, forwarded_for: str | None = None) -> Request:
    headers = []
    if forwarded_for is not None:
        headers.append((b"x-forwarded-for", forwarded_for.encode()))
    return Request(
        {
            "type": "http",
            "method": "POST",
            "path": "/api/v1/leads",
            "headers": headers,
            "client": (host, 50000),
        }
    )


@pytest.mark.asyncio
async def test_limit_is_keyed_on_socket_address(monkeypatch) -> None:
    redis = FakeRedis()
    monkeypatch.setattr(rate_limit, "get_redis_client", lambda: redis)

    blocked = 0
    for i in range(20):
        try:
            await rate_limit.check_rate_limit(_request("1.2.3.4", f"10.0.0.{i}"), limit=3)
        except HTTPException as exc:
            assert exc.status_code == status.HTTP_429_TOO_MANY_REQUESTS
            assert exc.headers["Retry-After"] == "42"
            blocked += 1

    assert blocked == 17
    assert list(redis.counters) == ["rl:leads:1.2.3.4"]


@pytest.mark.asyncio
async def test_separate_clients_have_separate_counters(monkeypatch) -> None:
    redis = FakeRedis()
    monkeypatch.setattr(rate_limit, "get_redis_client", lambda: redis)

    await rate_limit.check_rate_limit(_request("1.2.3.4"), limit=1)
    await rate_limit.check_rate_limit(_request("5.6.7.8"), limit=1)

    with pytest.raises(HTTPException):
        await rate_limit.check_rate_limit(_request("1.2.3.4"), limit=1)


@pytest.mark.asyncio
async def test_redis_outage_allows_request(monkeypatch) -> None:
    monkeypatch.setattr(rate_limit, "get_redis_client", lambda: BrokenRedis())

    await rate_limit.check_rate_limit(_request("1.2.3.4"), limit=0)
