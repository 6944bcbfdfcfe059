"""Rate limiting middleware test cases (Redis replaced by an in-memory counter)."""
import pytest
from unittest.mock import AsyncMock
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from httpx import AsyncClient, ASGITransport
from redis.exceptions import ConnectionError as RedisConnectionError
from framework.middleware.rate_limit import (
    FixedWindowRateLimiter,
    RateLimitMiddleware,
    TOO_MANY_AUTH_MESSAGE,
    TOO_MANY_REQUESTS_MESSAGE,
    default_failed_attempt_prefixes,
    path_under,
)


class FakeRedis:
    """Just enough of the redis asyncio client for the limiter."""

    def __init__(self):
        self.store = {}
        self.expiry = {}

    async def get(self, key):
        return self.store.get(key)

    async def incr(self, key):
        self.store[key] = self.store.get(key, 0) + 1
        return self.store[key]

    async def expire(self, key, seconds):
        self.expiry[key] = seconds


def make_app(redis_client, **limits) -> FastAPI:
    app = FastAPI()

    @app.get("/api/things")
    async def things():
        return {"ok": True}

    @app.get("/api/health")
    async def health():
        return {"ok": True}

    @app.get("/other")
    async def other():
        return {"ok": True}

    @app.post("/api/auth/login")
    async def login(payload: dict):
        if payload.get("password") == "right":
            return {"token": "t"}
        return JSONResponse(status_code=401, content={"message": "Invalid credentials"})

    @app.get("/api/crm/companies/{item_id}")
    async def company(item_id: str):
        if item_id == "mine":
            return {"id": item_id}
        return JSONResponse(status_code=404, content={"message": "Company not found"})

    @app.get("/api/invoices/{item_id}")
    async def invoice(item_id: str):
        return JSONResponse(status_code=404, content={"message": "Invoice not found"})

    async def factory():
        return redis_client

    limits.setdefault("trusted_proxies", [])
    app.add_middleware(RateLimitMiddleware, redis_factory=factory, enabled=True, window_seconds=900, **limits)
    return app


@pytest.fixture
def redis_client() -> FakeRedis:
    return FakeRedis()


def _client(app: FastAPI) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def test_api_limit(redis_client):
    app = make_app(redis_client, max_requests=3, auth_max_requests=2)
    async with _client(app) as client:
        statuses = [(await client.get("/api/things")).status_code for _ in range(4)]
        blocked = await client.get("/api/things")

    assert statuses == [200, 200, 200, 429]
    assert blocked.json() == {"message": TOO_MANY_REQUESTS_MESSAGE}
    assert blocked.headers["RateLimit-Remaining"] == "0"


async def test_remaining_header_counts_down(redis_client):
    app = make_app(redis_client, max_requests=3, auth_max_requests=2)
    async with _client(app) as client:
        first = await client.get("/api/things")
        second = await client.get("/api/things")

    assert first.headers["RateLimit-Limit"] == "3"
    assert first.headers["RateLimit-Remaining"] == "2"
    assert second.headers["RateLimit-Remaining"] == "1"
    assert list(redis_client.expiry.values()) == [900]


async def test_limits_are_per_client_behind_trusted_proxy(redis_client):
    # ASGITransport reports the peer as 127.0.0.1
    app = make_app(redis_client, max_requests=1, auth_max_requests=2, trusted_proxies=["127.0.0.1"])
    async with _client(app) as client:
        assert (await client.get("/api/things", headers={"X-Forwarded-For": "10.0.0.1"})).status_code == 200
        assert (await client.get("/api/things", headers={"X-Forwarded-For": "10.0.0.1"})).status_code == 429
        assert (await client.get("/api/things", headers={"X-Forwarded-For": "10.0.0.2"})).status_code == 200


async def test_spoofed_forwarded_for_is_ignored_without_trusted_proxy(redis_client):
    app = make_app(redis_client, max_requests=1, auth_max_requests=2)
    async with _client(app) as client:
        statuses = [
            (await client.get("/api/things", headers={"X-Forwarded-For": f"10.0.0.{n}"})).status_code
            for n in range(5)
        ]

    assert statuses == [200, 429, 429, 429, 429]
    assert all(":127.0.0.1:" in key for key in redis_client.store)


async def test_forwarded_for_uses_rightmost_untrusted_hop(redis_client):
    app = make_app(redis_client, max_requests=1, auth_max_requests=2, trusted_proxies=["127.0.0.1", "10.9.9.9"])
    async with _client(app) as client:
        first = await client.get("/api/things", headers={"X-Forwarded-For": "1.1.1.1, 203.0.113.7, 10.9.9.9"})
        rotated = await client.get("/api/things", headers={"X-Forwarded-For": "2.2.2.2, 203.0.113.7, 10.9.9.9"})

    assert first.status_code == 200
    assert rotated.status_code == 429


async def test_health_and_non_api_paths_not_limited(redis_client):
    app = make_app(redis_client, max_requests=1, auth_max_requests=1)
    async with _client(app) as client:
        for _ in range(3):
            assert (await client.get("/api/health")).status_code == 200
            assert (await client.get("/other")).status_code == 200

    assert redis_client.store == {}


async def test_successful_logins_count_against_api_limit(redis_client):
    app = make_app(redis_client, max_requests=2, auth_max_requests=5)
    async with _client(app) as client:
        statuses = [
            (await client.post("/api/auth/login", json={"password": "right"})).status_code for _ in range(4)
        ]

    assert statuses == [200, 200, 429, 429]
    assert any(key.startswith("ratelimit:api:") for key in redis_client.store)
    assert not any(key.startswith("ratelimit:auth:") for key in redis_client.store)


async def test_auth_bucket_counts_only_failures(redis_client):
    app = make_app(redis_client, max_requests=100, auth_max_requests=2)
    async with _client(app) as client:
        for _ in range(3):
            assert (await client.post("/api/auth/login", json={"password": "right"})).status_code == 200

        assert (await client.post("/api/auth/login", json={"password": "bad"})).status_code == 401
        assert (await client.post("/api/auth/login", json={"password": "bad"})).status_code == 401
        blocked = await client.post("/api/auth/login", json={"password": "right"})

    assert blocked.status_code == 429
    assert blocked.json() == {"message": TOO_MANY_AUTH_MESSAGE}


async def test_resource_failures_share_the_failed_attempt_bucket(redis_client):
    app = make_app(redis_client, max_requests=100, auth_max_requests=2)
    async with _client(app) as client:
        assert (await client.get("/api/crm/companies/mine")).status_code == 200
        assert (await client.get("/api/crm/companies/guess-1")).status_code == 404
        assert (await client.get("/api/crm/companies/guess-2")).status_code == 404
        blocked = await client.get("/api/crm/companies/mine")
        login = await client.post("/api/auth/login", json={"password": "right"})

    assert blocked.status_code == 429
    assert blocked.json() == {"message": TOO_MANY_AUTH_MESSAGE}
    assert login.status_code == 429


async def test_failures_outside_guarded_prefixes_are_not_counted(redis_client):
    app = make_app(redis_client, max_requests=100, auth_max_requests=1)
    async with _client(app) as client:
        for _ in range(3):
            assert (await client.get("/api/invoices/missing")).status_code == 404

    assert not any(key.startswith("ratelimit:auth:") for key in redis_client.store)


def test_default_failed_attempt_prefixes():
    prefixes = default_failed_attempt_prefixes()

    assert set(prefixes) == {
        "/api/auth", "/api/crm", "/api/marketing", "/api/documents", "/api/branches", "/api/erp",
    }
    assert path_under("/api/crm/leads/1", "/api/crm")
    assert path_under("/api/branches", "/api/branches")
    assert not path_under("/api/crmx", "/api/crm")


async def test_redis_down_allows_request():
    broken = AsyncMock()
    broken.incr.side_effect = RedisConnectionError("connection refused")
    app = make_app(broken, max_requests=1, auth_max_requests=1)

    async with _client(app) as client:
        for _ in range(3):
            assert (await client.get("/api/things")).status_code == 200
            assert (await client.post("/api/auth/login", json={"password": "bad"})).status_code == 401


async def test_disabled_middleware_skips_redis():
    broken = AsyncMock()
    app = FastAPI()

    @app.get("/api/things")
    async def things():
        return {"ok": True}

    async def factory():
        return broken

    app.add_middleware(RateLimitMiddleware, redis_factory=factory, enabled=False)
    async with _client(app) as client:
        assert (await client.get("/api/things")).status_code == 200

    broken.incr.assert_not_called()


def test_window_key_changes_between_windows():
    limiter = FixedWindowRateLimiter(FakeRedis(), window_seconds=900)

    assert limiter.key("api", "1.2.3.4", now=0) == limiter.key("api", "1.2.3.4", now=899)
    assert limiter.key("api", "1.2.3.4", now=0) != limiter.key("api", "1.2.3.4", now=900)
    assert limiter.key("api", "1.2.3.4", now=0).startswith("ratelimit:api:1.2.3.4:")
