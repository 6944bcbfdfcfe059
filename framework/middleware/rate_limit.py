"""
Fixed-window, per-client-IP rate limiting backed by Redis counters.

Two buckets: the general API bucket counts every `/api` request (auth
included). The failed-attempts bucket counts only responses >= 400 on the
auth and resource prefixes, so successful calls there do not use up its quota.
"""

import time
from typing import Awaitable, Callable, Iterable, Optional, Tuple
from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware
from framework.config import settings
from framework.database.manager import DatabaseManager
from framework.response import ResponseModel

TOO_MANY_REQUESTS_MESSAGE = "Too many requests from this IP, please try again later."
TOO_MANY_AUTH_MESSAGE = "Too many authentication attempts from this IP, please try again after 15 minutes."


def default_failed_attempt_prefixes() -> Tuple[str, ...]:
    return (
        settings.API_AUTH_PREFIX,
        settings.API_CRM_PREFIX,
        settings.API_MARKETING_PREFIX,
        settings.API_DOCUMENTS_PREFIX,
        settings.API_BRANCHES_PREFIX,
        settings.API_ACCESS_PREFIX,
    )


def path_under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


async def default_redis_client():
    """Lazily connect the shared Redis client."""
    return await DatabaseManager.get_instance().redis.ensure_client()


class FixedWindowRateLimiter:
    """Counts hits per key inside fixed windows of `window_seconds`."""

    def __init__(self, redis_client, window_seconds: int, prefix: str = "ratelimit"):
        self.redis = redis_client
        self.window_seconds = window_seconds
        self.prefix = prefix

    def _window(self, now: Optional[float] = None) -> Tuple[int, int]:
        now = time.time() if now is None else now
        index = int(now) // self.window_seconds
        reset_in = self.window_seconds - (int(now) % self.window_seconds)
        return index, reset_in

    def key(self, bucket: str, client_id: str, now: Optional[float] = None) -> str:
        index, _ = self._window(now)
        return f"{self.prefix}:{bucket}:{client_id}:{index}"

    async def current(self, bucket: str, client_id: str) -> int:
        value = await self.redis.get(self.key(bucket, client_id))
        return int(value or 0)

    async def hit(self, bucket: str, client_id: str) -> int:
        key = self.key(bucket, client_id)
        count = await self.redis.incr(key)
        if count == 1:
            await self.redis.expire(key, self.window_seconds)
        return count

    def reset_in(self) -> int:
        return self._window()[1]


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        redis_factory: Callable[[], Awaitable] = default_redis_client,
        window_seconds: int = None,
        max_requests: int = None,
        auth_max_requests: int = None,
        enabled: bool = None,
        trusted_proxies: Iterable[str] = None,
        failed_attempt_prefixes: Iterable[str] = None,
    ):
        super().__init__(app)
        self.redis_factory = redis_factory
        self.window_seconds = window_seconds or settings.RATE_LIMIT_WINDOW_SECONDS
        self.max_requests = max_requests or settings.RATE_LIMIT_MAX_REQUESTS
        self.auth_max_requests = auth_max_requests or settings.RATE_LIMIT_AUTH_MAX_REQUESTS
        self.enabled = settings.RATE_LIMIT_ENABLED if enabled is None else enabled
        self.trusted_proxies = set(settings.TRUSTED_PROXIES if trusted_proxies is None else trusted_proxies)
        if failed_attempt_prefixes is None:
            failed_attempt_prefixes = default_failed_attempt_prefixes()
        self.failed_attempt_prefixes = tuple(failed_attempt_prefixes)

    def client_id(self, request: Request) -> str:
        """Peer address. X-Forwarded-For is only honoured when the peer is a trusted proxy."""
        peer = request.client.host if request.client else "unknown"
        if peer not in self.trusted_proxies:
            return peer

        forwarded = request.headers.get("x-forwarded-for", "")
        hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
        # Rightmost hop that is not one of our own proxies
        for hop in reversed(hops):
            if hop not in self.trusted_proxies:
                return hop
        return peer

    def counts_failures(self, path: str) -> bool:
        return any(path_under(path, prefix) for prefix in self.failed_attempt_prefixes)

    def _limited(self, message: str, limit: int, reset_in: int) -> JSONResponse:
        return JSONResponse(
            status_code=429,
            content=ResponseModel.fail(message=message),
            headers={
                "RateLimit-Limit": str(limit),
                "RateLimit-Remaining": "0",
                "RateLimit-Reset": str(reset_in),
            },
        )

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if not self.enabled or not path_under(path, settings.API_PREFIX) or path == f"{settings.API_PREFIX}/health":
            return await call_next(request)

        client_id = self.client_id(request)
        guard_failures = self.counts_failures(path)
        try:
            limiter = FixedWindowRateLimiter(await self.redis_factory(), self.window_seconds)
            count = await limiter.hit("api", client_id)
            failures = await limiter.current("auth", client_id) if guard_failures else 0
        except (RedisError, OSError) as e:
            logger.warning(f"Rate limiter unavailable, allowing request: {str(e)}")
            return await call_next(request)

        if count > self.max_requests:
            logger.warning(f"Rate limit exceeded | Client: {client_id} | Path: {path}")
            return self._limited(TOO_MANY_REQUESTS_MESSAGE, self.max_requests, limiter.reset_in())
        if failures >= self.auth_max_requests:
            logger.warning(f"Failed-attempt limit exceeded | Client: {client_id} | Path: {path}")
            return self._limited(TOO_MANY_AUTH_MESSAGE, self.auth_max_requests, limiter.reset_in())

        response = await call_next(request)
        if guard_failures and response.status_code >= 400:
            try:
                await limiter.hit("auth", client_id)
            except (RedisError, OSError) as e:
                logger.warning(f"Rate limiter unavailable, failed attempt not counted: {str(e)}")

        response.headers["RateLimit-Limit"] = str(self.max_requests)
        response.headers["RateLimit-Remaining"] = str(max(self.max_requests - count, 0))
        response.headers["RateLimit-Reset"] = str(limiter.reset_in())
        return response
