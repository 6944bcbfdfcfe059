import redis.asyncio as redis
from .base import BaseDatabaseDriver

class RedisDriver(BaseDatabaseDriver):
    """Shared asyncio Redis client (rate limit counters); created on first use."""

    def __init__(self, url: str):
        self.url = url
        self.client = None

    async def connect(self):
        # from_url does not open a socket; the first command does
        self.client = redis.from_url(self.url, decode_responses=True)

    async def disconnect(self):
        if self.client:
            await self.client.aclose()
            self.client = None

    def get_client(self):
        return self.client

    async def ensure_client(self):
        if self.client is None:
            await self.connect()
        return self.client
