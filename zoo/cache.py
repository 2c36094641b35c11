"""
State cache connection.
Zoo open/closed state and entry/exit buckets live in Redis (RedisJSON module
required for the JSON.* commands). One client per process, created lazily.
"""

import redis.asyncio as redis
from zoo.config import settings

_client = None


def get_redis() -> redis.Redis:
    """FastAPI dependency: returns the shared async Redis client."""
    global _client
    if _client is None:
        _client = redis.from_url(settings.REDIS_URL, decode_responses=True)
    return _client


async def close_redis():
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
