"""
Thin async wrapper over the Redis client used for zoo state.
Plain string keys for flags and timestamps, RedisJSON documents for event logs.
Every JSON array write is a single server-side command, so concurrent writers
never lose appends.
"""

from typing import Any, Optional

import redis.asyncio as redis

ROOT = "$"


class StateCache:
    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def set(self, key: str, value: str) -> None:
        await self.client.set(key, value)

    async def increment(self, key: str) -> int:
        return await self.client.incr(key)

    async def json_get(self, key: str) -> Any:
        return await self.client.json().get(key)

    async def json_set_root(self, key: str, value: Any) -> None:
        await self.client.json().set(key, ROOT, value)

    async def json_ensure_array(self, key: str) -> None:
        """Create an empty array at key unless something is already there (JSON.SET ... NX)."""
        await self.client.json().set(key, ROOT, [], nx=True)

    async def json_array_append(self, key: str, value: Any, path: str = ROOT) -> int:
        """Atomic JSON.ARRAPPEND; returns the new array length."""
        lengths = await self.client.json().arrappend(key, path, value)
        if isinstance(lengths, list):
            return lengths[0] or 0
        return lengths or 0

    async def ping(self) -> bool:
        return await self.client.ping()
