"""Unit tests for the Redis state cache wrapper (client mocked)."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import AsyncMock, MagicMock
from zoo.stores.state_cache import StateCache


def make_client():
    client = MagicMock()
    client.get = AsyncMock(return_value="open")
    client.set = AsyncMock()
    client.incr = AsyncMock(return_value=5)
    json_commands = MagicMock()
    json_commands.get = AsyncMock(return_value=[{"ticketId": "t-1"}])
    json_commands.set = AsyncMock()
    json_commands.arrappend = AsyncMock(return_value=[3])
    client.json.return_value = json_commands
    return client, json_commands


class TestStateCache:
    @pytest.mark.asyncio
    async def test_plain_keys(self):
        client, _ = make_client()
        cache = StateCache(client)

        assert await cache.get("zooState") == "open"
        await cache.set("zooState", "closed")
        client.set.assert_awaited_once_with("zooState", "closed")
        assert await cache.increment("2026-10-19:ADMISSIONS") == 5

    @pytest.mark.asyncio
    async def test_append_is_single_arrappend(self):
        client, json_commands = make_client()
        cache = StateCache(client)

        length = await cache.json_array_append("entries", {"ticketId": "t-2"})

        assert length == 3
        json_commands.arrappend.assert_awaited_once_with("entries", "$", {"ticketId": "t-2"})
        json_commands.get.assert_not_called()
        json_commands.set.assert_not_called()

    @pytest.mark.asyncio
    async def test_ensure_array_only_sets_when_absent(self):
        client, json_commands = make_client()
        await StateCache(client).json_ensure_array("2026-10-19:EXIT@9")

        json_commands.set.assert_awaited_once_with("2026-10-19:EXIT@9", "$", [], nx=True)

    @pytest.mark.asyncio
    async def test_set_root_and_get(self):
        client, json_commands = make_client()
        cache = StateCache(client)

        await cache.json_set_root("exits", [])
        json_commands.set.assert_awaited_once_with("exits", "$", [])
        assert await cache.json_get("entries") == [{"ticketId": "t-1"}]
