"""Unit tests for the cache-backed zoo state ledger."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime
from zoo.models.enums import EventType
from zoo.services.zoo_state_store import admissions_key, bucket_key


class TestKeys:
    def test_bucket_key_is_unpadded_date_and_hour(self):
        when = datetime(2026, 3, 7, 9, 45)
        assert bucket_key(when, EventType.ENTRY) == "2026-3-7:ENTRY@9"
        assert bucket_key(when, EventType.EXIT) == "2026-3-7:EXIT@9"

    def test_admissions_key(self):
        assert admissions_key(datetime(2026, 12, 31, 23, 59)) == "2026-12-31:ADMISSIONS"


class TestEvents:
    @pytest.mark.asyncio
    async def test_append_creates_bucket_and_period_log(self, state, cache):
        when = datetime(2026, 10, 19, 14, 5)
        await state.append_event("t-1", when, EventType.ENTRY)

        expected = [{"ticketId": "t-1", "date": "2026-10-19T14:05:00"}]
        assert cache.docs["2026-10-19:ENTRY@14"] == expected
        assert cache.docs["entries"] == expected
        assert await state.count_entries() == 1
        assert await state.count_exits() == 0

    @pytest.mark.asyncio
    async def test_events_split_by_hour(self, state):
        await state.append_event("t-1", datetime(2026, 10, 19, 9, 59), EventType.EXIT)
        await state.append_event("t-2", datetime(2026, 10, 19, 10, 0), EventType.EXIT)
        await state.append_event("t-3", datetime(2026, 10, 19, 10, 30), EventType.EXIT)

        assert [e["ticketId"] for e in await state.exits_at(datetime(2026, 10, 19, 9))] == ["t-1"]
        assert [e["ticketId"] for e in await state.exits_at(datetime(2026, 10, 19, 10))] == ["t-2", "t-3"]
        assert await state.count_exits() == 3

    @pytest.mark.asyncio
    async def test_empty_bucket_reads_as_empty(self, state):
        assert await state.entries_at(datetime(2020, 1, 1)) == []
        assert await state.entries() == []

    @pytest.mark.asyncio
    async def test_existing_bucket_is_not_overwritten(self, state, cache):
        when = datetime(2026, 10, 19, 8)
        cache.docs[bucket_key(when, EventType.ENTRY)] = [{"ticketId": "earlier", "date": "x"}]

        await state.append_event("t-1", when, EventType.ENTRY)
        assert len(await state.entries_at(when)) == 2


class TestOpenClosed:
    @pytest.mark.asyncio
    async def test_absent_flag_means_closed(self, state):
        assert await state.is_open() is False
        assert await state.opened_at() is None

    @pytest.mark.asyncio
    async def test_set_open_writes(self, state, cache, clock):
        await state.set_open(True)
        assert cache.values["zooState"] == "open"
        assert cache.values["openedAt"] == clock.now.isoformat()
        assert cache.values["closedAt"] == ""
        assert cache.docs["entries"] == [] and cache.docs["exits"] == []

        await state.set_open(False)
        assert cache.values["zooState"] == "closed"
        assert await state.closed_at() == clock.now
        assert await state.opened_at() == clock.now

    @pytest.mark.asyncio
    async def test_admissions_counter(self, state, clock):
        assert await state.record_admission(clock.now) == 1
        assert await state.record_admission(clock.now) == 2
        assert await state.admissions_on(clock.now) == 2
