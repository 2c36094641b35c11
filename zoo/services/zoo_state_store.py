"""
Zoo state ledger kept in the state cache.

Keys:
  zooState                       "open" | "closed" (absent = closed)
  openedAt / closedAt            ISO timestamps, "" when cleared
  entries / exits                events of the current open period, reset on open
  {Y}-{M}-{D}:{ENTRY|EXIT}@{H}   hour buckets, never reset
  {Y}-{M}-{D}:ADMISSIONS         daily counter of gate entries

The close guard counts the open-period logs; the hour buckets serve reporting.
"""

from datetime import datetime
from typing import Callable, Optional

from zoo.models.enums import EventType
from zoo.stores.state_cache import StateCache
from zoo.utils.logger import get_logger
from zoo.utils.time_utils import parse_iso, utcnow

logger = get_logger(__name__)

STATE_KEY = "zooState"
OPENED_AT_KEY = "openedAt"
CLOSED_AT_KEY = "closedAt"
PERIOD_KEYS = {EventType.ENTRY: "entries", EventType.EXIT: "exits"}


def day_key(when: datetime) -> str:
    return f"{when.year}-{when.month}-{when.day}"


def bucket_key(when: datetime, kind: EventType) -> str:
    """Hour bucket for an event, e.g. 2026-10-19:ENTRY@9."""
    return f"{day_key(when)}:{kind.value}@{when.hour}"


def admissions_key(when: datetime) -> str:
    return f"{day_key(when)}:ADMISSIONS"


class ZooStateStore:
    def __init__(self, cache: StateCache, clock: Callable[[], datetime] = utcnow) -> None:
        self.cache = cache
        self.clock = clock

    # ── Open / closed ────────────────────────────────────────────────────
    async def is_open(self) -> bool:
        return (await self.cache.get(STATE_KEY)) == "open"

    async def set_open(self, opened: bool) -> None:
        now = self.clock().isoformat()
        if opened:
            await self.cache.set(OPENED_AT_KEY, now)
            await self.cache.set(CLOSED_AT_KEY, "")
            for key in PERIOD_KEYS.values():
                await self.cache.json_set_root(key, [])
        else:
            await self.cache.set(CLOSED_AT_KEY, now)
        await self.cache.set(STATE_KEY, "open" if opened else "closed")
        logger.info(f"[STATE] zoo {'opened' if opened else 'closed'} at {now}")

    async def opened_at(self) -> Optional[datetime]:
        return parse_iso(await self.cache.get(OPENED_AT_KEY))

    async def closed_at(self) -> Optional[datetime]:
        return parse_iso(await self.cache.get(CLOSED_AT_KEY))

    # ── Events ───────────────────────────────────────────────────────────
    async def append_event(self, ticket_id: str, timestamp: datetime, kind: EventType) -> None:
        event = {"ticketId": ticket_id, "date": timestamp.isoformat()}
        for key in (bucket_key(timestamp, kind), PERIOD_KEYS[kind]):
            await self.cache.json_ensure_array(key)
            await self.cache.json_array_append(key, event)
        logger.info(f"[STATE] {kind.value} ticket={ticket_id} bucket={bucket_key(timestamp, kind)}")

    async def _events(self, key: str) -> list:
        return await self.cache.json_get(key) or []

    async def entries(self) -> list:
        return await self._events(PERIOD_KEYS[EventType.ENTRY])

    async def exits(self) -> list:
        return await self._events(PERIOD_KEYS[EventType.EXIT])

    async def count_entries(self) -> int:
        return len(await self.entries())

    async def count_exits(self) -> int:
        return len(await self.exits())

    async def entries_at(self, when: datetime) -> list:
        return await self._events(bucket_key(when, EventType.ENTRY))

    async def exits_at(self, when: datetime) -> list:
        return await self._events(bucket_key(when, EventType.EXIT))

    # ── Daily admissions ─────────────────────────────────────────────────
    async def record_admission(self, when: datetime) -> int:
        return await self.cache.increment(admissions_key(when))

    async def admissions_on(self, when: datetime) -> int:
        value = await self.cache.get(admissions_key(when))
        return int(value) if value else 0

    async def get_state(self) -> dict:
        """Cache-held part of the zoo state; the gate adds the staffing snapshot."""
        return {
            "opened": await self.is_open(),
            "opened_at": await self.opened_at(),
            "closed_at": await self.closed_at(),
            "entries": await self.entries(),
            "exits": await self.exits(),
            "admissions_today": await self.admissions_on(self.clock()),
        }
