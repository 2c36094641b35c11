"""Unit tests for the zoo gate (open/close state machine and staffing check)."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock
from zoo.errors import AlreadyClosedError, AlreadyOpenError, StaffingInsufficientError, VisitorsStillInsideError
from zoo.models.enums import EventType, JobTitle
from zoo.services.zoo_service import REQUIRED_ROLES


async def record(state, clock, kind, count):
    for i in range(count):
        await state.append_event(f"ticket-{kind.value}-{i}", clock.now, kind)


class TestStaffing:
    @pytest.mark.asyncio
    async def test_requirements_in_fixed_order(self, zoo_service, hire):
        hire(JobTitle.CLEANER, 2)
        hire(JobTitle.KEEPER)

        assert await zoo_service.staff_requirements() == [
            {"role": "Receptionist", "count": 0},
            {"role": "Caretaker", "count": 0},
            {"role": "Cleaner", "count": 2},
            {"role": "Vendor", "count": 0},
        ]

    @pytest.mark.asyncio
    async def test_can_open_lists_missing_roles(self, zoo_service, hire):
        hire(JobTitle.CARETAKER)
        hire(JobTitle.VENDOR)

        assert await zoo_service.can_open() == {"can_open": False, "missing": ["Receptionist", "Cleaner"]}

    @pytest.mark.asyncio
    async def test_can_open_with_full_staff(self, zoo_service, full_staff):
        assert await zoo_service.can_open() == {"can_open": True, "missing": []}

    @pytest.mark.asyncio
    async def test_one_count_query_per_role(self, state):
        from zoo.services.zoo_service import ZooService
        staff = AsyncMock()
        staff.count_by_title.return_value = 1

        assert (await ZooService(state, staff).can_open())["can_open"] is True
        assert [c.args[0] for c in staff.count_by_title.call_args_list] == list(REQUIRED_ROLES)


class TestOpen:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("absent", REQUIRED_ROLES)
    async def test_any_missing_role_blocks_open(self, zoo_service, hire, state, absent):
        for role in REQUIRED_ROLES:
            if role != absent:
                hire(role)

        with pytest.raises(StaffingInsufficientError) as exc:
            await zoo_service.open()
        assert exc.value.missing == [absent.value]
        assert await state.is_open() is False

    @pytest.mark.asyncio
    async def test_closed_by_default_then_open_once(self, zoo_service, full_staff, state):
        assert await state.is_open() is False

        await zoo_service.open()
        assert await state.is_open() is True

        with pytest.raises(AlreadyOpenError):
            await zoo_service.open()

    @pytest.mark.asyncio
    async def test_open_resets_period_logs(self, zoo_service, full_staff, state, clock):
        await zoo_service.force_set_open(True)
        await record(state, clock, EventType.ENTRY, 2)
        await record(state, clock, EventType.EXIT, 2)
        await zoo_service.close()

        clock.advance(hours=12)
        await zoo_service.open()

        snapshot = await zoo_service.get_state()
        assert snapshot["opened"] is True
        assert snapshot["entries"] == []
        assert snapshot["exits"] == []
        assert snapshot["opened_at"] == clock.now
        assert snapshot["closed_at"] is None
        # hour buckets are history, not reset
        assert len(await state.entries_at(clock.now - timedelta(hours=12))) == 2


class TestClose:
    @pytest.mark.asyncio
    async def test_close_when_closed(self, zoo_service):
        with pytest.raises(AlreadyClosedError):
            await zoo_service.close()

    @pytest.mark.asyncio
    async def test_visitors_inside_block_close(self, zoo_service, full_staff, state, clock):
        await zoo_service.open()
        await record(state, clock, EventType.ENTRY, 3)
        await record(state, clock, EventType.EXIT, 1)

        with pytest.raises(VisitorsStillInsideError) as exc:
            await zoo_service.close()
        assert exc.value.inside == 2

        await state.append_event("late-1", clock.now, EventType.EXIT)
        await state.append_event("late-2", clock.now, EventType.EXIT)
        await zoo_service.close()
        assert await state.is_open() is False
        assert await state.closed_at() == clock.now

    @pytest.mark.asyncio
    async def test_visitors_from_earlier_hours_still_count(self, zoo_service, full_staff, state, clock):
        await zoo_service.open()
        await record(state, clock, EventType.ENTRY, 1)
        clock.advance(hours=3)

        with pytest.raises(VisitorsStillInsideError):
            await zoo_service.close()


class TestForce:
    @pytest.mark.asyncio
    async def test_force_open_without_staff(self, zoo_service, state):
        await zoo_service.force_set_open(True)
        assert await state.is_open() is True

    @pytest.mark.asyncio
    async def test_force_close_with_visitors_inside(self, zoo_service, state, clock):
        await zoo_service.force_set_open(True)
        await record(state, clock, EventType.ENTRY, 4)

        await zoo_service.force_set_open(False)
        assert await state.is_open() is False
        assert await state.count_entries() == 4


class TestState:
    @pytest.mark.asyncio
    async def test_state_includes_staffing(self, zoo_service, hire):
        hire(JobTitle.RECEPTIONIST)

        snapshot = await zoo_service.get_state()
        assert snapshot["opened"] is False
        assert snapshot["opened_at"] is None
        assert snapshot["can_open"] is False
        assert snapshot["staff_requirements"][0] == {"role": "Receptionist", "count": 1}
        assert snapshot["admissions_today"] == 0
