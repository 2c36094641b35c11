"""
Zoo gate: the Closed <-> Open state machine.

Opening needs at least one Receptionist, Caretaker, Cleaner and Vendor on staff.
Closing needs everyone who entered during the open period to have exited.
force_set_open skips both guards but performs the same state writes.
"""

import asyncio

from zoo.errors import (
    AlreadyClosedError,
    AlreadyOpenError,
    StaffingInsufficientError,
    VisitorsStillInsideError,
)
from zoo.models.enums import JobTitle
from zoo.services.staff_service import StaffService
from zoo.services.zoo_state_store import ZooStateStore
from zoo.utils.logger import get_logger

logger = get_logger(__name__)

REQUIRED_ROLES = (JobTitle.RECEPTIONIST, JobTitle.CARETAKER, JobTitle.CLEANER, JobTitle.VENDOR)


class ZooService:
    def __init__(self, state: ZooStateStore, staff: StaffService) -> None:
        self.state = state
        self.staff = staff

    async def staff_requirements(self) -> list[dict]:
        """Current headcount for each required role, in REQUIRED_ROLES order."""
        counts = await asyncio.gather(*(self.staff.count_by_title(role) for role in REQUIRED_ROLES))
        return [{"role": role.value, "count": count} for role, count in zip(REQUIRED_ROLES, counts)]

    async def can_open(self) -> dict:
        requirements = await self.staff_requirements()
        missing = [r["role"] for r in requirements if r["count"] < 1]
        return {"can_open": not missing, "missing": missing}

    async def open(self) -> None:
        if await self.state.is_open():
            raise AlreadyOpenError()
        check = await self.can_open()
        if not check["can_open"]:
            logger.warning(f"[GATE] open refused, missing staff: {check['missing']}")
            raise StaffingInsufficientError(check["missing"])
        await self.state.set_open(True)
        logger.info("[GATE] zoo opened")

    async def close(self) -> None:
        if not await self.state.is_open():
            raise AlreadyClosedError()
        entries = await self.state.count_entries()
        exits = await self.state.count_exits()
        if entries > exits:
            logger.warning(f"[GATE] close refused, {entries - exits} visitors inside")
            raise VisitorsStillInsideError(entries - exits)
        await self.state.set_open(False)
        logger.info("[GATE] zoo closed")

    async def force_set_open(self, opened: bool) -> None:
        logger.warning(f"[GATE] forced {'open' if opened else 'closed'}")
        await self.state.set_open(opened)

    async def get_state(self) -> dict:
        state = await self.state.get_state()
        requirements = await self.staff_requirements()
        state["staff_requirements"] = requirements
        state["can_open"] = all(r["count"] >= 1 for r in requirements)
        return state
