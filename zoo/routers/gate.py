"""Zoo gate endpoints: state, staffing check, open/close and gate event buckets."""

from fastapi import APIRouter, Depends
from datetime import datetime
from typing import Optional
from zoo.dependencies import get_state_store, get_zoo_service
from zoo.schemas.zoo_state import CanOpenOut, ForceOpen, GateEventOut, StaffRequirementOut, ZooStateOut
from zoo.services.zoo_service import ZooService
from zoo.services.zoo_state_store import ZooStateStore
from zoo.utils.time_utils import to_naive_utc, utcnow

router = APIRouter()


@router.get("/zoo/state", response_model=ZooStateOut, summary="Open/closed state, gate events, staffing")
async def get_zoo_state(zoo: ZooService = Depends(get_zoo_service)):
    return await zoo.get_state()


@router.get("/zoo/staff-requirements", response_model=list[StaffRequirementOut])
async def get_staff_requirements(zoo: ZooService = Depends(get_zoo_service)):
    return await zoo.staff_requirements()


@router.get("/zoo/can-open", response_model=CanOpenOut)
async def can_zoo_open(zoo: ZooService = Depends(get_zoo_service)):
    return await zoo.can_open()


@router.post("/zoo/open", summary="Open the zoo (staffing checked)")
async def open_zoo(zoo: ZooService = Depends(get_zoo_service)):
    await zoo.open()
    return {"status": "open"}


@router.post("/zoo/close", summary="Close the zoo (refused while visitors are inside)")
async def close_zoo(zoo: ZooService = Depends(get_zoo_service)):
    await zoo.close()
    return {"status": "closed"}


@router.put("/zoo/force-open", summary="Administrative override of the open/closed state")
async def force_set_zoo_open(body: ForceOpen, zoo: ZooService = Depends(get_zoo_service)):
    await zoo.force_set_open(body.opened)
    return {"status": "open" if body.opened else "closed", "forced": True}


@router.get("/zoo/entries", response_model=list[GateEventOut], summary="Entries in the hour bucket of `at`")
async def get_entries_at(at: Optional[datetime] = None, state: ZooStateStore = Depends(get_state_store)):
    return await state.entries_at(to_naive_utc(at) or utcnow())


@router.get("/zoo/exits", response_model=list[GateEventOut], summary="Exits in the hour bucket of `at`")
async def get_exits_at(at: Optional[datetime] = None, state: ZooStateStore = Depends(get_state_store)):
    return await state.exits_at(to_naive_utc(at) or utcnow())
