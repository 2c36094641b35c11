"""Space directory endpoints: spaces, their logs and the maintenance window."""

from fastapi import APIRouter, Depends
from typing import Optional
from zoo.dependencies import get_space_service
from zoo.schemas.space import (
    MaintenanceEnd,
    MaintenanceStart,
    SpaceCreate,
    SpaceLogCreate,
    SpaceLogOut,
    SpaceOut,
    SpaceUpdate,
)
from zoo.services.space_service import SpaceService

router = APIRouter()


def _enum_values(fields: dict) -> dict:
    for key in ("type", "size"):
        if key in fields:
            fields[key] = fields[key].value
    return fields


@router.get("/spaces", response_model=list[SpaceOut], summary="List spaces")
def list_spaces(under_maintenance: Optional[bool] = None, spaces: SpaceService = Depends(get_space_service)):
    return spaces.list_spaces(under_maintenance)


@router.post("/spaces", response_model=SpaceOut, status_code=201, summary="Create a space")
def create_space(body: SpaceCreate, spaces: SpaceService = Depends(get_space_service)):
    return spaces.create_space(**_enum_values(body.model_dump()))


@router.get("/spaces/{space_id}", response_model=SpaceOut)
def get_space(space_id: str, spaces: SpaceService = Depends(get_space_service)):
    return spaces.require_space(space_id)


@router.put("/spaces/{space_id}", response_model=SpaceOut, summary="Update a space")
def update_space(space_id: str, body: SpaceUpdate, spaces: SpaceService = Depends(get_space_service)):
    return spaces.update_space(space_id, **_enum_values(body.model_dump(exclude_none=True)))


@router.delete("/spaces/{space_id}", status_code=204)
def delete_space(space_id: str, spaces: SpaceService = Depends(get_space_service)):
    spaces.delete_space(space_id)


# ── Logs ─────────────────────────────────────────────────────────────────────

@router.post("/spaces/{space_id}/logs", response_model=SpaceLogOut, status_code=201, summary="Add a space log")
def create_space_log(space_id: str, body: SpaceLogCreate, spaces: SpaceService = Depends(get_space_service)):
    return spaces.add_log(space_id, body.message, body.type)


@router.get("/spaces/{space_id}/logs", response_model=list[SpaceLogOut], summary="Logs of a space, oldest first")
def list_space_logs(space_id: str, spaces: SpaceService = Depends(get_space_service)):
    return spaces.list_logs(space_id)


@router.delete("/spaces/logs/{log_id}", status_code=204)
def delete_space_log(log_id: str, spaces: SpaceService = Depends(get_space_service)):
    spaces.delete_log(log_id)


# ── Maintenance ──────────────────────────────────────────────────────────────

@router.put("/spaces/{space_id}/maintenance", response_model=SpaceOut, summary="Start maintenance")
def start_maintenance(space_id: str, body: MaintenanceStart, spaces: SpaceService = Depends(get_space_service)):
    """
    Put a space under maintenance. New tickets can't include it and
    existing tickets can't be used there until maintenance ends.
    A reason is recorded as a Maintenance log; log_id reuses an existing one.
    """
    return spaces.set_under_maintenance(space_id, body.expected_maintenance_end, body.reason, body.log_id)


@router.delete("/spaces/{space_id}/maintenance", response_model=SpaceOut, summary="End maintenance")
def end_maintenance(space_id: str, body: Optional[MaintenanceEnd] = None,
                    spaces: SpaceService = Depends(get_space_service)):
    body = body or MaintenanceEnd()
    return spaces.end_maintenance(space_id, body.reason, body.log_id)
