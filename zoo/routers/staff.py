"""Staff directory endpoints."""

from fastapi import APIRouter, Depends
from typing import Optional
from zoo.dependencies import get_staff_service
from zoo.models.enums import JobTitle
from zoo.schemas.staff import StaffAssignSpace, StaffCreate, StaffOut, StaffUpdate
from zoo.services.staff_service import StaffService

router = APIRouter()


@router.get("/staff", response_model=list[StaffOut], summary="List staff, filterable by job title")
def list_staff(title: Optional[JobTitle] = None, staff: StaffService = Depends(get_staff_service)):
    return staff.list_staff(title)


@router.post("/staff", response_model=StaffOut, status_code=201, summary="Hire a staff member")
def create_staff(body: StaffCreate, staff: StaffService = Depends(get_staff_service)):
    """Staff created without a schedule get the default week for their job title."""
    fields = body.model_dump(exclude={"job_title", "job_schedule"})
    schedule = [entry.model_dump() for entry in body.job_schedule]
    return staff.create_staff(body.job_title, schedule, **fields)


@router.get("/staff/{staff_id}", response_model=StaffOut)
def get_staff(staff_id: str, staff: StaffService = Depends(get_staff_service)):
    return staff.get_staff(staff_id)


@router.put("/staff/{staff_id}", response_model=StaffOut, summary="Update a staff member")
def update_staff(staff_id: str, body: StaffUpdate, staff: StaffService = Depends(get_staff_service)):
    return staff.update_staff(staff_id, **body.model_dump(exclude_none=True))


@router.put("/staff/{staff_id}/assign-space", response_model=StaffOut, summary="Assign a staff member to a space")
def assign_space(staff_id: str, body: StaffAssignSpace, staff: StaffService = Depends(get_staff_service)):
    return staff.assign_space(staff_id, body.space_id)


@router.delete("/staff/{staff_id}", status_code=204)
def delete_staff(staff_id: str, staff: StaffService = Depends(get_staff_service)):
    staff.delete_staff(staff_id)
