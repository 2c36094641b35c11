from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from zoo.models.enums import JobTitle


class JobScheduleEntry(BaseModel):
    day: str
    start_time: str
    end_time: str


class StaffCreate(BaseModel):
    first_name: str
    last_name: str
    email: str
    job_title: JobTitle
    job_schedule: list[JobScheduleEntry] = []   # empty -> default week for the title
    birth_date: Optional[datetime] = None
    years_of_experience: int = Field(0, ge=0)
    salary: Optional[float] = None
    assigned_space: Optional[str] = None


class StaffOut(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    job_title: str
    job_schedule: list[JobScheduleEntry]
    years_of_experience: int
    salary: Optional[float]
    is_admin: bool
    assigned_space: Optional[str]

    class Config:
        from_attributes = True


class StaffUpdate(BaseModel):
    """Only the fields sent are changed; assigned_space has its own endpoint."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    job_title: Optional[JobTitle] = None
    job_schedule: Optional[list[JobScheduleEntry]] = None
    birth_date: Optional[datetime] = None
    years_of_experience: Optional[int] = Field(None, ge=0)
    salary: Optional[float] = None


class StaffAssignSpace(BaseModel):
    space_id: Optional[str] = None   # null unassigns
