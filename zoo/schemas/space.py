from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional
from zoo.models.enums import SpaceLogType, SpaceSize, SpaceType
from zoo.utils.time_utils import to_naive_utc


class SpaceCreate(BaseModel):
    name: str
    description: str = ""
    type: SpaceType = SpaceType.OUTDOOR
    capacity: int = Field(0, ge=0)
    duration: int = Field(0, ge=0)     # minutes
    size: SpaceSize = SpaceSize.MEDIUM
    opening_start: Optional[str] = None   # HH:MM
    opening_end: Optional[str] = None
    is_accessible_for_disabled: bool = True


class SpaceUpdate(BaseModel):
    """Only the fields sent are changed."""
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[SpaceType] = None
    capacity: Optional[int] = Field(None, ge=0)
    duration: Optional[int] = Field(None, ge=0)
    size: Optional[SpaceSize] = None
    opening_start: Optional[str] = None
    opening_end: Optional[str] = None
    is_accessible_for_disabled: Optional[bool] = None


class SpaceOut(BaseModel):
    id: str
    name: str
    description: str
    type: str
    capacity: int
    duration: int
    size: str
    opening_start: Optional[str]
    opening_end: Optional[str]
    is_accessible_for_disabled: bool
    is_under_maintenance: bool
    maintenance_start: Optional[datetime]
    expected_maintenance_end: Optional[datetime]
    maintenance_reason: Optional[str]
    maintenance_log: Optional[str]

    class Config:
        from_attributes = True


class MaintenanceEnd(BaseModel):
    reason: Optional[str] = None      # recorded as a new Maintenance log
    log_id: Optional[str] = None      # or an existing log of this space


class MaintenanceStart(MaintenanceEnd):
    expected_maintenance_end: Optional[datetime] = None

    @field_validator("expected_maintenance_end")
    @classmethod
    def normalize_end(cls, value):
        return to_naive_utc(value)


class SpaceLogCreate(BaseModel):
    message: str = Field(..., min_length=1)
    type: SpaceLogType = SpaceLogType.INFO


class SpaceLogOut(BaseModel):
    id: str
    space_id: str
    message: str
    type: SpaceLogType
    created_at: datetime

    class Config:
        from_attributes = True
