from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class GateEventOut(BaseModel):
    ticket_id: str = Field(alias="ticketId")
    date: datetime


class StaffRequirementOut(BaseModel):
    role: str
    count: int


class CanOpenOut(BaseModel):
    can_open: bool
    missing: list[str]


class ZooStateOut(BaseModel):
    opened: bool
    opened_at: Optional[datetime]
    closed_at: Optional[datetime]
    entries: list[GateEventOut]
    exits: list[GateEventOut]
    admissions_today: int
    staff_requirements: list[StaffRequirementOut]
    can_open: bool


class ForceOpen(BaseModel):
    opened: bool
