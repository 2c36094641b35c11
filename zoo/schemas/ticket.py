from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional
from zoo.models.enums import TicketType
from zoo.utils.time_utils import to_naive_utc


class TicketCreate(BaseModel):
    ticket_type: TicketType
    spaces: list[str] = []       # visiting order matters for EscapeGame
    valid_from: datetime
    valid_until: datetime
    user_id: str
    disabled: bool = False
    kids: bool = False
    pregnant: bool = False
    wheelchair: bool = False
    celebrity: bool = False

    @field_validator("valid_from", "valid_until")
    @classmethod
    def normalize_dates(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class VisitedSpaceOut(BaseModel):
    space: str
    visited_at: datetime


class TicketOut(BaseModel):
    id: str
    ticket_type: TicketType
    valid: bool
    spaces: list[str]
    visited_spaces: list[VisitedSpaceOut]
    escape_game_step: int
    valid_from: datetime
    valid_until: datetime
    user_id: str
    last_visited_space: Optional[str]
    disabled: bool
    kids: bool
    pregnant: bool
    wheelchair: bool
    celebrity: bool

    class Config:
        from_attributes = True


class TicketUse(BaseModel):
    space_id: str


class TicketUpdate(BaseModel):
    """Only the fields sent are changed."""
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    user_id: Optional[str] = None
    disabled: Optional[bool] = None
    kids: Optional[bool] = None
    pregnant: Optional[bool] = None
    wheelchair: Optional[bool] = None
    celebrity: Optional[bool] = None

    @field_validator("valid_from", "valid_until")
    @classmethod
    def normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)
