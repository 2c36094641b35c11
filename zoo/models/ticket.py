"""
Tickets table.
spaces is the ordered allow-list (visiting order for EscapeGame tickets);
visited_spaces is append-only [{space, visited_at}].
version is bumped on every admission update and used for compare-and-swap.
"""

import uuid
from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON
from zoo.database import Base


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    ticket_type = Column(String(20), nullable=False)   # DayPass | WeekendPass | AnnualPass | MonthlyPass | EscapeGame
    valid = Column(Boolean, nullable=False, default=True)
    spaces = Column(JSON, nullable=False, default=list)
    visited_spaces = Column(JSON, nullable=False, default=list)
    escape_game_step = Column(Integer, nullable=False, default=0)
    valid_from = Column(DateTime, nullable=False)
    valid_until = Column(DateTime, nullable=False, index=True)
    user_id = Column(String(100), nullable=False, index=True)
    last_visited_space = Column(String(36))
    disabled = Column(Boolean, nullable=False, default=False)
    kids = Column(Boolean, nullable=False, default=False)
    pregnant = Column(Boolean, nullable=False, default=False)
    wheelchair = Column(Boolean, nullable=False, default=False)
    celebrity = Column(Boolean, nullable=False, default=False)
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<Ticket {self.id} type={self.ticket_type} valid={self.valid} step={self.escape_game_step}>"
