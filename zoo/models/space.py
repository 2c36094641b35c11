"""
Spaces table: the physical zones of the zoo a ticket may allow.
Maintenance state is re-read by the admission engine at ticket creation and use.
"""

import uuid
from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text
from zoo.database import Base


class Space(Base):
    __tablename__ = "spaces"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    type = Column(String(20), nullable=False, default="Outdoor")   # Indoor | Outdoor
    capacity = Column(Integer, nullable=False, default=0)
    duration = Column(Integer, nullable=False, default=0)          # typical visit, minutes
    size = Column(String(5), nullable=False, default="M")          # S | M | L | XL | XXL
    opening_start = Column(String(10))
    opening_end = Column(String(10))
    is_accessible_for_disabled = Column(Boolean, nullable=False, default=True)
    is_under_maintenance = Column(Boolean, nullable=False, default=False)
    maintenance_start = Column(DateTime)
    expected_maintenance_end = Column(DateTime)
    maintenance_reason = Column(Text)
    maintenance_log = Column(String(36))                           # space_logs.id
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<Space {self.id} name={self.name} maintenance={self.is_under_maintenance}>"
