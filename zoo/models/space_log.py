"""
Space logs: dated notes attached to a space (incidents, animal notes, maintenance).
Starting and ending maintenance with a reason writes a Maintenance entry here.
"""

import uuid
from sqlalchemy import Column, String, DateTime, Text
from zoo.database import Base


class SpaceLog(Base):
    __tablename__ = "space_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    space_id = Column(String(36), nullable=False, index=True)   # spaces.id
    message = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default="Info")   # Info | Accident | Maintenance | Animal | Other
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<SpaceLog {self.id} space={self.space_id} type={self.type}>"
