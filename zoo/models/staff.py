"""
Staff table. job.title drives the opening staffing check; job.schedule is
filled with a default week for the title when none is given.
"""

import uuid
from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON, Float
from zoo.database import Base


class Staff(Base):
    __tablename__ = "staff"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(200), nullable=False)
    birth_date = Column(DateTime)
    job_title = Column(String(50), nullable=False, index=True)
    job_schedule = Column(JSON, nullable=False, default=list)   # [{day, start_time, end_time}]
    years_of_experience = Column(Integer, nullable=False, default=0)
    salary = Column(Float)
    is_admin = Column(Boolean, nullable=False, default=False)
    assigned_space = Column(String(36))                          # spaces.id
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<Staff {self.id} title={self.job_title} admin={self.is_admin}>"
