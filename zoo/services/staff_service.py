"""
Staff directory: staff records and per-title headcounts.
The zoo gate only needs count_by_title; the rest backs the /staff endpoints.
"""

from typing import Optional

from sqlalchemy.orm import Session

from zoo.errors import StaffNotFoundError
from zoo.models.enums import JobTitle
from zoo.models.staff import Staff
from zoo.services.space_service import SpaceService, is_valid_id
from zoo.stores.document_store import DocumentStore
from zoo.utils.logger import get_logger
from zoo.utils.time_utils import utcnow

logger = get_logger(__name__)

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")


def _week(days, start: str, end: str) -> list[dict]:
    return [{"day": day, "start_time": start, "end_time": end} for day in days]


NINE_TO_FIVE = _week(WEEKDAYS, "09:00", "17:00")
EIGHT_TO_FOUR = _week(("Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"), "08:00", "16:00")
ADMIN_HOURS = _week(WEEKDAYS + ("Saturday", "Sunday"), "11:00", "00:00")

DEFAULT_SCHEDULES = {
    JobTitle.DIRECTOR: ADMIN_HOURS,
    JobTitle.MANAGER: ADMIN_HOURS,
    JobTitle.REGISTRAR: EIGHT_TO_FOUR,
    JobTitle.VETERINARIAN: EIGHT_TO_FOUR,
}
ADMIN_TITLES = {JobTitle.DIRECTOR, JobTitle.MANAGER}


def default_schedule(title: JobTitle) -> list[dict]:
    return [dict(slot) for slot in DEFAULT_SCHEDULES.get(title, NINE_TO_FIVE)]


class StaffService:
    def __init__(self, db: Session) -> None:
        self.store = DocumentStore(db, Staff)
        self.spaces = SpaceService(db)

    async def count_by_title(self, title: JobTitle) -> int:
        return self.store.count_where({"job.title": title.value})

    def create_staff(self, job_title: JobTitle, job_schedule: Optional[list[dict]] = None, **fields) -> Staff:
        if fields.get("assigned_space"):
            self.spaces.require_space(fields["assigned_space"])
        staff = Staff(
            job_title=job_title.value,
            job_schedule=job_schedule or default_schedule(job_title),
            is_admin=job_title in ADMIN_TITLES,
            created_at=utcnow(),
            **fields,
        )
        staff = self.store.create(staff)
        logger.info(f"[STAFF] created {staff.id} as {staff.job_title}")
        return staff

    def list_staff(self, title: Optional[JobTitle] = None) -> list[Staff]:
        return self.store.find({"job.title": title.value} if title else None)

    def get_staff(self, staff_id: str) -> Staff:
        staff = self.store.find_by_id(staff_id) if is_valid_id(staff_id) else None
        if staff is None:
            raise StaffNotFoundError(staff_id)
        return staff

    def delete_staff(self, staff_id: str) -> None:
        if not is_valid_id(staff_id) or not self.store.delete_by_id(staff_id):
            raise StaffNotFoundError(staff_id)
        logger.info(f"[STAFF] deleted {staff_id}")

    def update_staff(self, staff_id: str, **fields) -> Staff:
        """A new job title re-derives is_admin; the schedule is only replaced when given."""
        self.get_staff(staff_id)
        title = fields.pop("job_title", None)
        if title is not None:
            fields["job_title"] = JobTitle(title).value
            fields["is_admin"] = JobTitle(title) in ADMIN_TITLES
        updated = self.store.update_by_id(staff_id, fields)
        logger.info(f"[STAFF] updated {staff_id}: {', '.join(sorted(fields)) or 'nothing'}")
        return updated

    def assign_space(self, staff_id: str, space_id: Optional[str]) -> Staff:
        """None unassigns."""
        self.get_staff(staff_id)
        if space_id is not None:
            self.spaces.require_space(space_id)
        updated = self.store.update_by_id(staff_id, {"assigned_space": space_id})
        logger.info(f"[STAFF] {staff_id} assigned to {space_id or 'no space'}")
        return updated
