"""
Space directory: space records, their logs and their maintenance window.
The admission engine reads spaces through here; maintenance start/end is
administrative, logged, and recorded as a Maintenance space log when a
reason is given.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from zoo.errors import (
    SpaceAlreadyUnderMaintenanceError,
    SpaceLogNotFoundError,
    SpaceNameTakenError,
    SpaceNotFoundError,
    SpaceNotUnderMaintenanceError,
)
from zoo.models.enums import SpaceLogType
from zoo.models.space import Space
from zoo.models.space_log import SpaceLog
from zoo.stores.document_store import DocumentStore
from zoo.utils.logger import get_logger
from zoo.utils.time_utils import utcnow

logger = get_logger(__name__)


def is_valid_id(value) -> bool:
    """Record ids are canonical UUID strings: lowercase, dashed, no braces or urn prefix."""
    text = str(value)
    try:
        return str(uuid.UUID(text)) == text
    except ValueError:
        return False


class SpaceService:
    def __init__(self, db: Session) -> None:
        self.store = DocumentStore(db, Space)
        self.logs = DocumentStore(db, SpaceLog)

    def get_space(self, space_id: str) -> Optional[Space]:
        if not is_valid_id(space_id):
            return None
        return self.store.find_by_id(space_id)

    def require_space(self, space_id: str) -> Space:
        space = self.get_space(space_id)
        if space is None:
            raise SpaceNotFoundError(space_id)
        return space

    def list_spaces(self, under_maintenance: Optional[bool] = None) -> list[Space]:
        filters = {} if under_maintenance is None else {"is_under_maintenance": under_maintenance}
        return self.store.find(filters)

    def _check_name_free(self, name: str, space_id: Optional[str] = None) -> None:
        if any(s.id != space_id for s in self.store.find({"name": name})):
            raise SpaceNameTakenError(name)

    def create_space(self, **fields) -> Space:
        self._check_name_free(fields["name"])
        space = self.store.create(Space(created_at=utcnow(), **fields))
        logger.info(f"[SPACE] created {space.id} ({space.name})")
        return space

    def update_space(self, space_id: str, **fields) -> Space:
        """Descriptive fields only; the maintenance window has its own operations."""
        self.require_space(space_id)
        if "name" in fields:
            self._check_name_free(fields["name"], space_id)
        updated = self.store.update_by_id(space_id, fields)
        logger.info(f"[SPACE] updated {space_id}: {', '.join(sorted(fields)) or 'nothing'}")
        return updated

    def delete_space(self, space_id: str) -> None:
        if not is_valid_id(space_id) or not self.store.delete_by_id(space_id):
            raise SpaceNotFoundError(space_id)
        dropped = self.logs.delete_where({"space_id": space_id})
        logger.info(f"[SPACE] deleted {space_id} and {dropped} log(s)")

    # ── Logs ─────────────────────────────────────────────────────────────
    def add_log(self, space_id: str, message: str, log_type: SpaceLogType = SpaceLogType.INFO) -> SpaceLog:
        self.require_space(space_id)
        log = self.logs.create(SpaceLog(
            space_id=space_id,
            message=message,
            type=SpaceLogType(log_type).value,
            created_at=utcnow(),
        ))
        logger.info(f"[SPACE] {space_id} log {log.id} [{log.type}] {message}")
        return log

    def list_logs(self, space_id: str) -> list[SpaceLog]:
        self.require_space(space_id)
        return sorted(self.logs.find({"space_id": space_id}), key=lambda log: log.created_at)

    def get_log(self, log_id: str) -> SpaceLog:
        log = self.logs.find_by_id(log_id) if is_valid_id(log_id) else None
        if log is None:
            raise SpaceLogNotFoundError(log_id)
        return log

    def delete_log(self, log_id: str) -> None:
        if not is_valid_id(log_id) or not self.logs.delete_by_id(log_id):
            raise SpaceLogNotFoundError(log_id)
        logger.info(f"[SPACE] deleted log {log_id}")

    # ── Maintenance ──────────────────────────────────────────────────────
    def _maintenance_log(self, space_id: str, reason: Optional[str], log_id: Optional[str]) -> Optional[SpaceLog]:
        """An existing log of this space, or a new Maintenance log for the reason, or nothing."""
        if log_id:
            log = self.get_log(log_id)
            if log.space_id != space_id:
                raise SpaceLogNotFoundError(log_id)
            return log
        if reason:
            return self.add_log(space_id, reason, SpaceLogType.MAINTENANCE)
        return None

    def set_under_maintenance(self, space_id: str, expected_end: Optional[datetime] = None,
                              reason: Optional[str] = None, log_id: Optional[str] = None) -> Space:
        space = self.require_space(space_id)
        if space.is_under_maintenance:
            raise SpaceAlreadyUnderMaintenanceError(space_id)
        log = self._maintenance_log(space_id, reason, log_id)
        updated = self.store.update_by_id(space_id, {
            "is_under_maintenance": True,
            "maintenance_start": utcnow(),
            "expected_maintenance_end": expected_end,
            "maintenance_reason": log.message if log else None,
            "maintenance_log": log.id if log else None,
        })
        logger.warning(f"[SPACE] {space_id} under maintenance until {expected_end or 'further notice'}"
                       f"{f' ({log.message})' if log else ''}")
        return updated

    def end_maintenance(self, space_id: str, reason: Optional[str] = None, log_id: Optional[str] = None) -> Space:
        """Clears the window. The last reason stays on the space unless a closing one is given."""
        space = self.require_space(space_id)
        if not space.is_under_maintenance:
            raise SpaceNotUnderMaintenanceError(space_id)
        log = self._maintenance_log(space_id, reason, log_id)
        patch = {
            "is_under_maintenance": False,
            "maintenance_start": None,
            "expected_maintenance_end": None,
        }
        if log:
            patch.update({"maintenance_reason": log.message, "maintenance_log": log.id})
        updated = self.store.update_by_id(space_id, patch)
        logger.info(f"[SPACE] {space_id} maintenance ended{f' ({log.message})' if log else ''}")
        return updated
