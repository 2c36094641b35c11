"""
Domain errors raised by the admission engine, the zoo gate and the directories.
Each carries a stable ErrorCode and the HTTP status family the API maps it to.
Infrastructure failures (SQLAlchemy, Redis) are not wrapped and surface as 500s.
"""

from datetime import datetime
from enum import Enum


class ErrorCode(str, Enum):
    # Validation
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_SPACE_ID = "INVALID_SPACE_ID"
    SPACE_UNDER_MAINTENANCE = "SPACE_UNDER_MAINTENANCE"
    SPACE_UNDER_MAINTENANCE_UNTIL = "SPACE_UNDER_MAINTENANCE_UNTIL"
    # Not found
    SPACE_NOT_FOUND = "SPACE_NOT_FOUND"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    STAFF_NOT_FOUND = "STAFF_NOT_FOUND"
    SPACE_LOG_NOT_FOUND = "SPACE_LOG_NOT_FOUND"
    # Ticket state
    TICKET_EXPIRED = "TICKET_EXPIRED"
    TICKET_NOT_YET_VALID = "TICKET_NOT_YET_VALID"
    TICKET_ALREADY_EXITED = "TICKET_ALREADY_EXITED"
    TICKET_NOT_VALID = "TICKET_NOT_VALID"
    NO_ALLOWED_SPACES = "NO_ALLOWED_SPACES"
    ALL_SPACES_VISITED = "ALL_SPACES_VISITED"
    ESCAPE_GAME_FINISHED = "ESCAPE_GAME_FINISHED"
    SPACE_NOT_ALLOWED = "SPACE_NOT_ALLOWED"
    SPACE_ALREADY_VISITED = "SPACE_ALREADY_VISITED"
    OUT_OF_ORDER = "OUT_OF_ORDER"
    CONCURRENT_TICKET_UPDATE = "CONCURRENT_TICKET_UPDATE"
    # Space maintenance
    SPACE_ALREADY_UNDER_MAINTENANCE = "SPACE_ALREADY_UNDER_MAINTENANCE"
    SPACE_NOT_UNDER_MAINTENANCE = "SPACE_NOT_UNDER_MAINTENANCE"
    SPACE_NAME_TAKEN = "SPACE_NAME_TAKEN"
    # Gate
    ALREADY_OPEN = "ALREADY_OPEN"
    ALREADY_CLOSED = "ALREADY_CLOSED"
    STAFFING_INSUFFICIENT = "STAFFING_INSUFFICIENT"
    VISITORS_STILL_INSIDE = "VISITORS_STILL_INSIDE"


class ZooError(Exception):
    """Base domain error with code, user-safe message and HTTP status."""

    status_code = 400
    code: ErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(ZooError):
    status_code = 400


class NotFoundError(ZooError):
    status_code = 404


class ConflictError(ZooError):
    status_code = 409


# ── Validation ───────────────────────────────────────────────────────────────

class InvalidDateRangeError(ValidationError):
    code = ErrorCode.INVALID_DATE_RANGE

    def __init__(self) -> None:
        super().__init__("The expiration date must come after the start date")


class InvalidSpaceIdError(ValidationError):
    code = ErrorCode.INVALID_SPACE_ID

    def __init__(self, space_id: str) -> None:
        super().__init__(f"Invalid space id {space_id}")
        self.space_id = space_id


class SpaceUnderMaintenanceError(ValidationError):
    code = ErrorCode.SPACE_UNDER_MAINTENANCE

    def __init__(self, space_id: str) -> None:
        super().__init__(f"Space {space_id} is under maintenance")
        self.space_id = space_id


class SpaceUnderMaintenanceUntilError(SpaceUnderMaintenanceError):
    code = ErrorCode.SPACE_UNDER_MAINTENANCE_UNTIL

    def __init__(self, space_id: str, until: datetime) -> None:
        ValidationError.__init__(self, f"Space {space_id} is under maintenance until {until.isoformat()}")
        self.space_id = space_id
        self.until = until


# ── Not found ────────────────────────────────────────────────────────────────

class SpaceNotFoundError(NotFoundError):
    code = ErrorCode.SPACE_NOT_FOUND

    def __init__(self, space_id: str) -> None:
        super().__init__(f"Space {space_id} not found")
        self.space_id = space_id


class TicketNotFoundError(NotFoundError):
    code = ErrorCode.TICKET_NOT_FOUND

    def __init__(self, ticket_id: str) -> None:
        super().__init__(f"Ticket {ticket_id} not found")
        self.ticket_id = ticket_id


class StaffNotFoundError(NotFoundError):
    code = ErrorCode.STAFF_NOT_FOUND

    def __init__(self, staff_id: str) -> None:
        super().__init__(f"Staff {staff_id} not found")
        self.staff_id = staff_id


class SpaceLogNotFoundError(NotFoundError):
    code = ErrorCode.SPACE_LOG_NOT_FOUND

    def __init__(self, log_id: str) -> None:
        super().__init__(f"Space log {log_id} not found")
        self.log_id = log_id


# ── Ticket state ─────────────────────────────────────────────────────────────

class TicketExpiredError(ConflictError):
    code = ErrorCode.TICKET_EXPIRED

    def __init__(self, valid_until: datetime) -> None:
        super().__init__(f"Ticket expired on {valid_until.isoformat()}")
        self.valid_until = valid_until


class TicketNotYetValidError(ConflictError):
    code = ErrorCode.TICKET_NOT_YET_VALID

    def __init__(self, valid_from: datetime) -> None:
        super().__init__(f"Ticket not valid yet, will be ready to use at {valid_from.isoformat()}")
        self.valid_from = valid_from


class TicketAlreadyExitedError(ConflictError):
    code = ErrorCode.TICKET_ALREADY_EXITED

    def __init__(self) -> None:
        super().__init__("Ticket already used to exit")


class TicketNotValidError(ConflictError):
    code = ErrorCode.TICKET_NOT_VALID

    def __init__(self) -> None:
        super().__init__("Ticket is not valid, it seems to have been used already")


class NoAllowedSpacesError(ConflictError):
    code = ErrorCode.NO_ALLOWED_SPACES

    def __init__(self) -> None:
        super().__init__("No allowed spaces for this ticket, please contact the administrator")


class AllSpacesVisitedError(ConflictError):
    code = ErrorCode.ALL_SPACES_VISITED

    def __init__(self) -> None:
        super().__init__("You have already visited all the spaces")


class EscapeGameFinishedError(ConflictError):
    code = ErrorCode.ESCAPE_GAME_FINISHED

    def __init__(self) -> None:
        super().__init__("You have already finished the escape game")


class SpaceNotAllowedError(ConflictError):
    code = ErrorCode.SPACE_NOT_ALLOWED

    def __init__(self, space_id: str) -> None:
        super().__init__(f"Space {space_id} not allowed for the ticket")
        self.space_id = space_id


class SpaceAlreadyVisitedError(ConflictError):
    code = ErrorCode.SPACE_ALREADY_VISITED

    def __init__(self, space_id: str) -> None:
        super().__init__(f"Space {space_id} already visited")
        self.space_id = space_id


class OutOfOrderError(ConflictError):
    code = ErrorCode.OUT_OF_ORDER

    def __init__(self, expected: str) -> None:
        super().__init__(f"You must visit the spaces in the correct order. The next space is {expected}")
        self.expected = expected


class ConcurrentTicketUpdateError(ConflictError):
    code = ErrorCode.CONCURRENT_TICKET_UPDATE

    def __init__(self, ticket_id: str) -> None:
        super().__init__(f"Ticket {ticket_id} is being updated concurrently, retry later")
        self.ticket_id = ticket_id


# ── Space maintenance ────────────────────────────────────────────────────────

class SpaceAlreadyUnderMaintenanceError(ConflictError):
    code = ErrorCode.SPACE_ALREADY_UNDER_MAINTENANCE

    def __init__(self, space_id: str) -> None:
        super().__init__(f"Space {space_id} is already under maintenance")
        self.space_id = space_id


class SpaceNotUnderMaintenanceError(ConflictError):
    code = ErrorCode.SPACE_NOT_UNDER_MAINTENANCE

    def __init__(self, space_id: str) -> None:
        super().__init__(f"Space {space_id} is not under maintenance")
        self.space_id = space_id


class SpaceNameTakenError(ConflictError):
    code = ErrorCode.SPACE_NAME_TAKEN

    def __init__(self, name: str) -> None:
        super().__init__(f"A space named {name} already exists")
        self.name = name


# ── Gate ─────────────────────────────────────────────────────────────────────

class AlreadyOpenError(ConflictError):
    code = ErrorCode.ALREADY_OPEN

    def __init__(self) -> None:
        super().__init__("Zoo is already open")


class AlreadyClosedError(ConflictError):
    code = ErrorCode.ALREADY_CLOSED

    def __init__(self) -> None:
        super().__init__("Zoo is already closed")


class StaffingInsufficientError(ConflictError):
    code = ErrorCode.STAFFING_INSUFFICIENT

    def __init__(self, missing: list) -> None:
        super().__init__(f"Zoo cannot open, missing staff with the following roles: {', '.join(missing)}")
        self.missing = missing


class VisitorsStillInsideError(ConflictError):
    code = ErrorCode.VISITORS_STILL_INSIDE

    def __init__(self, inside: int) -> None:
        super().__init__(f"Zoo cannot close, there are still {inside} visitors inside")
        self.inside = inside
