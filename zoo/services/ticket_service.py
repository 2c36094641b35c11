"""
Ticket admission engine.

Two independent tracks per ticket:
  - space visits (use_ticket): allow-list, no revisits, EscapeGame ordering
  - gate crossing (use_ticket_to_enter / use_ticket_to_exit): flips `valid`
    and records an ENTRY/EXIT event in the zoo state store

Ticket writes are conditional updates (compare-and-set on `version`, or on
`valid` for gate crossings) so two concurrent requests can never both succeed
against the same ticket state.
"""

from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from zoo.config import settings
from zoo.errors import (
    AllSpacesVisitedError,
    ConcurrentTicketUpdateError,
    EscapeGameFinishedError,
    InvalidDateRangeError,
    InvalidSpaceIdError,
    NoAllowedSpacesError,
    OutOfOrderError,
    SpaceAlreadyVisitedError,
    SpaceNotAllowedError,
    SpaceNotFoundError,
    SpaceUnderMaintenanceError,
    SpaceUnderMaintenanceUntilError,
    TicketAlreadyExitedError,
    TicketExpiredError,
    TicketNotFoundError,
    TicketNotValidError,
    TicketNotYetValidError,
)
from zoo.models.enums import EventType, TicketType
from zoo.models.ticket import Ticket
from zoo.services.space_service import SpaceService, is_valid_id
from zoo.services.zoo_state_store import ZooStateStore
from zoo.stores.document_store import DocumentStore
from zoo.utils.logger import get_logger
from zoo.utils.time_utils import utcnow

logger = get_logger(__name__)


def _next_step_in_order(ticket: Ticket, space_id: str) -> int:
    """EscapeGame: the space must be spaces[escape_game_step]."""
    step = ticket.escape_game_step
    if step < len(ticket.spaces):
        expected = ticket.spaces[step]
        if expected != space_id:
            raise OutOfOrderError(expected)
    return step + 1


# Per-type rules applied after the shared checks
STEP_RULES = {
    TicketType.ESCAPE_GAME: _next_step_in_order,
}
EXHAUSTED_ERRORS = {
    TicketType.ESCAPE_GAME: EscapeGameFinishedError,
}


class TicketService:
    def __init__(self, db: Session, spaces: SpaceService, state: ZooStateStore,
                 clock: Callable[[], datetime] = utcnow,
                 retries: int = settings.TICKET_UPDATE_RETRIES) -> None:
        self.store = DocumentStore(db, Ticket)
        self.spaces = spaces
        self.state = state
        self.clock = clock
        self.retries = max(1, retries)

    # ── Administrative ───────────────────────────────────────────────────
    def list_tickets(self, user_id: Optional[str] = None) -> list[Ticket]:
        return self.store.find({"user_id": user_id} if user_id else None)

    def get_ticket(self, ticket_id: str) -> Ticket:
        ticket = self.store.find_by_id(ticket_id) if is_valid_id(ticket_id) else None
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket

    def delete_ticket(self, ticket_id: str) -> None:
        if not is_valid_id(ticket_id) or not self.store.delete_by_id(ticket_id):
            raise TicketNotFoundError(ticket_id)
        logger.info(f"[TICKET] deleted {ticket_id}")

    def update_ticket(self, ticket_id: str, **fields) -> Ticket:
        """
        Holder, validity window and accommodation flags. Spaces and visit
        progress only change through use_ticket, validity through the gate.
        """
        ticket = self.get_ticket(ticket_id)
        valid_from = fields.get("valid_from", ticket.valid_from)
        valid_until = fields.get("valid_until", ticket.valid_until)
        if valid_until <= valid_from:
            raise InvalidDateRangeError()

        self.store.compare_and_set(ticket_id, {}, {**fields, "version": Ticket.version + 1})
        logger.info(f"[TICKET] updated {ticket_id}: {', '.join(sorted(fields)) or 'nothing'}")
        return self.get_ticket(ticket_id)

    # ── Creation ─────────────────────────────────────────────────────────
    def _check_assignable(self, space_id: str, now: datetime) -> None:
        if not is_valid_id(space_id):
            raise InvalidSpaceIdError(space_id)
        space = self.spaces.get_space(space_id)
        if space is None:
            raise SpaceNotFoundError(space_id)
        if space.is_under_maintenance:
            end = space.expected_maintenance_end
            if end and end > now:
                raise SpaceUnderMaintenanceUntilError(space_id, end)
            raise SpaceUnderMaintenanceError(space_id)

    async def create_ticket(self, *, ticket_type: TicketType, spaces: list[str], valid_from: datetime,
                            valid_until: datetime, user_id: str, **flags) -> Ticket:
        if valid_until <= valid_from:
            raise InvalidDateRangeError()

        space_ids = list(dict.fromkeys(str(s) for s in spaces))
        now = self.clock()
        for space_id in space_ids:
            self._check_assignable(space_id, now)

        ticket = self.store.create(Ticket(
            ticket_type=TicketType(ticket_type).value,
            spaces=space_ids,
            visited_spaces=[],
            escape_game_step=0,
            valid=True,
            valid_from=valid_from,
            valid_until=valid_until,
            user_id=user_id,
            version=0,
            created_at=now,
            **flags,
        ))
        logger.info(f"[TICKET] created {ticket.id} type={ticket.ticket_type} spaces={len(space_ids)}")
        return ticket

    # ── Space visits ─────────────────────────────────────────────────────
    def _plan_visit(self, ticket: Ticket, space, now: datetime) -> dict:
        """Run the visit rules against one snapshot; returns the ticket patch."""
        space_id = space.id
        ticket_type = TicketType(ticket.ticket_type)

        if space.is_under_maintenance:
            raise SpaceUnderMaintenanceError(space_id)
        if ticket.valid_until < now:
            raise TicketExpiredError(ticket.valid_until)
        if not ticket.spaces:
            raise NoAllowedSpacesError()
        visited = list(ticket.visited_spaces or [])
        if len(visited) >= len(ticket.spaces):
            raise EXHAUSTED_ERRORS.get(ticket_type, AllSpacesVisitedError)()
        if space_id not in ticket.spaces:
            raise SpaceNotAllowedError(space_id)
        if any(v["space"] == space_id for v in visited):
            raise SpaceAlreadyVisitedError(space_id)

        rule = STEP_RULES.get(ticket_type)
        step = rule(ticket, space_id) if rule else ticket.escape_game_step

        return {
            "visited_spaces": visited + [{"space": space_id, "visited_at": now.isoformat()}],
            "last_visited_space": space_id,
            "escape_game_step": step,
            "version": ticket.version + 1,
        }

    async def use_ticket(self, ticket_id: str, space_id: str) -> Ticket:
        for attempt in range(1, self.retries + 1):
            space = self.spaces.get_space(space_id)
            if space is None:
                raise SpaceNotFoundError(space_id)
            ticket = self.store.find_by_id(ticket_id) if is_valid_id(ticket_id) else None
            if ticket is None:
                raise TicketNotFoundError(ticket_id)

            patch = self._plan_visit(ticket, space, self.clock())
            if self.store.compare_and_set(ticket_id, {"version": ticket.version}, patch):
                logger.info(f"[TICKET] {ticket_id} visited {space_id} (step={patch['escape_game_step']})")
                return self.store.find_by_id(ticket_id)
            logger.warning(f"[TICKET] {ticket_id} changed during visit, retry {attempt}/{self.retries}")

        raise ConcurrentTicketUpdateError(ticket_id)

    # ── Gate crossing ────────────────────────────────────────────────────
    def _consume(self, ticket: Ticket) -> bool:
        return self.store.compare_and_set(
            ticket.id, {"valid": True}, {"valid": False, "version": Ticket.version + 1}
        )

    async def use_ticket_to_exit(self, ticket_id: str) -> None:
        ticket = self.store.find_by_id(ticket_id) if is_valid_id(ticket_id) else None
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        if not ticket.valid or not self._consume(ticket):
            raise TicketAlreadyExitedError()

        await self.state.append_event(ticket_id, self.clock(), EventType.EXIT)
        logger.info(f"[TICKET] {ticket_id} used to exit")

    async def use_ticket_to_enter(self, ticket_id: str) -> None:
        ticket = self.store.find_by_id(ticket_id) if is_valid_id(ticket_id) else None
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        now = self.clock()
        if not ticket.valid:
            raise TicketNotValidError()
        if ticket.valid_until < now:
            raise TicketExpiredError(ticket.valid_until)
        if ticket.valid_from > now:
            raise TicketNotYetValidError(ticket.valid_from)
        if not self._consume(ticket):
            raise TicketNotValidError()

        await self.state.append_event(ticket_id, now, EventType.ENTRY)
        await self.state.record_admission(now)
        logger.info(f"[TICKET] {ticket_id} used to enter")
