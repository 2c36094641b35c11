"""Ticket endpoints: issuing, space visits and gate crossings."""

from fastapi import APIRouter, Depends
from typing import Optional
from zoo.dependencies import get_ticket_service
from zoo.schemas.ticket import TicketCreate, TicketOut, TicketUpdate, TicketUse
from zoo.services.ticket_service import TicketService

router = APIRouter()


@router.get("/tickets", response_model=list[TicketOut], summary="List tickets")
def list_tickets(user_id: Optional[str] = None, tickets: TicketService = Depends(get_ticket_service)):
    return tickets.list_tickets(user_id)


@router.post("/tickets", response_model=TicketOut, status_code=201, summary="Issue a ticket")
async def create_ticket(body: TicketCreate, tickets: TicketService = Depends(get_ticket_service)):
    """
    Every space must exist and be out of maintenance,
    and valid_until must come after valid_from.
    """
    return await tickets.create_ticket(**body.model_dump())


@router.get("/tickets/{ticket_id}", response_model=TicketOut)
def get_ticket(ticket_id: str, tickets: TicketService = Depends(get_ticket_service)):
    return tickets.get_ticket(ticket_id)


@router.put("/tickets/{ticket_id}", response_model=TicketOut, summary="Update a ticket")
def update_ticket(ticket_id: str, body: TicketUpdate, tickets: TicketService = Depends(get_ticket_service)):
    """Holder, validity window and accommodation flags only."""
    return tickets.update_ticket(ticket_id, **body.model_dump(exclude_none=True))


@router.delete("/tickets/{ticket_id}", status_code=204)
def delete_ticket(ticket_id: str, tickets: TicketService = Depends(get_ticket_service)):
    tickets.delete_ticket(ticket_id)


@router.post("/tickets/{ticket_id}/use", response_model=TicketOut, summary="Visit a space")
async def use_ticket(ticket_id: str, body: TicketUse, tickets: TicketService = Depends(get_ticket_service)):
    return await tickets.use_ticket(ticket_id, body.space_id)


@router.post("/tickets/{ticket_id}/enter", summary="Cross the gate inwards")
async def use_ticket_to_enter(ticket_id: str, tickets: TicketService = Depends(get_ticket_service)):
    await tickets.use_ticket_to_enter(ticket_id)
    return {"status": "entered", "ticket_id": ticket_id}


@router.post("/tickets/{ticket_id}/exit", summary="Cross the gate outwards")
async def use_ticket_to_exit(ticket_id: str, tickets: TicketService = Depends(get_ticket_service)):
    await tickets.use_ticket_to_exit(ticket_id)
    return {"status": "exited", "ticket_id": ticket_id}
