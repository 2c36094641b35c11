"""
FastAPI dependencies that assemble the services for one request.
The session comes from get_db, the state cache from get_redis; tests
override those two and everything above them follows.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from zoo.cache import get_redis
from zoo.database import get_db
from zoo.services.space_service import SpaceService
from zoo.services.staff_service import StaffService
from zoo.services.ticket_service import TicketService
from zoo.services.zoo_service import ZooService
from zoo.services.zoo_state_store import ZooStateStore
from zoo.stores.state_cache import StateCache


def get_state_cache(client=Depends(get_redis)) -> StateCache:
    return StateCache(client)


def get_state_store(cache: StateCache = Depends(get_state_cache)) -> ZooStateStore:
    return ZooStateStore(cache)


def get_space_service(db: Session = Depends(get_db)) -> SpaceService:
    return SpaceService(db)


def get_staff_service(db: Session = Depends(get_db)) -> StaffService:
    return StaffService(db)


def get_zoo_service(state: ZooStateStore = Depends(get_state_store),
                    staff: StaffService = Depends(get_staff_service)) -> ZooService:
    return ZooService(state, staff)


def get_ticket_service(db: Session = Depends(get_db),
                       spaces: SpaceService = Depends(get_space_service),
                       state: ZooStateStore = Depends(get_state_store)) -> TicketService:
    return TicketService(db, spaces, state)
