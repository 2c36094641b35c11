"""Shared fixtures: in-memory SQLite document store, in-memory state cache, frozen clock."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import copy
import pytest
from datetime import datetime, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from zoo.database import create_tables
from zoo.models.enums import JobTitle
from zoo.services.space_service import SpaceService
from zoo.services.staff_service import StaffService
from zoo.services.ticket_service import TicketService
from zoo.services.zoo_service import REQUIRED_ROLES, ZooService
from zoo.services.zoo_state_store import ZooStateStore
from zoo.utils.time_utils import utcnow


class InMemoryStateCache:
    """Same interface as StateCache, backed by dicts."""

    def __init__(self):
        self.values = {}
        self.docs = {}

    async def get(self, key):
        return self.values.get(key)

    async def set(self, key, value):
        self.values[key] = value

    async def increment(self, key):
        value = int(self.values.get(key) or 0) + 1
        self.values[key] = str(value)
        return value

    async def json_get(self, key):
        return copy.deepcopy(self.docs.get(key))

    async def json_set_root(self, key, value):
        self.docs[key] = copy.deepcopy(value)

    async def json_ensure_array(self, key):
        self.docs.setdefault(key, [])

    async def json_array_append(self, key, value, path="$"):
        self.docs[key].append(copy.deepcopy(value))
        return len(self.docs[key])

    async def ping(self):
        return True


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def clock():
    return FrozenClock(utcnow().replace(microsecond=0))


@pytest.fixture
def cache():
    return InMemoryStateCache()


@pytest.fixture
def state(cache, clock):
    return ZooStateStore(cache, clock=clock)


@pytest.fixture
def space_service(db):
    return SpaceService(db)


@pytest.fixture
def staff_service(db):
    return StaffService(db)


@pytest.fixture
def zoo_service(state, staff_service):
    return ZooService(state, staff_service)


@pytest.fixture
def ticket_service(db, space_service, state, clock):
    return TicketService(db, space_service, state, clock=clock)


@pytest.fixture
def make_space(space_service):
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        fields.setdefault("name", f"space-{counter['n']}")
        return space_service.create_space(**fields)

    return _make


@pytest.fixture
def hire(staff_service):
    def _hire(title: JobTitle, count: int = 1):
        for i in range(count):
            staff_service.create_staff(title, first_name=f"{title.value}{i}", last_name="Test",
                                       email=f"{title.value.lower()}{i}@zoo.test")

    return _hire


@pytest.fixture
def full_staff(hire):
    for role in REQUIRED_ROLES:
        hire(role)
