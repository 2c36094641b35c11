"""Unit tests for the SQLAlchemy-backed record store."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from zoo.models.staff import Staff
from zoo.models.ticket import Ticket
from zoo.stores.document_store import DocumentStore
from zoo.utils.time_utils import utcnow


def make_staff(title, name="Sam"):
    return Staff(first_name=name, last_name="Doe", email=f"{name}@zoo.test", job_title=title, job_schedule=[])


class TestDocumentStore:
    def test_dotted_path_filters(self, db):
        store = DocumentStore(db, Staff)
        store.create(make_staff("Vendor", "a"))
        store.create(make_staff("Vendor", "b"))
        store.create(make_staff("Cleaner", "c"))

        assert store.count_where({"job.title": "Vendor"}) == 2
        assert [s.first_name for s in store.find({"job.title": "Cleaner"})] == ["c"]
        assert store.count_where() == 3

    def test_unknown_field(self, db):
        with pytest.raises(ValueError):
            DocumentStore(db, Staff).find({"job.salary_band": 3})

    def test_update_and_delete(self, db):
        store = DocumentStore(db, Staff)
        staff = store.create(make_staff("Vendor"))

        updated = store.update_by_id(staff.id, {"job.title": "Cleaner"})
        assert updated.job_title == "Cleaner"
        assert store.update_by_id("missing", {"job.title": "Vendor"}) is None

        assert store.delete_by_id(staff.id) is True
        assert store.delete_by_id(staff.id) is False
        assert store.find_by_id(staff.id) is None

    def test_delete_where(self, db):
        store = DocumentStore(db, Staff)
        store.create(make_staff("Vendor", "a"))
        store.create(make_staff("Vendor", "b"))
        store.create(make_staff("Keeper", "c"))

        assert store.delete_where({"job.title": "Vendor"}) == 2
        assert store.delete_where({"job.title": "Vendor"}) == 0
        assert [s.first_name for s in store.find()] == ["c"]

    def test_compare_and_set(self, db):
        store = DocumentStore(db, Ticket)
        now = utcnow()
        ticket = store.create(Ticket(ticket_type="DayPass", valid_from=now, valid_until=now,
                                     user_id="u", spaces=["s"], visited_spaces=[], version=0))

        assert store.compare_and_set(ticket.id, {"version": 0}, {"version": 1, "last_visited_space": "s"}) is True
        assert store.compare_and_set(ticket.id, {"version": 0}, {"version": 1}) is False

        reloaded = store.find_by_id(ticket.id)
        assert reloaded.version == 1
        assert reloaded.last_visited_space == "s"
