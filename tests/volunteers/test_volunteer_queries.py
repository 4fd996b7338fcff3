from __future__ import annotations

from datetime import date
from decimal import Decimal

from nss_connect.core.enums import AttendanceStatus
from nss_connect.volunteers.model import RosterEntry
from nss_connect.volunteers.service import VolunteerQueryService
from tests.fakes import InMemoryLedgerStore, LedgerBackedQueries


class ExplodingQueries:
    def get_history(self, volunteer_id, *, limit):
        raise RuntimeError("db down")

    def get_roster(self, mentor_user_id):
        raise RuntimeError("db down")

    def get_summary(self, volunteer_id):
        raise RuntimeError("db down")

    def get_hours_log(self, volunteer_id, *, limit):
        raise RuntimeError("db down")


def _store() -> InMemoryLedgerStore:
    store = InMemoryLedgerStore()
    store.add_event(1, "3", name="School Visit", on=date(2026, 9, 12))
    store.add_event(2, "4.5", name="Blood Camp", on=date(2026, 10, 3))
    store.add_volunteer(1, total_hours="3", events_attended=1)
    store.add_attendance(1, 1, "3")
    store.add_attendance(1, 2, "0", status=AttendanceStatus.ABSENT)
    return store


def test_history_is_newest_event_first():
    svc = VolunteerQueryService(LedgerBackedQueries(_store()))

    history = svc.get_history(1)

    assert [h.event_name for h in history] == ["Blood Camp", "School Visit"]
    assert history[0].to_dict()["attendance_status"] == "absent"
    assert history[1].to_dict()["event_date"] == "2026-09-12"


def test_history_for_volunteer_without_records_is_empty():
    svc = VolunteerQueryService(LedgerBackedQueries(_store()))

    assert svc.get_history(42) == []


def test_summary_reads_stored_aggregate():
    store = _store()
    # Stored aggregate wins even if it disagrees with the records.
    store.add_volunteer(1, total_hours="10", events_attended=4)
    svc = VolunteerQueryService(LedgerBackedQueries(store))

    summary = svc.get_summary(1)

    assert summary.total_hours == Decimal("10")
    assert summary.events_attended == 4


def test_summary_for_unknown_volunteer_is_zero():
    svc = VolunteerQueryService(LedgerBackedQueries(_store()))

    assert svc.get_summary(999).to_dict() == {"volunteer_id": 999, "events_attended": 0, "total_hours": 0.0}


def test_roster_sorted_by_name():
    roster = {
        2: [
            RosterEntry(2, "Bilal", "2301EE12", "Education", Decimal("0"), 0),
            RosterEntry(1, "Asha", "2301CS11", "Education", Decimal("3"), 1),
        ]
    }
    svc = VolunteerQueryService(LedgerBackedQueries(_store(), roster=roster))

    assert [r.name for r in svc.get_roster(2)] == ["Asha", "Bilal"]
    assert svc.get_roster(5) == []


def test_storage_errors_yield_empty_results():
    svc = VolunteerQueryService(ExplodingQueries())

    assert svc.get_history(1) == []
    assert svc.get_roster(2) == []
    assert svc.get_hours_log(1) == []
    assert svc.get_summary(1).total_hours == Decimal("0")
