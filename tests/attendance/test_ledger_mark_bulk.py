from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from nss_connect.attendance.model import AttendanceMark
from nss_connect.attendance.service import LedgerService
from nss_connect.auth.context import RequestUser
from nss_connect.core.enums import AttendanceStatus, Role
from nss_connect.core.exceptions import (
    AuthorizationError,
    DuplicateAttendanceError,
    LedgerTransactionError,
    ValidationError,
)
from tests.fakes import InMemoryLedgerStore

MENTOR = RequestUser(user_id=2, role=Role.MENTOR, email="mentor@nss.example.org")
NOW = datetime(2026, 10, 19, 10, 30)


def _service(store: InMemoryLedgerStore) -> LedgerService:
    return LedgerService(store, clock=lambda: NOW)


def _store_with_event(duration="3") -> InMemoryLedgerStore:
    store = InMemoryLedgerStore()
    store.add_event(10, duration)
    for vid in (1, 2, 3):
        store.add_volunteer(vid)
    return store


def test_mixed_batch_awards_hours_only_to_present_volunteers():
    store = _store_with_event("3")

    result = _service(store).mark_bulk_attendance(
        marker=MENTOR,
        event_id=10,
        records=[
            {"volunteerId": 1, "isPresent": True},
            {"volunteerId": 2, "isPresent": False},
            {"volunteerId": 3, "isPresent": True},
        ],
    )

    assert result.records_created == 3
    assert result.present_count == 2
    assert result.hours_awarded == Decimal("6")

    assert store.totals(1).total_hours == Decimal("3")
    assert store.totals(1).events_attended == 1
    assert store.totals(2).total_hours == Decimal("0")
    assert store.totals(2).events_attended == 0
    assert store.totals(3).total_hours == Decimal("3")
    assert store.totals(3).events_attended == 1

    absent = store.record(2, 10)
    assert absent.status == AttendanceStatus.ABSENT
    assert absent.hours_given == Decimal("0")
    present = store.record(1, 10)
    assert present.status == AttendanceStatus.PRESENT
    assert present.marked_by == MENTOR.user_id
    assert present.marked_at == NOW


def test_hours_delta_sum_matches_duration_times_present_count():
    store = _store_with_event("2.5")
    before = sum(v.total_hours for v in store.state.volunteers.values())

    _service(store).mark_bulk_attendance(
        marker=MENTOR,
        event_id=10,
        records=[AttendanceMark(1, True), AttendanceMark(2, True), AttendanceMark(3, False)],
    )

    after = sum(v.total_hours for v in store.state.volunteers.values())
    assert after - before == Decimal("2.5") * 2
    assert len(store.state.attendance) == 3


def test_event_without_duration_marks_attendance_with_zero_hours():
    store = _store_with_event(None)

    result = _service(store).mark_bulk_attendance(
        marker=MENTOR, event_id=10, records=[{"volunteerId": 1, "isPresent": True}]
    )

    assert result.records_created == 1
    assert store.totals(1).total_hours == Decimal("0")
    assert store.totals(1).events_attended == 1
    assert store.record(1, 10).hours_given == Decimal("0")


def test_unknown_volunteer_rolls_back_whole_batch():
    store = _store_with_event("3")

    with pytest.raises(ValidationError):
        _service(store).mark_bulk_attendance(
            marker=MENTOR,
            event_id=10,
            records=[{"volunteerId": 1, "isPresent": True}, {"volunteerId": 404, "isPresent": True}],
        )

    assert store.state.attendance == {}
    assert store.totals(1).total_hours == Decimal("0")
    assert store.commits == 0


def test_storage_failure_mid_batch_leaves_no_partial_effect():
    store = _store_with_event("3")
    store.fail_on_insert_for = 3

    with pytest.raises(LedgerTransactionError):
        _service(store).mark_bulk_attendance(
            marker=MENTOR,
            event_id=10,
            records=[
                {"volunteerId": 1, "isPresent": True},
                {"volunteerId": 2, "isPresent": True},
                {"volunteerId": 3, "isPresent": True},
            ],
        )

    assert store.state.attendance == {}
    assert all(v.total_hours == 0 and v.events_attended == 0 for v in store.state.volunteers.values())
    assert store.rollbacks == 1


def test_duplicate_volunteer_in_batch_is_rejected_before_any_write():
    store = _store_with_event("3")

    with pytest.raises(ValidationError):
        _service(store).mark_bulk_attendance(
            marker=MENTOR,
            event_id=10,
            records=[{"volunteerId": 1, "isPresent": True}, {"volunteerId": 1, "isPresent": False}],
        )

    assert store.commits == 0
    assert store.rollbacks == 0


def test_marking_twice_for_same_event_is_rejected():
    store = _store_with_event("3")
    svc = _service(store)
    svc.mark_bulk_attendance(marker=MENTOR, event_id=10, records=[{"volunteerId": 1, "isPresent": True}])

    with pytest.raises(DuplicateAttendanceError):
        svc.mark_bulk_attendance(
            marker=MENTOR,
            event_id=10,
            records=[{"volunteerId": 2, "isPresent": True}, {"volunteerId": 1, "isPresent": True}],
        )

    assert store.totals(1).total_hours == Decimal("3")
    assert store.totals(1).events_attended == 1
    assert store.record(2, 10) is None


def test_unknown_event_is_a_validation_error():
    store = _store_with_event("3")

    with pytest.raises(ValidationError):
        _service(store).mark_bulk_attendance(
            marker=MENTOR, event_id=999, records=[{"volunteerId": 1, "isPresent": True}]
        )


@pytest.mark.parametrize(
    "records",
    [
        [],
        None,
        [{"volunteerId": "abc", "isPresent": True}],
        [{"volunteerId": 1, "isPresent": "yes"}],
        [{"isPresent": True}],
        ["not-an-object"],
        [{"volunteerId": 1.7, "isPresent": True}],
    ],
)
def test_malformed_batches_are_rejected(records):
    store = _store_with_event("3")

    with pytest.raises(ValidationError):
        _service(store).mark_bulk_attendance(marker=MENTOR, event_id=10, records=records)

    assert store.state.attendance == {}


def test_volunteers_are_locked_in_id_order_but_inserted_in_request_order():
    store = _store_with_event("3")

    result = _service(store).mark_bulk_attendance(
        marker=MENTOR,
        event_id=10,
        records=[
            {"volunteerId": 3, "isPresent": True},
            {"volunteerId": 1, "isPresent": False},
            {"volunteerId": 2, "isPresent": True},
        ],
    )

    assert store.locked == [1, 2, 3]
    inserted = [store.state.attendance[aid].volunteer_id for aid in result.attendance_ids]
    assert inserted == [3, 1, 2]


def test_fractional_event_id_is_rejected():
    store = _store_with_event("3")

    with pytest.raises(ValidationError):
        _service(store).mark_bulk_attendance(
            marker=MENTOR, event_id=10.9, records=[{"volunteerId": 1, "isPresent": True}]
        )

    assert store.state.attendance == {}
    assert store.totals(1).total_hours == Decimal("0")


def test_only_mentors_mark_attendance():
    store = _store_with_event("3")
    gensec = RequestUser(user_id=1, role=Role.GENERAL_SECRETARY, email="gensec@nss.example.org")

    with pytest.raises(AuthorizationError):
        _service(store).mark_bulk_attendance(
            marker=gensec, event_id=10, records=[{"volunteerId": 1, "isPresent": True}]
        )
