from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from nss_connect.attendance.service import LedgerService
from nss_connect.auth.context import RequestUser
from nss_connect.core.enums import Role
from nss_connect.core.exceptions import AuthorizationError, LedgerTransactionError, ValidationError
from tests.fakes import InMemoryLedgerStore

MENTOR = RequestUser(user_id=2, role=Role.MENTOR, email="mentor@nss.example.org")
GENSEC = RequestUser(user_id=1, role=Role.GENERAL_SECRETARY, email="gensec@nss.example.org")
NOW = datetime(2026, 10, 19, 11, 0)


@pytest.fixture
def store() -> InMemoryLedgerStore:
    s = InMemoryLedgerStore()
    s.add_event(10, "3")
    s.add_event(11, "2")
    s.add_volunteer(1, total_hours="5", events_attended=2)
    s.add_attendance(1, 10, "3")
    s.add_attendance(1, 11, "2")
    return s


def _service(store) -> LedgerService:
    return LedgerService(store, clock=lambda: NOW)


def test_correction_upward_updates_record_total_and_log(store):
    result = _service(store).modify_hours(
        editor=MENTOR, volunteer_id=1, event_id=10, new_hours=5, reason="correction"
    )

    assert store.record(1, 10).hours_given == Decimal("5")
    assert store.totals(1).total_hours == Decimal("7")
    assert store.totals(1).events_attended == 2
    assert result.old_hours == Decimal("3")
    assert result.new_hours == Decimal("5")
    assert result.total_hours == Decimal("7")

    assert len(store.state.hours_log) == 1
    entry = store.state.hours_log[0]
    assert (entry.old_hours, entry.new_hours) == (Decimal("3"), Decimal("5"))
    assert entry.modified_by == MENTOR.user_id
    assert entry.modified_at == NOW
    assert entry.reason == "correction"


def test_edit_then_revert_restores_total_exactly(store):
    svc = _service(store)
    before = store.totals(1).total_hours

    svc.modify_hours(editor=MENTOR, volunteer_id=1, event_id=10, new_hours="1.25", reason="typo")
    svc.modify_hours(editor=GENSEC, volunteer_id=1, event_id=10, new_hours="3", reason="revert")

    assert store.totals(1).total_hours == before
    assert store.record(1, 10).hours_given == Decimal("3")
    assert [(e.old_hours, e.new_hours) for e in store.state.hours_log] == [
        (Decimal("3"), Decimal("1.25")),
        (Decimal("1.25"), Decimal("3")),
    ]


def test_correction_downward_is_allowed(store):
    _service(store).modify_hours(editor=GENSEC, volunteer_id=1, event_id=11, new_hours=0, reason="left early")

    assert store.totals(1).total_hours == Decimal("3")


def test_rejects_edit_that_would_make_total_negative(store):
    # Aggregate drifted below the per-event sum; lowering event 10 to 0 would go negative.
    store.add_volunteer(1, total_hours="2", events_attended=2)

    with pytest.raises(ValidationError):
        _service(store).modify_hours(editor=MENTOR, volunteer_id=1, event_id=10, new_hours=0, reason="x")

    assert store.totals(1).total_hours == Decimal("2")
    assert store.record(1, 10).hours_given == Decimal("3")
    assert store.state.hours_log == []


def test_missing_attendance_record_treats_old_hours_as_zero(store):
    store.add_event(12, "4")

    result = _service(store).modify_hours(
        editor=MENTOR, volunteer_id=1, event_id=12, new_hours=4, reason="late entry"
    )

    assert result.old_hours == Decimal("0")
    assert store.totals(1).total_hours == Decimal("9")
    assert store.state.hours_log[0].old_hours == Decimal("0")


@pytest.mark.parametrize("reason", ["", "   ", None])
def test_reason_is_required(store, reason):
    with pytest.raises(ValidationError):
        _service(store).modify_hours(editor=MENTOR, volunteer_id=1, event_id=10, new_hours=4, reason=reason)

    assert store.state.hours_log == []


@pytest.mark.parametrize("new_hours", [-1, "abc", None, "NaN", 5000])
def test_invalid_new_hours_rejected(store, new_hours):
    with pytest.raises(ValidationError):
        _service(store).modify_hours(editor=MENTOR, volunteer_id=1, event_id=10, new_hours=new_hours, reason="r")


def test_unknown_volunteer_rejected(store):
    with pytest.raises(ValidationError):
        _service(store).modify_hours(editor=MENTOR, volunteer_id=77, event_id=10, new_hours=1, reason="r")


def test_volunteer_role_cannot_modify_hours(store):
    volunteer = RequestUser(user_id=3, role=Role.VOLUNTEER, email="v@nss.example.org")

    with pytest.raises(AuthorizationError):
        _service(store).modify_hours(editor=volunteer, volunteer_id=1, event_id=10, new_hours=9, reason="r")


def test_storage_failure_rolls_back_and_is_retryable(store, monkeypatch):
    from tests import fakes

    def boom(self, **kwargs):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(fakes.InMemoryLedgerTransaction, "append_hours_log", boom)

    with pytest.raises(LedgerTransactionError):
        _service(store).modify_hours(editor=MENTOR, volunteer_id=1, event_id=10, new_hours=6, reason="r")

    assert store.record(1, 10).hours_given == Decimal("3")
    assert store.totals(1).total_hours == Decimal("5")
