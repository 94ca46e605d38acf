"""
Tests for the booking workflow: create, approve, and the admin list.
"""

from __future__ import annotations

import itertools
import threading
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from venue_booking.application.exceptions import (
    AlreadyDeletedError,
    BookingClosedError,
    BookingNotFoundError,
    ConflictDetectedError,
    IllegalTransitionError,
    ValidationError,
)
from venue_booking.application.use_cases.booking import BLOCK, WARN, BookingUseCase
from venue_booking.domain.entities.booking import BookingStatus, Venue
from venue_booking.infrastructure.store.memory_store import MemoryBookingStore

TZ = ZoneInfo("Asia/Manila")
NOW = datetime(2024, 1, 1, 8, 0, tzinfo=TZ)


def _use_case(policy: str = BLOCK) -> tuple[BookingUseCase, MemoryBookingStore]:
    store = MemoryBookingStore()
    counter = itertools.count(1)
    use_case = BookingUseCase(
        store=store,
        timezone=TZ,
        conflict_policy=policy,
        clock=lambda: NOW,
        id_factory=lambda: f"evt-{next(counter)}",
    )
    return use_case, store


def _payload(**overrides) -> dict:
    payload = {
        "title": "Annual Gala",
        "venue": "Function Hall",
        "date": "2024-01-10",
        "startTime": "10:00",
        "additionalHours": 0,
        "organizer": "Events Office",
        "userId": "user-1",
        "category": "Corporate",
        "description": "Company dinner",
    }
    payload.update(overrides)
    return payload


def test_create_derives_interval_and_starts_pending():
    use_case, store = _use_case()
    result = use_case.create(_payload(additionalHours=2))

    booking = result.booking
    assert booking.id == "evt-1"
    assert booking.status == BookingStatus.PENDING
    assert booking.venue == Venue.FUNCTION_HALL
    assert booking.interval.start == datetime(2024, 1, 10, 10, 0, tzinfo=TZ)
    assert booking.interval.end == datetime(2024, 1, 10, 16, 0, tzinfo=TZ)
    assert booking.created_at == NOW
    assert not result.has_conflicts
    assert store.get("evt-1") == booking


def test_create_reports_pending_overlap_as_warning():
    use_case, _ = _use_case()
    first = use_case.create(_payload()).booking
    second = use_case.create(_payload(startTime="12:00"))

    assert second.has_conflicts
    assert [b.id for b in second.conflicts] == [first.id]


def test_create_blocked_by_approved_booking():
    use_case, store = _use_case()
    first = use_case.create(_payload()).booking
    use_case.approve(first.id)

    with pytest.raises(ConflictDetectedError) as exc:
        use_case.create(_payload(startTime="13:00"))
    assert [b.id for b in exc.value.conflicts] == [first.id]
    assert len(store.list_all()) == 1


def test_create_allowed_back_to_back():
    use_case, _ = _use_case()
    first = use_case.create(_payload()).booking
    use_case.approve(first.id)

    result = use_case.create(_payload(startTime="14:00"))
    assert not result.has_conflicts


def test_warn_policy_never_blocks():
    use_case, _ = _use_case(policy=WARN)
    first = use_case.create(_payload()).booking
    use_case.approve(first.id)

    second = use_case.create(_payload(startTime="11:00"))
    approved = use_case.approve(second.booking.id)
    assert approved.booking.status == BookingStatus.APPROVED
    assert [b.id for b in approved.conflicts] == [first.id]


def test_approve_blocked_when_other_already_approved():
    use_case, store = _use_case()
    first = use_case.create(_payload()).booking
    second = use_case.create(_payload(startTime="11:00")).booking
    use_case.approve(first.id)

    with pytest.raises(ConflictDetectedError):
        use_case.approve(second.id)
    assert store.get(second.id).status == BookingStatus.PENDING


def test_approve_after_competitor_rejected():
    use_case, _ = _use_case()
    first = use_case.create(_payload()).booking
    second = use_case.create(_payload(startTime="11:00")).booking

    use_case.reject(first.id)
    assert use_case.approve(second.id).booking.status == BookingStatus.APPROVED


def test_lifecycle_to_completion():
    use_case, _ = _use_case()
    booking = use_case.create(_payload()).booking
    use_case.approve(booking.id)
    completed = use_case.complete(booking.id)

    assert completed.status == BookingStatus.COMPLETED
    with pytest.raises(IllegalTransitionError):
        use_case.cancel(booking.id)


def test_cancel_frees_the_slot():
    use_case, _ = _use_case()
    first = use_case.create(_payload()).booking
    use_case.approve(first.id)
    use_case.cancel(first.id)

    assert not use_case.create(_payload()).has_conflicts


def test_delete_is_idempotent_and_blocks_transitions():
    use_case, store = _use_case()
    booking = use_case.create(_payload()).booking

    deleted = use_case.delete(booking.id)
    assert deleted.deleted_at == NOW
    assert use_case.delete(booking.id) == deleted
    assert store.get(booking.id) == deleted

    with pytest.raises(AlreadyDeletedError):
        use_case.approve(booking.id)


def test_unknown_booking():
    use_case, _ = _use_case()
    with pytest.raises(BookingNotFoundError):
        use_case.approve("nope")


@pytest.mark.parametrize(
    "overrides",
    [
        {"startTime": "25:00"},
        {"date": "2024-02-30"},
        {"additionalHours": 11},
        {"additionalHours": -1},
        {"venue": "Rooftop"},
        {"title": ""},
        {"date": "2024-01-05"},
    ],
)
def test_create_rejects_invalid_input(overrides):
    use_case, store = _use_case()
    with pytest.raises(ValidationError):
        use_case.create(_payload(**overrides))
    assert store.list_all() == []


def test_admin_may_book_inside_lead_time():
    use_case, _ = _use_case()
    result = use_case.create(_payload(date="2024-01-02"), is_admin=True)
    assert result.booking.interval.start.date().isoformat() == "2024-01-02"


def test_reschedule_excludes_itself():
    use_case, _ = _use_case()
    booking = use_case.create(_payload()).booking

    moved = use_case.reschedule(booking.id, "2024-01-10", "11:00", 1)
    assert not moved.has_conflicts
    assert moved.booking.interval.start == datetime(2024, 1, 10, 11, 0, tzinfo=TZ)
    assert moved.booking.additional_hours == 1


def test_reschedule_into_approved_slot_is_blocked():
    use_case, store = _use_case()
    first = use_case.create(_payload()).booking
    second = use_case.create(_payload(startTime="15:00")).booking
    use_case.approve(first.id)

    with pytest.raises(ConflictDetectedError):
        use_case.reschedule(second.id, "2024-01-10", "12:00", 0)
    assert store.get(second.id).interval.start.hour == 15


def test_conflicts_for_existing_booking():
    use_case, _ = _use_case()
    first = use_case.create(_payload()).booking
    second = use_case.create(_payload(startTime="12:00")).booking
    assert [b.id for b in use_case.conflicts_for(first.id)] == [second.id]


def test_admin_list_orders_filters_and_flags():
    use_case, _ = _use_case(policy=WARN)
    a = use_case.create(_payload(title="Alpha")).booking
    b = use_case.create(_payload(title="Bravo", startTime="12:00")).booking
    c = use_case.create(_payload(title="Charlie", venue="al fresco", date="2024-01-09")).booking
    d = use_case.create(_payload(title="Delta", venue="lounge hall", date="2024-01-08")).booking
    e = use_case.create(_payload(title="Echo", venue="lounge hall")).booking
    use_case.approve(a.id)
    use_case.approve(c.id)
    use_case.complete(c.id)
    use_case.reject(d.id)
    use_case.delete(e.id)

    entries = use_case.list_for_admin()
    assert [x.booking.id for x in entries] == [b.id, a.id, c.id, d.id]
    assert {x.booking.id for x in entries if x.overlaps} == {a.id, b.id}

    assert [x.booking.id for x in use_case.list_for_admin(status="approved")] == [a.id]
    assert [x.booking.id for x in use_case.list_for_admin(venue="AL FRESCO")] == [c.id]
    assert [x.booking.id for x in use_case.list_for_admin(query="char")] == [c.id]


def test_concurrent_creates_cannot_both_pass_against_approved():
    """Commits for one venue are serialized, so only one approval wins."""
    use_case, store = _use_case()
    ids = [use_case.create(_payload(startTime="10:00")).booking.id for _ in range(8)]
    outcomes: list[str] = []
    lock = threading.Lock()

    def approve(booking_id: str) -> None:
        try:
            use_case.approve(booking_id)
            result = "approved"
        except ConflictDetectedError:
            result = "blocked"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=approve, args=(i,)) for i in ids]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("approved") == 1
    assert outcomes.count("blocked") == 7
    assert sum(1 for b in store.list_all() if b.status == BookingStatus.APPROVED) == 1


def test_admin_booking_requires_organizer():
    use_case, store = _use_case()
    with pytest.raises(ValidationError):
        use_case.create(_payload(organizer="  "), is_admin=True)
    assert store.list_all() == []

    assert use_case.create(_payload(organizer="")).booking.organizer == ""


def test_reschedule_applies_lead_time_to_regular_users():
    use_case, store = _use_case()
    booking = use_case.create(_payload()).booking

    with pytest.raises(ValidationError):
        use_case.reschedule(booking.id, "2024-01-02", "10:00", 0)
    assert store.get(booking.id).interval == booking.interval

    moved = use_case.reschedule(booking.id, "2024-01-02", "10:00", 0, is_admin=True)
    assert moved.booking.interval.start == datetime(2024, 1, 2, 10, 0, tzinfo=TZ)


@pytest.mark.parametrize("close", ["reject", "cancel", "complete"])
def test_reschedule_refuses_closed_bookings(close):
    use_case, store = _use_case()
    booking = use_case.create(_payload()).booking
    if close != "reject":
        use_case.approve(booking.id)
    closed = getattr(use_case, close)(booking.id)

    with pytest.raises(BookingClosedError):
        use_case.reschedule(booking.id, "2024-02-10", "10:00", 0)
    assert store.get(booking.id) == closed


def test_admin_list_rejects_unknown_filters():
    use_case, _ = _use_case()
    use_case.create(_payload())
    with pytest.raises(ValidationError):
        use_case.list_for_admin(status="bogus")
    with pytest.raises(ValidationError):
        use_case.list_for_admin(venue="Rooftop")


def test_timestamps_use_the_reference_zone():
    """A UTC clock still stamps created_at and deleted_at in the booking zone."""
    use_case = BookingUseCase(
        store=MemoryBookingStore(),
        timezone=TZ,
        clock=lambda: datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc),
    )
    booking = use_case.create(_payload()).booking
    assert booking.created_at.utcoffset() == TZ.utcoffset(booking.created_at)
    assert booking.created_at.hour == 8

    deleted = use_case.delete(booking.id)
    assert deleted.deleted_at.utcoffset() == booking.interval.start.utcoffset()
    assert deleted.deleted_at == datetime(2024, 1, 1, 8, 0, tzinfo=TZ)
