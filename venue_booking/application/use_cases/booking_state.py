from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from venue_booking.application.exceptions import AlreadyDeletedError, IllegalTransitionError
from venue_booking.domain.entities.booking import Booking, BookingStatus

_ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.APPROVED, BookingStatus.REJECTED}),
    BookingStatus.APPROVED: frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED}),
    BookingStatus.REJECTED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}


def allowed_targets(status: BookingStatus) -> frozenset[BookingStatus]:
    return _ALLOWED_TRANSITIONS.get(status, frozenset())


def is_terminal(status: BookingStatus) -> bool:
    return not allowed_targets(status)


def transition(booking: Booking, target: BookingStatus | str) -> Booking:
    """
    Return a copy of booking moved to target status.

    Raises AlreadyDeletedError for a tombstoned booking (whatever the target)
    and IllegalTransitionError for any pair outside the transition table.
    The input booking is never modified.
    """
    target_status = BookingStatus.parse(target)
    if booking.is_deleted:
        raise AlreadyDeletedError(booking.id)
    if target_status not in allowed_targets(booking.status):
        raise IllegalTransitionError(current=booking.status.value, target=target_status.value)
    return replace(booking, status=target_status)


def soft_delete(booking: Booking, now: datetime | None = None) -> Booking:
    """
    Tombstone a booking. Deleting an already-deleted booking is a no-op.
    Without now the tombstone is stamped in the booking's own zone.
    """
    if booking.is_deleted:
        return booking
    return replace(booking, deleted_at=now or datetime.now(booking.interval.start.tzinfo))


def can_edit_catering(booking: Booking) -> bool:
    return not booking.is_deleted and booking.status != BookingStatus.COMPLETED
