from __future__ import annotations

from datetime import datetime
from typing import Iterable

from venue_booking.application.exceptions import ValidationError
from venue_booking.domain.entities.booking import Booking, BookingStatus, Venue

ALL = "all"

# Admin list order: bookings needing action first, closed ones last.
STATUS_PRIORITY = {
    BookingStatus.PENDING: 0,
    BookingStatus.APPROVED: 1,
    BookingStatus.COMPLETED: 2,
    BookingStatus.CANCELLED: 3,
    BookingStatus.REJECTED: 4,
}


def admin_sort_key(booking: Booking) -> tuple[int, datetime, str]:
    return (STATUS_PRIORITY[booking.status], booking.interval.start, booking.id)


def filter_bookings(
    bookings: Iterable[Booking],
    *,
    status: str = ALL,
    venue: str = ALL,
    query: str = "",
) -> list[Booking]:
    """Drop deleted bookings and apply the admin status/venue/search filters."""
    try:
        wanted_status = None if _is_all(status) else BookingStatus.parse(status)
        wanted_venue = None if _is_all(venue) else Venue.parse(venue)
    except ValueError as e:
        raise ValidationError(str(e))
    needle = (query or "").strip().lower()

    result: list[Booking] = []
    for booking in bookings:
        if booking.is_deleted:
            continue
        if wanted_status is not None and booking.status != wanted_status:
            continue
        if wanted_venue is not None and booking.venue != wanted_venue:
            continue
        if needle and not _matches(booking, needle):
            continue
        result.append(booking)
    return result


def sort_for_admin(bookings: Iterable[Booking]) -> list[Booking]:
    return sorted(bookings, key=admin_sort_key)


def _matches(booking: Booking, needle: str) -> bool:
    fields = (
        booking.title,
        booking.venue.value,
        booking.status.value,
        booking.organizer,
        booking.owner,
    )
    return any(needle in (field or "").lower() for field in fields)


def _is_all(value: str | None) -> bool:
    return not value or value.strip().lower() == ALL
