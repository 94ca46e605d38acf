"""Detect bookings that occupy the same venue at overlapping times."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from venue_booking.domain.entities.booking import Booking, BookingStatus, Interval, Venue

ACTIVE_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.APPROVED})


@dataclass(frozen=True)
class ConflictCandidate:
    venue: Venue | str
    interval: Interval
    exclude_id: str | None = None  # set when re-checking an existing booking


def is_active(booking: Booking) -> bool:
    return booking.status in ACTIVE_STATUSES and not booking.is_deleted


def intervals_conflict(a: Interval, b: Interval) -> bool:
    """
    Half-open overlap: conflict iff a.start < b.end and b.start < a.end.
    A booking ending exactly when another starts does not conflict.
    """
    return a.start < b.end and b.start < a.end


def same_venue(a: Venue | str, b: Venue | str) -> bool:
    return _venue_key(a) == _venue_key(b)


def candidate_for(booking: Booking) -> ConflictCandidate:
    return ConflictCandidate(venue=booking.venue, interval=booking.interval, exclude_id=booking.id)


def find_conflicts(candidate: ConflictCandidate, existing: Iterable[Booking]) -> list[Booking]:
    """
    Return every active booking at the candidate's venue whose interval
    overlaps the candidate's, ordered by (start, id).

    The result is advisory against the snapshot passed in; callers must
    re-check against fresh data before committing.
    """
    conflicts = [
        booking
        for booking in existing
        if booking.id != candidate.exclude_id
        and is_active(booking)
        and same_venue(booking.venue, candidate.venue)
        and intervals_conflict(booking.interval, candidate.interval)
    ]
    return sorted(conflicts, key=lambda b: (b.interval.start, b.id))


def overlapping_ids(bookings: Iterable[Booking]) -> set[str]:
    """Ids of active bookings that overlap at least one other active booking."""
    by_venue: dict[str, list[Booking]] = {}
    for booking in bookings:
        if is_active(booking):
            by_venue.setdefault(_venue_key(booking.venue), []).append(booking)

    flagged: set[str] = set()
    for group in by_venue.values():
        group.sort(key=lambda b: (b.interval.start, b.id))
        # Sweep: compare each booking against the later-starting ones until
        # they start at or after its end.
        for i, current in enumerate(group):
            for other in group[i + 1 :]:
                if other.interval.start >= current.interval.end:
                    break
                if other.id != current.id:
                    flagged.add(current.id)
                    flagged.add(other.id)
    return flagged


def _venue_key(venue: Venue | str) -> str:
    value = venue.value if isinstance(venue, Venue) else str(venue or "")
    return " ".join(value.split()).lower()
