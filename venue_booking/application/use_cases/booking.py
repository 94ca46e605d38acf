from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone as dt_timezone
from typing import Any, Callable
from zoneinfo import ZoneInfo

from pydantic import ValidationError as PydanticValidationError

from venue_booking.application.dto.booking_request import BookingRequestDTO
from venue_booking.application.exceptions import (
    AlreadyDeletedError,
    BookingClosedError,
    BookingNotFoundError,
    ConflictDetectedError,
    ValidationError,
)
from venue_booking.application.ports.booking_store import BookingStorePort
from venue_booking.application.use_cases.booking_state import is_terminal, soft_delete, transition
from venue_booking.application.utils.conflicts import (
    ConflictCandidate,
    candidate_for,
    find_conflicts,
    is_active,
    overlapping_ids,
)
from venue_booking.application.utils.event_list import ALL, filter_bookings, sort_for_admin
from venue_booking.application.utils.intervals import check_lead_time, derive_interval
from venue_booking.domain.entities.booking import Booking, BookingStatus

BLOCK = "block"
WARN = "warn"


@dataclass(frozen=True)
class BookingResult:
    booking: Booking
    conflicts: list[Booking] = field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)


@dataclass(frozen=True)
class AdminListEntry:
    booking: Booking
    overlaps: bool


class BookingUseCase:
    """
    Booking workflow: derive the interval, check conflicts, and apply status
    changes. Every commit re-reads the venue's bookings while holding the
    store's venue lock, so conflict checks never run on a stale snapshot.
    """

    def __init__(
        self,
        store: BookingStorePort,
        timezone: ZoneInfo,
        base_hours: int = 4,
        max_additional_hours: int = 10,
        min_lead_days: int = 7,
        conflict_policy: str = BLOCK,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        if conflict_policy not in (BLOCK, WARN):
            raise ValueError(f"Unknown conflict policy: {conflict_policy!r}")
        self._store = store
        self._timezone = timezone
        self._base_hours = base_hours
        self._max_additional_hours = max_additional_hours
        self._min_lead_days = min_lead_days
        self._conflict_policy = conflict_policy
        self._clock = clock or (lambda: datetime.now(dt_timezone.utc))
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._logger = logging.getLogger(__name__)

    def create(
        self,
        payload: BookingRequestDTO | dict[str, Any],
        *,
        is_admin: bool = False,
    ) -> BookingResult:
        request = self._validate_request(payload)
        if is_admin and not request.organizer:
            raise ValidationError("Organizer is required for bookings made by an admin.")
        today = self._now().date()
        check_lead_time(
            request.event_date,
            today=today,
            min_lead_days=self._min_lead_days,
            is_admin=is_admin,
        )
        interval = derive_interval(
            request.event_date,
            request.start_time,
            request.additional_hours,
            timezone=self._timezone,
            base_hours=self._base_hours,
            max_additional_hours=self._max_additional_hours,
        )
        booking = Booking(
            id=self._id_factory(),
            venue=request.venue,
            interval=interval,
            status=BookingStatus.PENDING,
            title=request.title,
            additional_hours=request.additional_hours,
            organizer=request.organizer,
            owner=request.owner,
            category=request.category,
            description=request.description,
            additional_notes=request.additional_notes,
            created_at=self._now(),
        )

        with self._store.venue_lock(booking.venue):
            conflicts = find_conflicts(
                ConflictCandidate(venue=booking.venue, interval=booking.interval),
                self._store.list_by_venue(booking.venue),
            )
            self._enforce_policy(booking, conflicts)
            self._store.save(booking)

        self._logger.info(
            "Booking created",
            extra={
                "booking_id": booking.id,
                "venue": booking.venue.value,
                "conflicts": len(conflicts) or None,
            },
        )
        return BookingResult(booking=booking, conflicts=conflicts)

    def reschedule(
        self,
        booking_id: str,
        event_date: str | date,
        start_time: str,
        additional_hours: int,
        *,
        is_admin: bool = False,
    ) -> BookingResult:
        """Move a live booking. Edits follow the same lead-time rule as create."""
        check_lead_time(
            event_date,
            today=self._now().date(),
            min_lead_days=self._min_lead_days,
            is_admin=is_admin,
        )
        interval = derive_interval(
            event_date,
            start_time,
            additional_hours,
            timezone=self._timezone,
            base_hours=self._base_hours,
            max_additional_hours=self._max_additional_hours,
        )
        venue = self.get(booking_id).venue
        with self._store.venue_lock(venue):
            booking = self.get(booking_id)
            if booking.is_deleted:
                raise AlreadyDeletedError(booking.id)
            if is_terminal(booking.status):
                raise BookingClosedError(booking.id, booking.status.value)
            moved = replace(booking, interval=interval, additional_hours=additional_hours)
            conflicts = find_conflicts(candidate_for(moved), self._store.list_by_venue(venue))
            if is_active(moved):
                self._enforce_policy(moved, conflicts)
            self._store.save(moved)

        self._logger.info(
            "Booking rescheduled",
            extra={"booking_id": booking_id, "venue": venue.value, "conflicts": len(conflicts) or None},
        )
        return BookingResult(booking=moved, conflicts=conflicts)

    def approve(self, booking_id: str) -> BookingResult:
        return self._change_status(booking_id, BookingStatus.APPROVED)

    def reject(self, booking_id: str) -> Booking:
        return self._change_status(booking_id, BookingStatus.REJECTED).booking

    def cancel(self, booking_id: str) -> Booking:
        return self._change_status(booking_id, BookingStatus.CANCELLED).booking

    def complete(self, booking_id: str) -> Booking:
        return self._change_status(booking_id, BookingStatus.COMPLETED).booking

    def delete(self, booking_id: str) -> Booking:
        venue = self.get(booking_id).venue
        with self._store.venue_lock(venue):
            booking = self.get(booking_id)
            deleted = soft_delete(booking, self._now())
            if deleted is not booking:
                self._store.save(deleted)
                self._logger.info("Booking deleted", extra={"booking_id": booking_id, "status": booking.status.value})
        return deleted

    def get(self, booking_id: str) -> Booking:
        booking = self._store.get(booking_id)
        if booking is None:
            raise BookingNotFoundError(f"Booking {booking_id} not found.")
        return booking

    def conflicts_for(self, booking_id: str) -> list[Booking]:
        booking = self.get(booking_id)
        return find_conflicts(candidate_for(booking), self._store.list_by_venue(booking.venue))

    def list_for_admin(self, status: str = ALL, venue: str = ALL, query: str = "") -> list[AdminListEntry]:
        everything = self._store.list_all()
        # Overlaps are flagged against every live booking, not just the filtered page.
        flagged = overlapping_ids(b for b in everything if not b.is_deleted)
        visible = sort_for_admin(filter_bookings(everything, status=status, venue=venue, query=query))
        return [AdminListEntry(booking=b, overlaps=b.id in flagged) for b in visible]

    def _change_status(self, booking_id: str, target: BookingStatus) -> BookingResult:
        venue = self.get(booking_id).venue
        with self._store.venue_lock(venue):
            booking = self.get(booking_id)
            updated = transition(booking, target)
            conflicts: list[Booking] = []
            if target == BookingStatus.APPROVED:
                conflicts = find_conflicts(candidate_for(updated), self._store.list_by_venue(venue))
                self._enforce_policy(updated, conflicts)
            self._store.save(updated)

        self._logger.info(
            "Booking status changed",
            extra={
                "booking_id": booking_id,
                "status": booking.status.value,
                "target": target.value,
                "conflicts": len(conflicts) or None,
            },
        )
        return BookingResult(booking=updated, conflicts=conflicts)

    def _enforce_policy(self, booking: Booking, conflicts: list[Booking]) -> None:
        """
        Under the block policy a booking may not overlap an APPROVED booking.
        Overlaps with PENDING requests are always reported, never blocking.
        """
        if self._conflict_policy != BLOCK:
            return
        blocking = [c for c in conflicts if c.status == BookingStatus.APPROVED]
        if blocking:
            self._logger.warning(
                "Booking blocked by conflict",
                extra={"booking_id": booking.id, "venue": booking.venue.value, "conflicts": len(blocking)},
            )
            raise ConflictDetectedError(booking.id, blocking)

    def _validate_request(self, payload: BookingRequestDTO | dict[str, Any]) -> BookingRequestDTO:
        if isinstance(payload, BookingRequestDTO):
            return payload
        try:
            return BookingRequestDTO.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(str(e))

    def _now(self) -> datetime:
        return self._clock().astimezone(self._timezone)
