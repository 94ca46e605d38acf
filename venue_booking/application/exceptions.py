from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from venue_booking.domain.entities.booking import Booking
    from venue_booking.domain.entities.catering import CateringSelection


class ValidationError(ValueError):
    """Raised when booking input cannot be turned into a valid interval."""
    pass


class TransitionError(RuntimeError):
    """Raised when a status change is refused. No partial change is applied."""
    pass


class IllegalTransitionError(TransitionError):
    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"Illegal booking status transition: {current} -> {target}")
        self.current = current
        self.target = target


class AlreadyDeletedError(TransitionError):
    def __init__(self, booking_id: str) -> None:
        super().__init__(f"Booking {booking_id} is deleted and cannot change status.")
        self.booking_id = booking_id


class BookingClosedError(TransitionError):
    def __init__(self, booking_id: str, status: str) -> None:
        super().__init__(f"Booking {booking_id} is {status} and can no longer be rescheduled.")
        self.booking_id = booking_id
        self.status = status


class ConstraintError(RuntimeError):
    """Raised when a catering change is refused. The selection is left unchanged."""
    pass


class CapacityExceededError(ConstraintError):
    def __init__(self, selection: "CateringSelection", max_dishes: int) -> None:
        super().__init__(f"Cannot select more than {max_dishes} dishes.")
        self.selection = selection
        self.max_dishes = max_dishes


class CateringLockedError(ConstraintError):
    def __init__(self, booking_id: str) -> None:
        super().__init__(f"Catering for booking {booking_id} can no longer be changed.")
        self.booking_id = booking_id


class ConflictDetectedError(RuntimeError):
    """Raised by the workflow when policy blocks a conflicting booking."""

    def __init__(self, booking_id: str, conflicts: Sequence["Booking"]) -> None:
        ids = ", ".join(b.id for b in conflicts)
        super().__init__(f"Booking {booking_id} conflicts with: {ids}")
        self.booking_id = booking_id
        self.conflicts = list(conflicts)


class BookingNotFoundError(LookupError):
    pass
