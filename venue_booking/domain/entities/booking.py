from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"

    @classmethod
    def parse(cls, value: "str | BookingStatus") -> "BookingStatus":
        if isinstance(value, BookingStatus):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown booking status: {value!r}")


class Venue(str, Enum):
    LOUNGE_HALL = "lounge hall"
    FUNCTION_HALL = "function hall"
    AL_FRESCO = "al fresco"

    @property
    def label(self) -> str:
        return self.value.title()

    @classmethod
    def parse(cls, value: "str | Venue") -> "Venue":
        if isinstance(value, Venue):
            return value
        normalized = " ".join(str(value or "").split()).lower()
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown venue: {value!r}")


@dataclass(frozen=True)
class Interval:
    """Half-open [start, end) span of venue usage."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValueError("Interval bounds must be timezone-aware.")
        if self.start >= self.end:
            raise ValueError(f"Interval start {self.start.isoformat()} must be before end {self.end.isoformat()}.")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: "Interval") -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class Booking:
    id: str
    venue: Venue
    interval: Interval
    status: BookingStatus = BookingStatus.PENDING
    title: str = ""
    additional_hours: int = 0
    deleted_at: datetime | None = None  # tombstone; None means live
    organizer: str = ""
    owner: str = ""  # submitting account
    category: str = ""
    description: str = ""
    additional_notes: str = ""
    created_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
