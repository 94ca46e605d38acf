from __future__ import annotations

from datetime import date
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, field_validator

from venue_booking.application.utils.intervals import from_storage, to_storage
from venue_booking.domain.entities.booking import Booking, BookingStatus, Interval, Venue

# Older records marked "not deleted" with this value instead of null.
LEGACY_NOT_DELETED = "0000-01-01T00:00:00.000Z"


class BookingRequestDTO(BaseModel):
    """Raw booking form input, before the interval is derived."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, max_length=50)
    venue: Venue
    event_date: date = Field(alias="date")
    start_time: str = Field(alias="startTime", min_length=1)
    additional_hours: int = Field(default=0, ge=0, alias="additionalHours")
    organizer: str = ""
    owner: str = Field(default="", alias="userId")
    category: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1, max_length=255)
    additional_notes: str = Field(default="", alias="additionalNotes")

    @field_validator("venue", mode="before")
    @classmethod
    def _parse_venue(cls, value: object) -> Venue:
        return Venue.parse(value)

    @field_validator("title", "organizer", "category", "description", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class StoredBookingDTO(BaseModel):
    """A booking record as persisted: camelCase keys, UTC ISO timestamps."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    venue: Venue
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    status: BookingStatus = BookingStatus.PENDING
    additional_hours: int = Field(default=0, ge=0, alias="additionalHours")
    deleted_at: str | None = Field(default=None, alias="deletedAt")
    organizer: str | None = ""
    owner: str = Field(default="", alias="userId")
    category: str = ""
    description: str = ""
    additional_notes: str | None = Field(default="", alias="additionalNotes")
    created_at: str | None = Field(default=None, alias="createdAt")

    @field_validator("venue", mode="before")
    @classmethod
    def _parse_venue(cls, value: object) -> Venue:
        return Venue.parse(value)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: object) -> BookingStatus:
        return BookingStatus.parse(value)

    @field_validator("deleted_at", mode="before")
    @classmethod
    def _normalize_tombstone(cls, value: object) -> object:
        # One-time migration: the legacy sentinel and blanks both mean "live".
        if value is None or value == "" or value == LEGACY_NOT_DELETED:
            return None
        return value

    def to_booking(self, timezone: ZoneInfo) -> Booking:
        return Booking(
            id=self.id,
            title=self.title,
            venue=self.venue,
            interval=Interval(
                start=from_storage(self.start_time, timezone),
                end=from_storage(self.end_time, timezone),
            ),
            status=self.status,
            additional_hours=self.additional_hours,
            deleted_at=from_storage(self.deleted_at, timezone) if self.deleted_at else None,
            organizer=self.organizer or "",
            owner=self.owner,
            category=self.category,
            description=self.description,
            additional_notes=self.additional_notes or "",
            created_at=from_storage(self.created_at, timezone) if self.created_at else None,
        )

    @classmethod
    def from_booking(cls, booking: Booking) -> "StoredBookingDTO":
        return cls(
            id=booking.id,
            title=booking.title,
            venue=booking.venue,
            start_time=to_storage(booking.interval.start),
            end_time=to_storage(booking.interval.end),
            status=booking.status,
            additional_hours=booking.additional_hours,
            deleted_at=to_storage(booking.deleted_at) if booking.deleted_at else None,
            organizer=booking.organizer,
            owner=booking.owner,
            category=booking.category,
            description=booking.description,
            additional_notes=booking.additional_notes,
            created_at=to_storage(booking.created_at) if booking.created_at else None,
        )
