from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from venue_booking.domain.entities.booking import Booking, Venue
from venue_booking.domain.entities.catering import CateringSelection


class BookingStorePort(ABC):
    @abstractmethod
    def get(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Booking]:
        """All bookings, deleted ones included."""
        raise NotImplementedError

    @abstractmethod
    def list_by_venue(self, venue: Venue) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def save(self, booking: Booking) -> None:
        raise NotImplementedError

    @abstractmethod
    def venue_lock(self, venue: Venue) -> AbstractContextManager:
        """
        Serialize commits for one venue. Conflict checks that gate a commit
        must run while this is held.
        """
        raise NotImplementedError

    @abstractmethod
    def get_selection(self, booking_id: str) -> CateringSelection | None:
        raise NotImplementedError

    @abstractmethod
    def save_selection(self, selection: CateringSelection) -> None:
        raise NotImplementedError
