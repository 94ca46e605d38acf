from __future__ import annotations

import threading

from venue_booking.application.ports.booking_store import BookingStorePort
from venue_booking.domain.entities.booking import Booking, Venue
from venue_booking.domain.entities.catering import CateringSelection


class MemoryBookingStore(BookingStorePort):
    def __init__(self, bookings: list[Booking] | None = None) -> None:
        self._bookings: dict[str, Booking] = {b.id: b for b in bookings or []}
        self._selections: dict[str, CateringSelection] = {}
        self._locks: dict[Venue, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # guards the locks dict

    def get(self, booking_id: str) -> Booking | None:
        return self._bookings.get(booking_id)

    def list_all(self) -> list[Booking]:
        return list(self._bookings.values())

    def list_by_venue(self, venue: Venue) -> list[Booking]:
        return [b for b in self._bookings.values() if b.venue == venue]

    def save(self, booking: Booking) -> None:
        self._bookings[booking.id] = booking

    def venue_lock(self, venue: Venue) -> threading.Lock:
        with self._lock_lock:
            if venue not in self._locks:
                self._locks[venue] = threading.Lock()
            return self._locks[venue]

    def get_selection(self, booking_id: str) -> CateringSelection | None:
        return self._selections.get(booking_id)

    def save_selection(self, selection: CateringSelection) -> None:
        self._selections[selection.booking_id] = selection
