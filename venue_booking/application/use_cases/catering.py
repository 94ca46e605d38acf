from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from venue_booking.application.exceptions import (
    BookingNotFoundError,
    CapacityExceededError,
    CateringLockedError,
    ValidationError,
)
from venue_booking.application.ports.booking_store import BookingStorePort
from venue_booking.application.ports.dish_catalog import DishCatalogPort
from venue_booking.application.use_cases.booking_state import can_edit_catering
from venue_booking.domain.entities.booking import Booking
from venue_booking.domain.entities.catering import MAIN_DISH_TYPE, CateringSelection, Dish, MainDishPackage


def toggle_dish(selection: CateringSelection, dish_id: str, max_dishes: int) -> CateringSelection:
    """
    Remove dish_id if selected, otherwise add it.
    Adding past max_dishes raises CapacityExceededError and leaves the
    selection as it was. The cap covers the whole selection, not each category.
    """
    if dish_id in selection.selected_dishes:
        remaining = tuple(d for d in selection.selected_dishes if d != dish_id)
        return replace(selection, selected_dishes=remaining)

    if len(selection.selected_dishes) >= max_dishes:
        raise CapacityExceededError(selection=selection, max_dishes=max_dishes)

    return replace(selection, selected_dishes=selection.selected_dishes + (dish_id,))


def remaining_dishes(selection: CateringSelection, max_dishes: int) -> int:
    return max(0, max_dishes - len(selection.selected_dishes))


def group_by_category(dishes: Iterable[Dish], dish_type: str | None = MAIN_DISH_TYPE) -> dict[str, list[Dish]]:
    """Group catalog dishes by category for display, keeping catalog order."""
    grouped: dict[str, list[Dish]] = {}
    for dish in dishes:
        if dish_type is not None and dish.dish_type != dish_type:
            continue
        grouped.setdefault(dish.category, []).append(dish)
    return grouped


def max_dishes_for(package: MainDishPackage | None, default: int) -> int:
    if package is None:
        return default
    return package.num_of_dishes_category


class CateringUseCase:
    """Catering edits for a stored booking, refused once the booking is closed."""

    def __init__(self, store: BookingStorePort, catalog: DishCatalogPort, default_max_dishes: int = 5) -> None:
        self._store = store
        self._catalog = catalog
        self._default_max_dishes = default_max_dishes
        self._logger = logging.getLogger(__name__)

    def menu(self) -> dict[str, list[Dish]]:
        return group_by_category(self._catalog.list_dishes())

    def get_selection(self, booking_id: str) -> CateringSelection:
        self._require_booking(booking_id)
        # An empty selection is falsy but still carries the chosen package.
        selection = self._store.get_selection(booking_id)
        return selection if selection is not None else CateringSelection(booking_id=booking_id)

    def max_dishes(self, selection: CateringSelection) -> int:
        package = self._catalog.get_package(selection.package_id) if selection.package_id else None
        return max_dishes_for(package, self._default_max_dishes)

    def choose_package(self, booking_id: str, package_id: str, expected_pax: int) -> CateringSelection:
        booking = self._require_editable(booking_id)
        package = self._catalog.get_package(package_id)
        if package is None:
            raise ValidationError(f"Unknown main dish package: {package_id!r}.")
        if expected_pax < package.min_pax or (package.max_pax is not None and expected_pax > package.max_pax):
            raise ValidationError(
                f"Package {package.name} serves {package.min_pax}-{package.max_pax} guests, got {expected_pax}."
            )

        current = self.get_selection(booking.id)
        if len(current) > package.num_of_dishes_category:
            raise CapacityExceededError(selection=current, max_dishes=package.num_of_dishes_category)

        updated = replace(current, package_id=package.id, expected_pax=expected_pax)
        self._store.save_selection(updated)
        return updated

    def toggle_dish(self, booking_id: str, dish_id: str) -> CateringSelection:
        booking = self._require_editable(booking_id)
        dish = self._catalog.get_dish(dish_id)
        if dish is None or dish.dish_type != MAIN_DISH_TYPE:
            raise ValidationError(f"Unknown main dish: {dish_id!r}.")

        current = self.get_selection(booking.id)
        cap = self.max_dishes(current)
        try:
            updated = toggle_dish(current, dish.id, cap)
        except CapacityExceededError:
            self._logger.info(
                "Dish selection refused",
                extra={"booking_id": booking.id, "reason": f"cap {cap} reached"},
            )
            raise
        self._store.save_selection(updated)
        return updated

    def _require_booking(self, booking_id: str) -> Booking:
        booking = self._store.get(booking_id)
        if booking is None:
            raise BookingNotFoundError(f"Booking {booking_id} not found.")
        return booking

    def _require_editable(self, booking_id: str) -> Booking:
        booking = self._require_booking(booking_id)
        if not can_edit_catering(booking):
            raise CateringLockedError(booking.id)
        return booking
