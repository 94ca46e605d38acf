from __future__ import annotations

from abc import ABC, abstractmethod

from venue_booking.domain.entities.catering import Dish, MainDishPackage


class DishCatalogPort(ABC):
    @abstractmethod
    def list_dishes(self) -> list[Dish]:
        raise NotImplementedError

    @abstractmethod
    def get_dish(self, dish_id: str) -> Dish | None:
        raise NotImplementedError

    @abstractmethod
    def get_package(self, package_id: str) -> MainDishPackage | None:
        """Get main-dish package by id. Its dish count is the selection cap."""
        raise NotImplementedError
