from __future__ import annotations

from venue_booking.application.ports.dish_catalog import DishCatalogPort
from venue_booking.domain.entities.catering import Dish, MainDishPackage
from venue_booking.infrastructure.catalog.dish_catalog_data import DISHES, MAIN_DISH_PACKAGES


class DishCatalogStore(DishCatalogPort):
    def __init__(
        self,
        dishes: tuple[Dish, ...] | list[Dish] | None = None,
        packages: tuple[MainDishPackage, ...] | list[MainDishPackage] | None = None,
    ) -> None:
        self._dishes = list(dishes or DISHES)
        self._packages = {p.id: p for p in packages or MAIN_DISH_PACKAGES}

    def list_dishes(self) -> list[Dish]:
        return list(self._dishes)

    def get_dish(self, dish_id: str) -> Dish | None:
        normalized_id = dish_id.lower().strip()
        for dish in self._dishes:
            if dish.id == normalized_id:
                return dish
        return None

    def get_package(self, package_id: str) -> MainDishPackage | None:
        return self._packages.get(package_id.lower().strip())
