from __future__ import annotations

from dataclasses import dataclass

MAIN_DISH_TYPE = "MAIN"


@dataclass(frozen=True)
class Dish:
    id: str
    name: str
    category: str
    dish_type: str = MAIN_DISH_TYPE
    description: str = ""


@dataclass(frozen=True)
class MainDishPackage:
    id: str
    name: str
    num_of_dishes_category: int  # how many main dishes the package allows
    price: int = 0
    min_pax: int = 0
    max_pax: int | None = None


@dataclass(frozen=True)
class CateringSelection:
    booking_id: str
    selected_dishes: tuple[str, ...] = ()
    expected_pax: int = 0
    package_id: str | None = None

    def __post_init__(self) -> None:
        if len(set(self.selected_dishes)) != len(self.selected_dishes):
            raise ValueError("Selected dishes must be unique.")

    def __len__(self) -> int:
        return len(self.selected_dishes)

    def __contains__(self, dish_id: object) -> bool:
        return dish_id in self.selected_dishes
