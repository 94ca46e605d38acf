from __future__ import annotations

from venue_booking.domain.entities.catering import Dish, MainDishPackage

DISHES: tuple[Dish, ...] = (
    Dish(id="beef_caldereta", name="Beef Caldereta", category="Beef"),
    Dish(id="beef_broccoli", name="Beef with Broccoli", category="Beef"),
    Dish(id="pork_menudo", name="Pork Menudo", category="Pork"),
    Dish(id="pork_barbecue", name="Pork Barbecue", category="Pork"),
    Dish(id="chicken_cordon_bleu", name="Chicken Cordon Bleu", category="Chicken"),
    Dish(id="chicken_pastel", name="Chicken Pastel", category="Chicken"),
    Dish(id="fish_fillet", name="Fish Fillet with Tartar Sauce", category="Fish"),
    Dish(id="sweet_sour_fish", name="Sweet and Sour Fish", category="Fish"),
    Dish(id="chopsuey", name="Chopsuey", category="Vegetables"),
    Dish(id="buttered_vegetables", name="Buttered Vegetables", category="Vegetables"),
    Dish(id="carbonara", name="Carbonara", category="Pasta", dish_type="SNACK"),
    Dish(id="buko_pandan", name="Buko Pandan", category="Dessert", dish_type="DESSERT"),
    Dish(id="leche_flan", name="Leche Flan", category="Dessert", dish_type="DESSERT"),
)

MAIN_DISH_PACKAGES: tuple[MainDishPackage, ...] = (
    MainDishPackage(id="three_main", name="3 Main Dishes", num_of_dishes_category=3, price=450, min_pax=50, max_pax=150),
    MainDishPackage(id="four_main", name="4 Main Dishes", num_of_dishes_category=4, price=520, min_pax=50, max_pax=200),
    MainDishPackage(id="five_main", name="5 Main Dishes", num_of_dishes_category=5, price=600, min_pax=100, max_pax=300),
)
