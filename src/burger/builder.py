# src/burger/builder.py - v1
"""Build-your-own burger: type, ingredients, price and cart counter."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict

INGREDIENT_PRICE = Decimal("0.75")


class BurgerType(str, Enum):
    BURGER = "Burger"
    SMASH = "Smash"
    DOUBLE = "Double"

    @property
    def base_price(self) -> Decimal:
        return _BASE_PRICES[self]


_BASE_PRICES = {
    BurgerType.BURGER: Decimal("9.99"),
    BurgerType.SMASH: Decimal("8.99"),
    BurgerType.DOUBLE: Decimal("12.99"),
}


class Ingredient(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    image_name: str
    # Vertical offset of the layer when stacked, in points.
    offset: float = 0.0


AVAILABLE_INGREDIENTS: tuple[Ingredient, ...] = (
    Ingredient(name="Sauce", image_name="sauce", offset=4),
    Ingredient(name="Cheese", image_name="cheese", offset=-4),
    Ingredient(name="Bacon", image_name="bacon", offset=-8),
    Ingredient(name="Avocado", image_name="avocado", offset=-8),
    Ingredient(name="Gherkin", image_name="gherkin", offset=-8),
    Ingredient(name="Mushroom", image_name="mushroom", offset=-8),
    Ingredient(name="Fried Egg", image_name="friedEgg", offset=-10),
    Ingredient(name="Tomato", image_name="tomato", offset=-10),
    Ingredient(name="Onion", image_name="onion", offset=-8),
    Ingredient(name="Lettuce", image_name="lettuce", offset=-8),
)


def find_ingredient(name: str) -> Ingredient:
    """Look up an available ingredient by name (case-insensitive).

    Raises:
        KeyError: If no such ingredient exists.
    """
    for ingredient in AVAILABLE_INGREDIENTS:
        if ingredient.name.lower() == name.strip().lower():
            return ingredient
    raise KeyError(name)


class BurgerBuilder:
    """Selection state for one burger plus the running cart count."""

    def __init__(self) -> None:
        self.burger_type = BurgerType.BURGER
        self.selected: list[Ingredient] = []
        self.cart_count = 0

    def select_type(self, burger_type: BurgerType | str) -> None:
        self.burger_type = BurgerType(burger_type)

    def toggle_ingredient(self, ingredient: Ingredient) -> bool:
        """Add the ingredient, or remove it if already selected.

        Returns:
            True if the ingredient is selected after the call.
        """
        if ingredient in self.selected:
            self.selected.remove(ingredient)
            return False
        self.selected.append(ingredient)
        return True

    def price(self) -> Decimal:
        return self.burger_type.base_price + INGREDIENT_PRICE * len(self.selected)

    def add_to_cart(self) -> Decimal:
        """Add the current burger to the cart and start a new one.

        Returns:
            The price of the burger just added.
        """
        price = self.price()
        self.cart_count += 1
        self.reset()
        return price

    def reset(self) -> None:
        """Clear the current burger. The cart count is kept."""
        self.burger_type = BurgerType.BURGER
        self.selected.clear()
