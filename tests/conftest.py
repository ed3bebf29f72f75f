"""Shared test fixtures."""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from ace_order.catalog import MenuCatalog
from ace_order.models import CartLine, CheckoutForm, Menu, MenuItem, Category

MENU_PAYLOAD = {
    "categories": [
        {"id": "pizza", "title": "Pizza"},
        {"id": "entrees", "title": "Entrees"},
        {"id": "desserts", "title": "Desserts"},
    ],
    "items": [
        {
            "id": "pizza_margherita",
            "category": "pizza",
            "name": "Margherita Pizza",
            "price": 12.5,
            "image": "image/pizza_margherita.jpg",
            "description": "Tomato, mozzarella and basil.",
            "sizes": ["Small", "Large"],
            "crusts": ["Thin", "Deep dish"],
            "toppings": ["Mushroom", "Olives"],
        },
        {
            "id": "entree_lasagna",
            "category": "Entrees",
            "name": "Beef Lasagna",
            "price": 15,
            "description": "Slow-cooked ragu with ricotta.",
        },
        {
            "id": "entree_salmon",
            "category": "entrees",
            "name": "Grilled Salmon",
            "price": "19.00",
            "description": "Lemon herb salmon with potatoes.",
        },
        {
            "id": "dessert_tiramisu",
            "category": "desserts",
            "name": "Tiramisu",
            "price": 7.25,
            "description": "Espresso ladyfingers and mascarpone.",
        },
    ],
}


@pytest.fixture
def menu_path(tmp_path: Path) -> Path:
    path = tmp_path / "menu.json"
    path.write_text(json.dumps(MENU_PAYLOAD), encoding="utf-8")
    return path


@pytest.fixture
def catalog(menu_path: Path) -> MenuCatalog:
    return MenuCatalog.from_path(menu_path)


@pytest.fixture
def ten_dollar_item() -> MenuItem:
    return MenuItem(item_id="special", category="entrees", name="Daily Special", price=Decimal("10.00"))


@pytest.fixture
def small_menu(ten_dollar_item: MenuItem) -> Menu:
    return Menu(categories=(Category("entrees", "Entrees"),), items=(ten_dollar_item,))


@pytest.fixture
def special_line(ten_dollar_item: MenuItem) -> CartLine:
    return CartLine.from_menu_item(ten_dollar_item)


@pytest.fixture
def valid_form() -> CheckoutForm:
    return CheckoutForm(
        card_name="Ada Lovelace",
        card_number="4242 4242 4242 4242",
        expiry="12/30",
        cvv="123",
        billing_zip="12345",
        first_name="Ada",
        last_name="Lovelace",
        address="12 Analytical Way",
        city="London",
        state="NY",
        ship_zip="54321",
    )
