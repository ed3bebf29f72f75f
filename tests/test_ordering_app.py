"""Headless tests for the Textual ordering flow."""

import asyncio

from textual.widgets import Button, Input

from ace_order.cart import CartStore
from ace_order.checkout_screen import CheckoutScreen
from ace_order.confirm_modal import ConfirmModal
from ace_order.confirmation_modal import ConfirmationModal
from ace_order.item_modal import ItemDetailModal
from ace_order.ordering_app import OrderingApp
from ace_order.privacy_modal import PrivacyTermsModal


def _run(app: OrderingApp, scenario) -> None:
    async def main() -> None:
        async with app.run_test(size=(120, 50)) as pilot:
            await scenario(pilot)

    asyncio.run(main())


def test_search_then_add_item_to_cart(catalog) -> None:
    app = OrderingApp(catalog=catalog, cart=CartStore())

    async def scenario(pilot) -> None:
        await pilot.press("/", "p", "i", "z", "z", "a")
        await pilot.pause(0.5)
        assert [item.name for item in app.results.items] == ["Margherita Pizza"]

        await pilot.press("enter")
        await pilot.pause()
        assert isinstance(app.screen, ItemDetailModal)

        await pilot.press("a")
        await pilot.pause()
        assert not isinstance(app.screen, ItemDetailModal)

    _run(app, scenario)
    assert len(app.cart) == 1
    assert app.cart.lines[0].item_id == "pizza_margherita"


def test_misspelled_search_offers_suggestions(catalog) -> None:
    app = OrderingApp(catalog=catalog, cart=CartStore())

    async def scenario(pilot) -> None:
        await pilot.press("right", "/")
        await pilot.press(*"tiramsu")
        await pilot.pause(0.5)
        assert app.category_index == 0
        assert app.results.items == []
        assert app.results.suggestions[0] == "Tiramisu"

    _run(app, scenario)


def test_escape_leaves_search_and_restores_items(catalog) -> None:
    app = OrderingApp(catalog=catalog, cart=CartStore())

    async def scenario(pilot) -> None:
        await pilot.press("/", "x", "y", "z")
        await pilot.pause(0.5)
        await pilot.press("escape")
        await pilot.pause(0.5)
        assert app.input_state == "normal"
        assert app.search_query == ""
        assert len(app.results.items) == 4

    _run(app, scenario)


def test_remove_line_after_confirmation(catalog, special_line) -> None:
    cart = CartStore()
    cart.add(special_line)
    app = OrderingApp(catalog=catalog, cart=cart)

    async def scenario(pilot) -> None:
        await pilot.press("j", "d")
        await pilot.pause()
        assert isinstance(app.screen, ConfirmModal)
        await pilot.press("y")
        await pilot.pause()

    _run(app, scenario)
    assert cart.is_empty


def test_checkout_with_empty_cart_disables_place_order(catalog) -> None:
    app = OrderingApp(catalog=catalog, cart=CartStore())

    async def scenario(pilot) -> None:
        await pilot.press("c")
        await pilot.pause()
        assert isinstance(app.screen, CheckoutScreen)
        assert app.screen.query_one("#place-order", Button).disabled

        await pilot.press("escape")
        await pilot.pause()
        assert not isinstance(app.screen, CheckoutScreen)

    _run(app, scenario)


def test_checkout_places_order_and_shows_confirmation(catalog, special_line) -> None:
    cart = CartStore()
    cart.add(special_line)
    app = OrderingApp(catalog=catalog, cart=cart)
    values = {
        "card_name": "Ada Lovelace",
        "card_number": "4242424242424242",
        "expiry": "12/99",
        "cvv": "123",
        "billing_zip": "12345",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "address": "12 Analytical Way",
        "city": "London",
        "state": "NY",
        "ship_zip": "54321",
    }

    async def scenario(pilot) -> None:
        await pilot.press("c")
        await pilot.pause()
        screen = app.screen
        assert isinstance(screen, CheckoutScreen)
        for name, value in values.items():
            screen.query_one(f"#{name}", Input).value = value
        await pilot.pause()
        assert screen.query_one("#card_number", Input).value == "4242 4242 4242 4242"

        screen.action_place_order()
        await pilot.pause()
        assert isinstance(app.screen, ConfirmationModal)
        assert app.screen.confirmation.customer_name == "Ada Lovelace"

    _run(app, scenario)
    assert cart.is_empty


def test_checkout_blocks_on_first_invalid_field(catalog, special_line) -> None:
    cart = CartStore()
    cart.add(special_line)
    app = OrderingApp(catalog=catalog, cart=cart)

    async def scenario(pilot) -> None:
        await pilot.press("c")
        await pilot.pause()
        screen = app.screen
        screen.action_place_order()
        await pilot.pause()
        assert isinstance(app.screen, CheckoutScreen)
        assert screen.query_one("#card_name", Input).has_focus

    _run(app, scenario)
    assert len(cart) == 1


def test_tab_cycles_results_on_menu(catalog) -> None:
    app = OrderingApp(catalog=catalog, cart=CartStore())

    async def scenario(pilot) -> None:
        await pilot.press("tab")
        assert app.selected_index == 1
        await pilot.press("tab", "tab", "tab")
        assert app.selected_index == 0

    _run(app, scenario)


def test_tab_moves_between_checkout_fields(catalog) -> None:
    app = OrderingApp(catalog=catalog, cart=CartStore())

    async def scenario(pilot) -> None:
        await pilot.press("c")
        await pilot.pause()
        screen = app.screen
        assert screen.query_one("#card_name", Input).has_focus
        await pilot.press("tab")
        await pilot.pause()
        assert screen.query_one("#card_number", Input).has_focus
        assert app.selected_index == 0

    _run(app, scenario)


def test_privacy_dialog_opens_from_checkout(catalog) -> None:
    app = OrderingApp(catalog=catalog, cart=CartStore())

    async def scenario(pilot) -> None:
        await pilot.press("c")
        await pilot.pause()
        await pilot.press("ctrl+t")
        await pilot.pause()
        assert isinstance(app.screen, PrivacyTermsModal)

        await pilot.press("escape")
        await pilot.pause()
        assert isinstance(app.screen, CheckoutScreen)

    _run(app, scenario)


def test_notes_kept_as_typed_whether_confirmed_or_left(catalog) -> None:
    """Enter and Esc both keep trailing spaces, so the two adds merge."""
    app = OrderingApp(catalog=catalog, cart=CartStore())

    async def scenario(pilot) -> None:
        await pilot.press("up")
        for leave_key in ("enter", "escape"):
            await pilot.press("enter")
            await pilot.pause()
            assert isinstance(app.screen, ItemDetailModal)
            await pilot.press("enter", "n", "o", "space", "i", "c", "e", "space", leave_key, "a")
            await pilot.pause()

    _run(app, scenario)
    assert len(app.cart) == 1
    line = app.cart.lines[0]
    assert line.item_id == "dessert_tiramisu"
    assert line.notes == "no ice "
    assert line.quantity == 2
