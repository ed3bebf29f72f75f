"""Tests for cart merge semantics, index operations and totals."""

from dataclasses import replace
from decimal import Decimal

import pytest

from ace_order.cart import CartStore
from ace_order.models import CartLine, MenuItem


@pytest.fixture
def pizza() -> MenuItem:
    return MenuItem(
        item_id="pizza_margherita",
        category="pizza",
        name="Margherita Pizza",
        price=Decimal("12.50"),
        sizes=("Small", "Large"),
        crusts=("Thin",),
        toppings=("Mushroom", "Olives"),
    )


def _assert_totals_consistent(cart: CartStore) -> None:
    assert cart.total() == cart.subtotal() + cart.subtotal() * cart.tax_rate


def test_same_identity_key_merges_quantities(pizza):
    cart = CartStore()
    first = CartLine.from_menu_item(pizza, size="Large", crust="Thin", topping="Mushroom", notes="well done")
    second = replace(first, quantity=2)

    cart.add(first)
    cart.add(second)

    assert len(cart) == 1
    assert cart.lines[0].quantity == 3


def test_different_topping_creates_separate_line(pizza):
    cart = CartStore()
    cart.add(CartLine.from_menu_item(pizza, size="Large", topping="Mushroom"))
    cart.add(CartLine.from_menu_item(pizza, size="Large", topping="Mushroom"))
    cart.add(CartLine.from_menu_item(pizza, size="Large", topping="Olives"))

    assert [(line.topping, line.quantity) for line in cart.lines] == [("Mushroom", 2), ("Olives", 1)]


def test_absent_and_blank_notes_merge(pizza):
    cart = CartStore()
    cart.add(CartLine.from_menu_item(pizza, notes=None))
    cart.add(CartLine.from_menu_item(pizza, notes="   "))
    cart.add(replace(CartLine.from_menu_item(pizza), notes=""))

    assert len(cart) == 1
    assert cart.lines[0].quantity == 3


def test_notes_compare_literally(pizza):
    """Case and surrounding whitespace in notes are not normalized."""
    cart = CartStore()
    cart.add(CartLine.from_menu_item(pizza, notes="Extra napkins"))
    cart.add(CartLine.from_menu_item(pizza, notes="extra napkins"))
    cart.add(CartLine.from_menu_item(pizza, notes="Extra napkins "))

    assert len(cart) == 3


def test_merge_keeps_existing_line_fields(pizza):
    cart = CartStore()
    cart.add(CartLine.from_menu_item(pizza))
    cheaper = replace(CartLine.from_menu_item(pizza), name="Renamed", base_price=Decimal("1.00"))
    cart.add(cheaper)

    line = cart.lines[0]
    assert line.name == "Margherita Pizza"
    assert line.base_price == Decimal("12.50")
    assert line.quantity == 2


def test_add_returns_index_of_affected_line(pizza, special_line):
    cart = CartStore()
    assert cart.add(CartLine.from_menu_item(pizza)) == 0
    assert cart.add(special_line) == 1
    assert cart.add(CartLine.from_menu_item(pizza)) == 0


def test_add_rejects_non_positive_quantity(special_line):
    with pytest.raises(ValueError):
        CartStore().add(replace(special_line, quantity=0))


def test_insertion_order_is_preserved(pizza, special_line):
    cart = CartStore()
    cart.add(special_line)
    cart.add(CartLine.from_menu_item(pizza))
    assert [line.item_id for line in cart.lines] == ["special", "pizza_margherita"]


def test_decrement_never_drops_below_one(special_line):
    cart = CartStore()
    cart.add(special_line)
    cart.decrement(0)
    cart.decrement(0)
    assert len(cart) == 1
    assert cart.lines[0].quantity == 1


def test_increment_then_decrement(special_line):
    cart = CartStore()
    cart.add(special_line)
    cart.increment(0)
    cart.increment(0)
    cart.decrement(0)
    assert cart.lines[0].quantity == 2


def test_out_of_range_indices_are_no_ops(special_line):
    cart = CartStore()
    cart.add(special_line)
    before = cart.lines

    cart.remove_at(5)
    cart.remove_at(-1)
    cart.increment(1)
    cart.decrement(-3)

    assert cart.lines == before


def test_remove_at_shifts_following_lines(pizza, special_line):
    cart = CartStore()
    cart.add(CartLine.from_menu_item(pizza, size="Small"))
    cart.add(special_line)
    cart.add(CartLine.from_menu_item(pizza, size="Large"))

    cart.remove_at(0)

    assert [line.item_id for line in cart.lines] == ["special", "pizza_margherita"]
    assert cart.lines[1].size == "Large"


def test_clear_empties_cart(special_line):
    cart = CartStore()
    cart.add(special_line)
    cart.clear()
    assert cart.is_empty
    assert cart.subtotal() == Decimal("0")


def test_ten_dollar_item_twice_totals(special_line):
    cart = CartStore(tax_rate=Decimal("0.07"))
    cart.add(replace(special_line, quantity=2))

    assert cart.subtotal() == Decimal("20.00")
    assert cart.tax() == Decimal("1.40")
    assert cart.total() == Decimal("21.40")


def test_totals_hold_after_every_mutation(pizza, special_line):
    cart = CartStore()
    operations = [
        lambda: cart.add(special_line),
        lambda: cart.add(CartLine.from_menu_item(pizza, size="Large")),
        lambda: cart.increment(1),
        lambda: cart.decrement(0),
        lambda: cart.add(special_line),
        lambda: cart.remove_at(0),
        lambda: cart.clear(),
    ]
    for operation in operations:
        operation()
        _assert_totals_consistent(cart)


def test_totals_are_stable_between_reads(special_line):
    cart = CartStore()
    cart.add(special_line)
    assert cart.total() == cart.total()
    assert cart.tax() == cart.tax()


def test_item_count_sums_quantities(pizza, special_line):
    cart = CartStore()
    cart.add(replace(special_line, quantity=3))
    cart.add(CartLine.from_menu_item(pizza))
    assert cart.item_count() == 4


def test_subscribers_notified_on_change_only(special_line):
    cart = CartStore()
    events = []
    unsubscribe = cart.subscribe(lambda store: events.append(len(store)))

    cart.add(special_line)
    cart.decrement(0)  # already at 1
    cart.remove_at(9)
    cart.increment(0)
    unsubscribe()
    cart.clear()

    assert events == [1, 1]


def test_lines_snapshot_is_read_only(special_line):
    cart = CartStore()
    cart.add(special_line)
    snapshot = cart.lines
    cart.clear()
    assert len(snapshot) == 1
