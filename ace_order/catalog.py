"""Static menu loading and the read-only catalog query surface."""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from ace_order.config import resolve_menu_path
from ace_order.constant import ALL_CATEGORY_ID, ALL_CATEGORY_TITLE
from ace_order.models import Category, Menu, MenuItem

logger = logging.getLogger(__name__)


def _options(raw: dict, key: str) -> tuple[str, ...]:
    values = raw.get(key)
    if values is None:
        return ()
    if not isinstance(values, list):
        raise TypeError(f"{key} must be a list")
    return tuple(str(value) for value in values)


def _parse_price(value: object) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise TypeError(f"price must be a number, got {value!r}")
    price = Decimal(str(value))
    if not price.is_finite() or price < 0:
        raise ValueError(f"price must be a non-negative number, got {value!r}")
    return price


def _parse_item(raw: dict) -> MenuItem:
    image = raw.get("image")
    return MenuItem(
        item_id=str(raw["id"]),
        category=str(raw["category"]),
        name=str(raw["name"]),
        price=_parse_price(raw["price"]),
        description=str(raw.get("description") or ""),
        image=str(image) if image else None,
        sizes=_options(raw, "sizes"),
        crusts=_options(raw, "crusts"),
        toppings=_options(raw, "toppings"),
    )


def parse_menu(payload: object) -> Menu:
    """Build a Menu from decoded JSON. Raises on any shape problem."""
    if not isinstance(payload, dict):
        raise TypeError("menu root must be an object")
    categories = tuple(
        Category(category_id=str(raw["id"]), title=str(raw["title"])) for raw in payload["categories"]
    )
    items = tuple(_parse_item(raw) for raw in payload["items"])
    return Menu(categories=categories, items=items)


def load_menu(path: str | Path) -> Menu:
    """Load the menu asset; a missing or malformed file yields an empty menu."""
    try:
        with Path(path).open("r", encoding="utf-8") as fh:
            return parse_menu(json.load(fh))
    except (OSError, ValueError, KeyError, TypeError, InvalidOperation) as exc:
        logger.warning("menu load failed path=%s error=%r; using empty menu", path, exc)
        return Menu.empty()


class MenuCatalog:
    """Read-only view over one loaded menu.

    Provides the category list, per-category items (with the synthetic
    ``"all"`` aggregate), text search and lookup by id.
    """

    def __init__(self, menu: Menu | None = None, *, path: str | Path | None = None) -> None:
        self._menu = menu
        self._path = path

    @classmethod
    def from_path(cls, path: str | Path | None = None) -> MenuCatalog:
        """Catalog backed by a JSON file, parsed on first access."""
        return cls(path=path if path is not None else resolve_menu_path())

    @property
    def menu(self) -> Menu:
        if self._menu is None:
            self._menu = load_menu(self._path) if self._path is not None else Menu.empty()
            logger.info(
                "menu loaded categories=%d items=%d",
                len(self._menu.categories),
                len(self._menu.items),
            )
        return self._menu

    def categories(self) -> list[Category]:
        return list(self.menu.categories)

    def tab_categories(self) -> list[Category]:
        """Categories for the tab strip, led by "All" when the menu is not empty."""
        loaded = self.categories()
        if not loaded:
            return []
        return [Category(ALL_CATEGORY_ID, ALL_CATEGORY_TITLE), *loaded]

    def all_items(self) -> list[MenuItem]:
        return list(self.menu.items)

    def items_for(self, category_id: str) -> list[MenuItem]:
        """Items for a category (case-insensitive). ``"all"`` returns every item."""
        wanted = category_id.lower()
        if wanted == ALL_CATEGORY_ID:
            return self.all_items()
        return [item for item in self.menu.items if item.category.lower() == wanted]

    def search(self, category_id: str, query: str) -> list[MenuItem]:
        """Case-insensitive substring search of name/description within a category."""
        base = self.items_for(category_id)
        needle = query.strip().lower()
        if not needle:
            return base
        return [item for item in base if needle in item.name.lower() or needle in item.description.lower()]

    def find_by_id(self, item_id: str) -> MenuItem | None:
        for item in self.menu.items:
            if item.item_id == item_id:
                return item
        return None
