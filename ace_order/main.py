"""Entry point for the ace-order Textual app."""

from __future__ import annotations

import locale
import logging

from ace_order.app_logging import configure_logging
from ace_order.cart import CartStore
from ace_order.catalog import MenuCatalog
from ace_order.ordering_app import OrderingApp

logger = logging.getLogger(__name__)


def use_system_locale() -> bool:
    """Switch from the C locale to the user's, so prices and the ETA follow it."""
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as exc:
        logger.warning("system locale unavailable error=%r; keeping C locale", exc)
        return False
    logger.debug("locale monetary=%s time=%s", locale.setlocale(locale.LC_MONETARY), locale.setlocale(locale.LC_TIME))
    return True


def main() -> None:
    """Run the Textual application for one ordering session."""
    configure_logging()
    use_system_locale()
    OrderingApp(catalog=MenuCatalog.from_path(), cart=CartStore()).run()


if __name__ == "__main__":
    main()
