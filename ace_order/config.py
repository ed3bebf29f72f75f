"""Runtime configuration defaults for the menu, pricing and checkout."""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path

MENU_PATH = str(Path(__file__).resolve().parent / "assets" / "menu.json")
DEBUG_LOG_PATH = "/tmp/ace-order-debug.log"

TAX_RATE = Decimal("0.07")
ORDER_ID_PREFIX = "ACE"
ETA_MINUTES = 35
# Locale time representation.
ETA_FORMAT = "%X"

SEARCH_DEBOUNCE_SECONDS = 0.3
SUGGESTION_LIMIT = 3
CARD_DIGITS = 16

_MENU_PATH_ENV = "ACE_ORDER_MENU_PATH"
_DEBUG_LOG_ENV = "ACE_ORDER_DEBUG_LOG"


def resolve_menu_path() -> str:
    """
    Resolve the menu asset path.

    Resolution order:
    1. ACE_ORDER_MENU_PATH (if set)
    2. MENU_PATH (bundled asset)
    """
    override = os.environ.get(_MENU_PATH_ENV, "").strip()
    return override or MENU_PATH


def resolve_debug_log_path() -> str:
    """Resolve the debug log path, honoring ACE_ORDER_DEBUG_LOG."""
    override = os.environ.get(_DEBUG_LOG_ENV, "").strip()
    return override or DEBUG_LOG_PATH
