"""Menu search results with "did you mean" suggestions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from rapidfuzz.distance import Levenshtein

from ace_order.catalog import MenuCatalog
from ace_order.config import SUGGESTION_LIMIT
from ace_order.constant import ALL_CATEGORY_ID
from ace_order.models import MenuItem


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit cost for insert, delete and substitute."""
    return Levenshtein.distance(a, b)


def suggest(query: str, items: Iterable[MenuItem], limit: int = SUGGESTION_LIMIT) -> list[str]:
    """Names of the ``limit`` items closest to ``query``; ties keep catalog order."""
    needle = query.strip().lower()
    ranked = sorted(items, key=lambda item: levenshtein(item.name.lower(), needle))
    return [item.name for item in ranked[:limit]]


@dataclass(frozen=True)
class SearchResults:
    """Matched items, plus suggestions when an all-menu search found nothing."""

    items: list[MenuItem] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


def search_with_suggestions(catalog: MenuCatalog, category_id: str, query: str) -> SearchResults:
    matches = catalog.search(category_id, query)
    if matches or not query.strip() or category_id.lower() != ALL_CATEGORY_ID:
        return SearchResults(items=matches)
    return SearchResults(items=[], suggestions=suggest(query, catalog.all_items()))
