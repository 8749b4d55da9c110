"""Ingredient name resolution against a pantry snapshot."""

from collections.abc import Sequence
from typing import Protocol

from pantry_pace.domain.pantry import PantryItem


class IngredientMatcher(Protocol):
    """Strategy that picks the pantry item serving a requirement."""

    def __call__(self, pantry: Sequence[PantryItem], name: str) -> PantryItem | None:
        """Return the matching pantry item, if any."""


def exact_then_substring(pantry: Sequence[PantryItem], name: str) -> PantryItem | None:
    """Match by exact case-insensitive name, then by substring either way.

    The substring pass is a loose heuristic: the first pantry item, in
    snapshot order, whose name contains the requirement name or is
    contained by it wins. No scoring is attempted.
    """
    wanted = name.strip().lower()
    for item in pantry:
        if item.name.strip().lower() == wanted:
            return item
    if not wanted:
        return None
    for item in pantry:
        have = item.name.strip().lower()
        if have and (wanted in have or have in wanted):
            return item
    return None
