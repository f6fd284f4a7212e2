"""Stable sorting of catalog rows for the dataset table."""
from __future__ import annotations

import re
import unicodedata
from enum import Enum
from typing import Any, Callable, List, Sequence, TypeVar

T = TypeVar("T")

_DIGITS = re.compile(r"(\d+)")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
    NONE = "none"

    def next(self) -> SortDirection:
        """Cycle none -> asc -> desc -> none, as the table header does."""
        return {
            SortDirection.NONE: SortDirection.ASC,
            SortDirection.ASC: SortDirection.DESC,
            SortDirection.DESC: SortDirection.NONE,
        }[self]


def natural_key(text: str) -> tuple:
    """
    Case- and accent-insensitive key that compares digit runs as numbers.

    "LKW 2" sorts before "LKW 10" and "Ölheizung" next to "Olheizung", as in
    the German-locale table of the web client.
    """
    folded = "".join(
        ch for ch in unicodedata.normalize("NFKD", text) if not unicodedata.combining(ch)
    ).casefold()
    # Split yields text, digits, text, ...; positions always hold the same type
    return tuple(
        int(part) if index % 2 else part
        for index, part in enumerate(_DIGITS.split(folded))
    )


def _sort_key(value: Any) -> tuple:
    # Missing values sort after present ones in ascending order
    if value is None:
        return (1, "")
    if isinstance(value, str):
        return (0, natural_key(value))
    return (0, value)


def stable_sort(
    items: Sequence[T],
    getter: Callable[[T], Any],
    direction: SortDirection = SortDirection.NONE,
) -> List[T]:
    """
    Sort items by one field, keeping input order for ties.

    Descending order is the exact reverse comparison of ascending, so missing
    values come first there. ``none`` returns the items unchanged.
    """
    if direction == SortDirection.NONE:
        return list(items)
    return sorted(items, key=lambda item: _sort_key(getter(item)), reverse=direction == SortDirection.DESC)
