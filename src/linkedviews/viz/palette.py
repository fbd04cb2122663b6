"""
Order-stable categorical colour assignment.

A ColorTable binds each key of a canonical master list to a palette entry by the
key's position in that list, never by the order keys happen to appear in a dataset.
Two renders of datasets with different membership or order therefore colour the same
key identically. Keys outside the master list get FALLBACK_COLOR.

Examples:
    >>> table = ColorTable.from_categories(["AK", "AL"], ["#111111", "#222222"])
    >>> table.color_for("AL"), table.color_for("ZZ")
    ('#222222', '#ccc')
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType

from linkedviews.core.constants import FALLBACK_COLOR
from linkedviews.geo.regions import ALL_STATE_ABBRS

__all__ = [
    "TABLEAU10",
    "SET2",
    "SET1",
    "PAIRED",
    "YEAR_COLORS",
    "STATE_PALETTE",
    "ColorTable",
    "state_color_table",
    "year_color_table",
]

TABLEAU10: tuple[str, ...] = (
    "#4e79a7", "#f28e2c", "#e15759", "#76b7b2", "#59a14f",
    "#edc949", "#af7aa1", "#ff9da7", "#9c755f", "#bab0ab",
)  # fmt: skip
SET2: tuple[str, ...] = (
    "#66c2a5", "#fc8d62", "#8da0cb", "#e78ac3", "#a6d854", "#ffd92f", "#e5c494", "#b3b3b3",
)  # fmt: skip
SET1: tuple[str, ...] = (
    "#e41a1c", "#377eb8", "#4daf4a", "#984ea3", "#ff7f00",
    "#ffff33", "#a65628", "#f781bf", "#999999",
)  # fmt: skip
PAIRED: tuple[str, ...] = (
    "#a6cee3", "#1f78b4", "#b2df8a", "#33a02c", "#fb9a99", "#e31a1c",
    "#fdbf6f", "#ff7f00", "#cab2d6", "#6a3d9a", "#ffff99", "#b15928",
)  # fmt: skip

# Fixed colours for yearly bubbles, assigned by ascending year.
YEAR_COLORS: tuple[str, ...] = ("#2563eb", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6")

STATE_PALETTE: tuple[str, ...] = TABLEAU10 + SET2 + SET1 + PAIRED


class ColorTable(Mapping[str, str]):
    """Read-only key -> colour table built from a canonical master list.

    When the palette is shorter than the master list, colours repeat cyclically by
    master-list position.
    """

    def __init__(self, table: Mapping[str, str], fallback: str = FALLBACK_COLOR) -> None:
        self._table = MappingProxyType(dict(table))
        self.fallback = fallback

    @classmethod
    def from_categories(
        cls,
        categories: Iterable[str],
        palette: Sequence[str],
        fallback: str = FALLBACK_COLOR,
    ) -> ColorTable:
        if not palette:
            raise ValueError("palette must not be empty")
        table: dict[str, str] = {}
        for key in categories:
            if key not in table:
                table[key] = palette[len(table) % len(palette)]
        return cls(table, fallback=fallback)

    def color_for(self, key: str) -> str:
        return self._table.get(key, self.fallback)

    def __getitem__(self, key: str) -> str:
        return self._table[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"ColorTable({len(self)} keys, fallback={self.fallback!r})"


def state_color_table() -> ColorTable:
    """Canonical colours for the 50 states + DC (alphabetical by abbreviation)."""
    return ColorTable.from_categories(ALL_STATE_ABBRS, STATE_PALETTE)


def year_color_table(years: Iterable[int | str]) -> ColorTable:
    """Colours for yearly bubbles keyed by str(year), in ascending year order."""
    ordered = sorted({int(y) for y in years})
    return ColorTable.from_categories((str(y) for y in ordered), YEAR_COLORS)
