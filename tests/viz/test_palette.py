from __future__ import annotations

import pytest

from linkedviews.core.constants import FALLBACK_COLOR
from linkedviews.geo.regions import ALL_STATE_ABBRS
from linkedviews.viz.palette import (
    STATE_PALETTE,
    YEAR_COLORS,
    ColorTable,
    state_color_table,
    year_color_table,
)


def test_colors_follow_master_list_not_dataset_order() -> None:
    table = state_color_table()

    # AK is first alphabetically, regardless of which states a dataset holds
    assert table.color_for("AK") == STATE_PALETTE[0]
    wy = ALL_STATE_ABBRS.index("WY")
    assert table.color_for("WY") == STATE_PALETTE[wy % len(STATE_PALETTE)]
    assert len(table) == len(ALL_STATE_ABBRS) == 51


def test_unknown_key_gets_fallback() -> None:
    assert state_color_table().color_for("ZZ") == FALLBACK_COLOR
    assert state_color_table().color_for("") == FALLBACK_COLOR


def test_palette_repeats_cyclically() -> None:
    table = ColorTable.from_categories(["a", "b", "c"], ["#111111", "#222222"])
    assert [table["a"], table["b"], table["c"]] == ["#111111", "#222222", "#111111"]


def test_empty_palette_is_rejected() -> None:
    with pytest.raises(ValueError):
        ColorTable.from_categories(["a"], [])


def test_year_colors_are_keyed_by_ascending_year() -> None:
    table = year_color_table([2022, 2020, 2021, 2020])
    assert list(table) == ["2020", "2021", "2022"]
    assert table.color_for("2020") == YEAR_COLORS[0]
    assert table.color_for("2022") == YEAR_COLORS[2]
