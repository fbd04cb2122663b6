from __future__ import annotations

import datetime as dt

import polars as pl

from app.ui.helpers import compute_overview_kpis, selected_links, year_key


def test_compute_overview_kpis_uses_latest_row() -> None:
    df = pl.DataFrame(
        {
            "date": [dt.date(2021, 1, 2), dt.date(2021, 1, 1)],
            "cases": [150, 120],
            "deaths": [9, 7],
        }
    )

    kpi = compute_overview_kpis(df)

    assert kpi == {
        "latest_date": dt.date(2021, 1, 2),
        "cases": 150,
        "deaths": 9,
        "new_cases": 30,
    }


def test_compute_overview_kpis_handles_empty_frame() -> None:
    df = pl.DataFrame(schema={"date": pl.Date, "cases": pl.Int64, "deaths": pl.Int64})
    assert compute_overview_kpis(df)["latest_date"] is None


def test_selected_links_reads_named_point_selection() -> None:
    event = {"selection": {"pick": [{"link": "CA"}, {"link": ""}, {"other": 1}]}}

    assert selected_links(event, "pick") == ["CA"]
    assert selected_links(event, "other") == []
    assert selected_links({"selection": {}}, "pick") == []
    assert selected_links(None, "pick") == []


def test_selected_links_accepts_attribute_style_events() -> None:
    class _Event:
        selection = {"pick": [{"link": "TX"}]}

    assert selected_links(_Event(), "pick") == ["TX"]


def test_year_key() -> None:
    assert year_key(2021) == "lv_year_2021"
