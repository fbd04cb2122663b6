"""
Shared UI helper utilities for the dashboard Streamlit application.

This module centralizes small cross-cutting helpers (KPI computation, reading chart
selection events back) used by the app orchestrator.

Notes:
    - Contains no Streamlit state manipulation itself, so it is testable without a
      running Streamlit server.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from typing import Any

import polars as pl


def compute_overview_kpis(national_daily: pl.DataFrame) -> dict[str, Any]:
    """Compute headline numbers from the national cumulative feed.

    Args:
        national_daily (pl.DataFrame): Output of read_national_daily (date, cases, deaths).

    Returns:
        dict[str, Any]: Keys "latest_date" (date | None), "cases" and "deaths" (int,
        cumulative on the latest date), "new_cases" (int, change from the previous row).
    """
    if national_daily.is_empty():
        return {"latest_date": None, "cases": 0, "deaths": 0, "new_cases": 0}
    ordered = national_daily.sort("date")
    last = ordered.row(-1, named=True)
    prev_cases = ordered.get_column("cases")[-2] if ordered.height > 1 else last["cases"]
    latest: dt.date | None = last["date"]
    return {
        "latest_date": latest,
        "cases": int(last["cases"]),
        "deaths": int(last["deaths"]),
        "new_cases": int(last["cases"]) - int(prev_cases),
    }


def selected_links(event: Any, name: str) -> list[str]:
    """Return the "link" values of a named point selection from st.altair_chart.

    Args:
        event (Any): Return value of st.altair_chart(on_select="rerun"); a mapping-like
            object with a "selection" entry, or None.
        name (str): Selection parameter name.

    Returns:
        list[str]: Selected link keys in event order; empty when nothing is selected.
    """
    if event is None:
        return []
    selection = event.get("selection") if isinstance(event, Mapping) else getattr(
        event, "selection", None
    )
    if not selection:
        return []
    points = selection.get(name) if isinstance(selection, Mapping) else None
    if not points:
        return []
    out: list[str] = []
    for point in points:
        if isinstance(point, Mapping) and point.get("link") not in (None, ""):
            out.append(str(point["link"]))
    return out


def year_key(year: int) -> str:
    """Widget key for one year checkbox."""
    return f"lv_year_{int(year)}"
