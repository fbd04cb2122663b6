"""
Derived per-day metrics over the cumulative state feed.

For each state, in date order:
- daily_cases / daily_deaths: difference from the previous row (0 on a state's first row).
- rolling_average: mean of daily_cases over the trailing 7 rows (fewer at the start),
  rounded to an integer.
- growth_rate: daily_cases as a percentage of the previous cumulative cases, 2 decimals;
  0 when there is no previous row or it had 0 cases.

Each state's series is computed independently, so mixing states in one frame never
leaks one state's counts into another's deltas.
"""

from __future__ import annotations

import datetime as dt

import polars as pl

__all__ = ["ROLLING_WINDOW", "daily_metrics"]

ROLLING_WINDOW = 7


def daily_metrics(
    daily: pl.DataFrame,
    state: str | None = None,
    date_range: tuple[dt.date, dt.date] | None = None,
) -> pl.DataFrame:
    """
    Add daily_cases, daily_deaths, rolling_average and growth_rate columns.

    Args:
        daily (pl.DataFrame): Output of read_state_daily (date, state, cases, deaths, ...).
        state (str | None): Keep one state (by name); None or "all" keeps every state.
        date_range (tuple[date, date] | None): Inclusive date filter applied before
            the deltas are computed.

    Returns:
        pl.DataFrame: Input columns plus the four metrics, sorted by state then date.
    """
    df = daily
    if state is not None and state != "all":
        df = df.filter(pl.col("state") == state)
    if date_range is not None:
        lo, hi = date_range
        df = df.filter(pl.col("date").is_between(lo, hi))
    df = df.sort(["state", "date"])

    prev_cases = pl.col("cases").shift(1).over("state")
    prev_deaths = pl.col("deaths").shift(1).over("state")
    df = df.with_columns(
        (pl.col("cases") - prev_cases).fill_null(0).alias("daily_cases"),
        (pl.col("deaths") - prev_deaths).fill_null(0).alias("daily_deaths"),
        prev_cases.fill_null(0).alias("_prev_cases"),
    )
    return df.with_columns(
        pl.col("daily_cases")
        .cast(pl.Float64)
        .rolling_mean(window_size=ROLLING_WINDOW, min_samples=1)
        .over("state")
        .round(0)
        .cast(pl.Int64)
        .alias("rolling_average"),
        pl.when(pl.col("_prev_cases") > 0)
        .then(pl.col("daily_cases") / pl.col("_prev_cases") * 100.0)
        .otherwise(0.0)
        .round(2)
        .alias("growth_rate"),
    ).drop("_prev_cases")
