"""
Readers and yearly aggregations for the NYT COVID-19 CSV feeds.

Overview
- fetch_csv(): raw bytes from a URL (requests) or a local path.
- read_state_daily() / read_national_daily(): typed Polars DataFrames.
- state_yearly(): latest cumulative row per (year, state).
- national_yearly(): latest cumulative row per year.
- latest_state_snapshot(): every state's row on the most recent date.
- with_state_abbr(): adds the canonical two-letter "abbr" column.

Failure semantics
- Network errors, missing files and unparsable CSV raise DataFetchError.
- A parsed file without the required columns raises DataShapeError.
- Malformed cells do not raise: unparsable counts become 0 and rows with an
  unparsable date are dropped (logged at WARNING).

Import DAG discipline
- Depends on stdlib, polars, requests, linkedviews.geo.regions and linkedviews.io helpers.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import polars as pl
import requests

from linkedviews.geo.regions import NAME_TO_ABBR

from .errors import DataFetchError, DataShapeError

__all__ = [
    "STATE_COLUMNS",
    "NATIONAL_COLUMNS",
    "fetch_csv",
    "read_state_daily",
    "read_national_daily",
    "state_yearly",
    "national_yearly",
    "latest_state_snapshot",
    "with_state_abbr",
]

logger = logging.getLogger(__name__)

STATE_COLUMNS: tuple[str, ...] = ("date", "state", "fips", "cases", "deaths")
NATIONAL_COLUMNS: tuple[str, ...] = ("date", "cases", "deaths")

_UA = {"User-Agent": "linkedviews/0.1 (+https://github.com/nytimes/covid-19-data)"}


def fetch_csv(source: str | Path, timeout: float = 30.0) -> bytes:
    """Return the raw bytes of a CSV source (http(s) URL or local path)."""
    src = str(source)
    if "://" in src:
        try:
            r = requests.get(src, headers=_UA, timeout=timeout)
            r.raise_for_status()
        except requests.RequestException as exc:
            raise DataFetchError(f"cannot fetch {src}: {exc}") from exc
        logger.info("fetched %s (%d bytes)", src, len(r.content))
        return r.content
    try:
        return Path(src).read_bytes()
    except OSError as exc:
        raise DataFetchError(f"cannot read {src}: {exc}") from exc


def _parse(data: bytes, source: str, required: tuple[str, ...]) -> pl.DataFrame:
    try:
        df = pl.read_csv(io.BytesIO(data), infer_schema_length=0)
    except pl.exceptions.PolarsError as exc:
        raise DataFetchError(f"cannot parse CSV from {source}: {exc}") from exc
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise DataShapeError(f"{source}: missing required columns {missing} (has {df.columns})")
    return df


def _count(name: str) -> pl.Expr:
    return (
        pl.col(name)
        .str.strip_chars()
        .cast(pl.Float64, strict=False)
        .fill_null(0.0)
        .cast(pl.Int64)
        .alias(name)
    )


def _date() -> pl.Expr:
    return pl.col("date").str.strip_chars().str.to_date("%Y-%m-%d", strict=False).alias("date")


def _drop_undated(df: pl.DataFrame, source: str) -> pl.DataFrame:
    bad = df.get_column("date").null_count()
    if bad:
        logger.warning("%s: dropped %d rows with an unparsable date", source, bad)
        df = df.filter(pl.col("date").is_not_null())
    return df


def read_state_daily(source: str | Path, timeout: float = 30.0) -> pl.DataFrame:
    """
    Read the per-state cumulative daily feed.

    Returns:
        pl.DataFrame: columns date (Date), state, fips (Utf8), cases, deaths (Int64),
        sorted by state then date.
    """
    src = str(source)
    df = _parse(fetch_csv(src, timeout), src, STATE_COLUMNS)
    df = df.select(
        _date(),
        pl.col("state").str.strip_chars(),
        pl.col("fips").fill_null("").str.strip_chars(),
        _count("cases"),
        _count("deaths"),
    )
    df = _drop_undated(df, src).sort(["state", "date"])
    logger.info("read %d state rows from %s", df.height, src)
    return df


def read_national_daily(source: str | Path, timeout: float = 30.0) -> pl.DataFrame:
    """Read the national cumulative daily feed (date, cases, deaths), sorted by date."""
    src = str(source)
    df = _parse(fetch_csv(src, timeout), src, NATIONAL_COLUMNS)
    df = df.select(_date(), _count("cases"), _count("deaths"))
    df = _drop_undated(df, src).sort("date")
    logger.info("read %d national rows from %s", df.height, src)
    return df


def state_yearly(daily: pl.DataFrame) -> pl.DataFrame:
    """Latest cumulative row per (year, state): year, state, fips, cases, deaths."""
    return (
        daily.sort("date")
        .with_columns(pl.col("date").dt.year().alias("year"))
        .group_by(["year", "state"], maintain_order=True)
        .last()
        .select("year", "state", "fips", "cases", "deaths")
        .sort(["year", "state"])
    )


def national_yearly(daily: pl.DataFrame) -> pl.DataFrame:
    """Latest cumulative row per year: year, cases, deaths."""
    return (
        daily.sort("date")
        .with_columns(pl.col("date").dt.year().alias("year"))
        .group_by("year", maintain_order=True)
        .last()
        .select("year", "cases", "deaths")
        .sort("year")
    )


def latest_state_snapshot(daily: pl.DataFrame) -> pl.DataFrame:
    """Every state's row on the most recent date in the feed."""
    if daily.is_empty():
        return daily
    return daily.filter(pl.col("date") == pl.col("date").max()).sort("state")


def with_state_abbr(df: pl.DataFrame) -> pl.DataFrame:
    """Add "abbr" from the state name; names outside the table are kept as-is."""
    return df.with_columns(pl.col("state").replace(dict(NAME_TO_ABBR)).alias("abbr"))
