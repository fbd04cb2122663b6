"""
linkedviews.io — Data-pipeline collaborator: settings, CSV loaders, derived metrics,
and an explicit dataset cache.

## Public API
- DashboardSettings — env > TOML > defaults.
- DatasetCache — init / invalidate / get_or_load.
- CovidDataSource — settings + loaders + an injected DatasetCache.
- read_state_daily, read_national_daily, state_yearly, national_yearly,
  latest_state_snapshot, with_state_abbr — Polars readers and aggregations.
- daily_metrics — per-state deltas, 7-row rolling mean, growth rate.
- DataError, DataFetchError, DataShapeError, ConfigError.

## Import DAG discipline
- Depends on: linkedviews.core, linkedviews.geo.regions, polars, requests.
- Must not import linkedviews.viz, linkedviews.views or app.
"""

from __future__ import annotations

from .cache import DatasetCache
from .config import DashboardSettings
from .errors import ConfigError, DataError, DataFetchError, DataShapeError
from .loaders import (
    fetch_csv,
    latest_state_snapshot,
    national_yearly,
    read_national_daily,
    read_state_daily,
    state_yearly,
    with_state_abbr,
)
from .metrics import daily_metrics
from .source import CovidDataSource

__all__ = [
    "ConfigError",
    "CovidDataSource",
    "DashboardSettings",
    "DataError",
    "DataFetchError",
    "DataShapeError",
    "DatasetCache",
    "daily_metrics",
    "fetch_csv",
    "latest_state_snapshot",
    "national_yearly",
    "read_national_daily",
    "read_state_daily",
    "state_yearly",
    "with_state_abbr",
]
