"""
CovidDataSource: the data-layer facade the dashboard consumes.

Binds DashboardSettings to the loaders and memoizes every derived frame in an
injected DatasetCache. Readers are injectable so a host can put its own fetch
cache (e.g., Streamlit's st.cache_data) underneath.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Callable
from typing import Any

import polars as pl

from .cache import DatasetCache
from .config import DashboardSettings
from .loaders import (
    latest_state_snapshot,
    national_yearly,
    read_national_daily,
    read_state_daily,
    state_yearly,
    with_state_abbr,
)
from .metrics import daily_metrics

__all__ = ["CovidDataSource"]

logger = logging.getLogger(__name__)

Reader = Callable[[str, float], pl.DataFrame]


class CovidDataSource:
    """
    Named datasets derived from the two NYT feeds.

    Args:
        settings (DashboardSettings): Source locations and request timeout.
        cache (DatasetCache | None): Injected cache (a fresh one by default).
        read_states (Reader): (url, timeout) -> per-state daily frame.
        read_national (Reader): (url, timeout) -> national daily frame.
    """

    def __init__(
        self,
        settings: DashboardSettings,
        cache: DatasetCache | None = None,
        *,
        read_states: Reader = read_state_daily,
        read_national: Reader = read_national_daily,
    ) -> None:
        self.settings = settings
        self.cache = cache if cache is not None else DatasetCache()
        self._read_states = read_states
        self._read_national = read_national

    def state_daily(self) -> pl.DataFrame:
        s = self.settings
        return self.cache.get_or_load(
            "state_daily", lambda: self._read_states(s.states_url, s.request_timeout)
        )

    def national_daily(self) -> pl.DataFrame:
        s = self.settings
        return self.cache.get_or_load(
            "national_daily", lambda: self._read_national(s.national_url, s.request_timeout)
        )

    def state_yearly_rows(self) -> list[dict[str, Any]]:
        """Per-state yearly rows with "abbr", ready for Dashboard.set_state_yearly."""
        return self.cache.get_or_load(
            "state_yearly", lambda: with_state_abbr(state_yearly(self.state_daily())).to_dicts()
        )

    def national_yearly_rows(self) -> list[dict[str, Any]]:
        return self.cache.get_or_load(
            "national_yearly", lambda: national_yearly(self.national_daily()).to_dicts()
        )

    def latest_snapshot(self) -> pl.DataFrame:
        return self.cache.get_or_load(
            "latest_state_snapshot",
            lambda: with_state_abbr(latest_state_snapshot(self.state_daily())),
        )

    def metrics(
        self, state: str | None = None, date_range: tuple[dt.date, dt.date] | None = None
    ) -> pl.DataFrame:
        """Daily metrics; not cached (cheap, and keyed by free-form filters)."""
        return daily_metrics(self.state_daily(), state=state, date_range=date_range)

    def refresh(self) -> None:
        """Drop every cached dataset; the next access refetches."""
        self.cache.invalidate()
        logger.info("data source refreshed")
