"""
Streamlit data access for the dashboard.

Fetching and parsing the NYT feeds is the expensive step, so the raw readers are
wrapped in st.cache_data (shared across sessions, ttl from settings). Everything
derived from them lives in a per-session CovidDataSource with its own DatasetCache,
so "Refresh data" can drop both layers.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import polars as pl
import streamlit as st

from linkedviews.geo.projector import GeometryProjector, load_projector
from linkedviews.io.config import DashboardSettings
from linkedviews.io.loaders import read_national_daily, read_state_daily
from linkedviews.io.source import CovidDataSource

__all__ = [
    "CacheConfig",
    "cache_config_for",
    "load_state_daily",
    "load_national_daily",
    "get_data_source",
    "get_projector",
    "clear_caches",
]

_SOURCE_KEY = "lv_data_source"

# ---------- Cache configuration (factory of cached callables) ----------


@dataclass(frozen=True)
class CacheConfig:
    """Hashable cache configuration for Streamlit @st.cache_data.

    Note: Streamlit's decorator parameters (ttl, persist) are fixed at decoration
    time. We build and memoize decorated callables per (name, ttl, persist) so the
    app can switch these at runtime while still benefiting from caching.
    """

    ttl: int | None = None
    persist: bool = False


# Registry of decorated functions by (loader_name, CacheConfig)
_CACHE_REGISTRY: dict[tuple[str, CacheConfig], Callable[..., Any]] = {}


def _get_cached(loader_name: str, cfg: CacheConfig, fn: Callable[..., Any]) -> Callable[..., Any]:
    key = (loader_name, cfg)
    if key in _CACHE_REGISTRY:
        return _CACHE_REGISTRY[key]
    # Create a decorated wrapper with desired cache behavior
    if cfg.persist:
        wrapped = st.cache_data(persist="disk", ttl=cfg.ttl, show_spinner=False)(fn)
    else:
        wrapped = st.cache_data(ttl=cfg.ttl, show_spinner=False)(fn)
    _CACHE_REGISTRY[key] = wrapped
    return wrapped


def cache_config_for(settings: DashboardSettings) -> CacheConfig:
    """cache_ttl == 0 means keep until cleared."""
    return CacheConfig(ttl=settings.cache_ttl or None)


# ---------- Public loader APIs (dispatch to cached implementations) ----------


def load_state_daily(
    url: str, timeout: float = 30.0, *, cfg: CacheConfig = CacheConfig()
) -> pl.DataFrame:
    fn = _get_cached("load_state_daily", cfg, read_state_daily)
    return fn(url, timeout)  # type: ignore[no-any-return]


def load_national_daily(
    url: str, timeout: float = 30.0, *, cfg: CacheConfig = CacheConfig()
) -> pl.DataFrame:
    fn = _get_cached("load_national_daily", cfg, read_national_daily)
    return fn(url, timeout)  # type: ignore[no-any-return]


def get_data_source(settings: DashboardSettings) -> CovidDataSource:
    """Per-session data source; rebuilt when the settings change."""
    source = st.session_state.get(_SOURCE_KEY)
    if isinstance(source, CovidDataSource) and source.settings == settings:
        return source
    cfg = cache_config_for(settings)
    source = CovidDataSource(
        settings,
        read_states=lambda url, timeout: load_state_daily(url, timeout, cfg=cfg),
        read_national=lambda url, timeout: load_national_daily(url, timeout, cfg=cfg),
    )
    st.session_state[_SOURCE_KEY] = source
    return source


def get_projector(settings: DashboardSettings) -> GeometryProjector:
    """Process-wide projector (loaded once per topology path)."""
    return load_projector(settings.topology_path, settings.topology_object)


def clear_caches() -> None:
    """Drop fetched feeds (all sessions) and this session's derived datasets."""
    for fn in _CACHE_REGISTRY.values():
        fn.clear()  # type: ignore[attr-defined]
    source = st.session_state.get(_SOURCE_KEY)
    if isinstance(source, CovidDataSource):
        source.refresh()
