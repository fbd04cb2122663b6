"""
Streamlit application orchestrator for the linked-views COVID-19 dashboard.

Responsibilities:
    - Configure the Streamlit page and logging.
    - Load settings, data (app.data) and the boundary projector.
    - Keep one Dashboard (and so one InteractionState) per browser session.
    - Render the year checkboxes, the state selector, the map and the two charts,
      and route chart clicks back into the shared selection.

Notes:
    - Charts are produced by app.charts from the views' live marks.
    - Data errors are shown with st.error instead of charts.
"""

from __future__ import annotations

import logging

import streamlit as st
from pydantic import ValidationError

from app import charts as app_charts
from app.data import clear_caches, get_data_source, get_projector
from linkedviews.core.errors import TopologyError
from linkedviews.geo.regions import ALL_STATE_ABBRS
from linkedviews.io.config import DashboardSettings
from linkedviews.io.errors import ConfigError, DataError
from linkedviews.logging_config import setup_logging
from linkedviews.viz.reconcile import Timings
from linkedviews.viz.tooltip import format_number
from linkedviews.views.dashboard import Dashboard

from .helpers import compute_overview_kpis, selected_links, year_key

logger = logging.getLogger("linkedviews.app")

_DASHBOARD_KEY = "lv_dashboard"
_ALL = "All states"


def _build_dashboard(settings: DashboardSettings) -> Dashboard:
    projector = None
    try:
        projector = get_projector(settings)
    except (OSError, TopologyError, ValidationError) as e:
        st.warning(f"Map unavailable ({settings.topology_path}): {e}")
    return Dashboard(
        projector,
        timings=Timings(settings.enter_ms, settings.update_ms, settings.exit_ms),
        locale=settings.locale,
    )


def _session_dashboard(settings: DashboardSettings) -> Dashboard:
    held = st.session_state.get(_DASHBOARD_KEY)
    if isinstance(held, tuple) and held[0] == settings:
        return held[1]
    if isinstance(held, tuple):
        held[1].close()
    dashboard = _build_dashboard(settings)
    st.session_state[_DASHBOARD_KEY] = (settings, dashboard)
    return dashboard


def _render_year_filter(dashboard: Dashboard) -> None:
    years = dashboard.available_years
    if not years:
        return

    def _on_change(year: int) -> None:
        key = year_key(year)
        dashboard.toggle_year(year, bool(st.session_state[key]))
        # the last remaining year stays checked
        st.session_state[key] = year in dashboard.selected_years

    cols = st.columns(len(years) + 1)
    cols[0].markdown("**Select Years:**")
    for col, year in zip(cols[1:], years, strict=True):
        col.checkbox(
            str(year),
            value=year in dashboard.selected_years,
            key=year_key(year),
            on_change=_on_change,
            args=(year,),
        )


def _apply_click(dashboard: Dashboard, event: object, chart_key: str) -> None:
    links = selected_links(event, app_charts.POINT_SELECTION)
    last = st.session_state.get(f"lv_last_{chart_key}")
    current = links[0] if links else None
    if current == last:
        return
    st.session_state[f"lv_last_{chart_key}"] = current
    if current is not None:
        dashboard.state.toggle_selected(current)
    st.rerun()


def streamlit_app(settings_path: str | None = None, default_width: float | None = None) -> None:
    """Render the dashboard.

    Args:
        settings_path (str | None): Optional explicit TOML settings file.
        default_width (float | None): Container width override in pixels.
    """
    st.set_page_config(page_title="COVID-19 Dashboard", layout="wide")

    try:
        settings = DashboardSettings.load(settings_path)
    except ConfigError as e:
        st.error(str(e))
        return
    setup_logging(settings.log_level, settings.log_file)

    st.title("COVID-19 Dashboard")
    source = get_data_source(settings)
    try:
        with st.spinner("Loading NYT COVID-19 data ..."):
            state_rows = source.state_yearly_rows()
            national_rows = source.national_yearly_rows()
            kpis = compute_overview_kpis(source.national_daily())
    except DataError as e:
        logger.error("data load failed: %s", e)
        st.error(f"Error! {e}")
        if st.button("Retry"):
            clear_caches()
            st.rerun()
        return

    dashboard = _session_dashboard(settings)
    if not dashboard.available_years:
        dashboard.set_state_yearly(state_rows)
        dashboard.set_national_yearly(national_rows)
    dashboard.resize(default_width or settings.width, settings.chart_height)
    dashboard.scheduler.flush()

    # Headline numbers
    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Latest date", str(kpis["latest_date"] or "n/a"))
    k2.metric("Cumulative cases", format_number(kpis["cases"], settings.locale))
    k3.metric("Cumulative deaths", format_number(kpis["deaths"], settings.locale))
    k4.metric("New cases", format_number(kpis["new_cases"], settings.locale))

    # Shared selection
    current = dashboard.state.get_selected()
    options = [_ALL, *ALL_STATE_ABBRS]
    choice = st.selectbox(
        "Highlight state",
        options,
        index=options.index(current) if current in options else 0,
    )
    dashboard.select_state(None if choice == _ALL else choice)
    if st.button("Refresh data"):
        clear_caches()
        st.session_state.pop(_DASHBOARD_KEY, None)
        st.rerun()

    if dashboard.map is not None:
        event = st.altair_chart(
            app_charts.choropleth_chart(dashboard.map),
            on_select="rerun",
            key="lv_map",
        )
        _apply_click(dashboard, event, "map")

    left, right = st.columns(2)
    with left:
        _render_year_filter(dashboard)
        st.subheader("Yearly Cases vs Deaths (by State)")
        event = st.altair_chart(
            app_charts.bubble_chart(dashboard.state_chart),
            on_select="rerun",
            key="lv_state_chart",
        )
        _apply_click(dashboard, event, "state_chart")
    with right:
        st.subheader("Cumulative Cases vs Deaths")
        st.altair_chart(app_charts.bubble_chart(dashboard.national_chart))

    selected = dashboard.state.get_selected()
    with st.expander("Daily metrics", expanded=selected is not None):
        if selected is None:
            st.info("Select a state to see daily new cases and the 7-day rolling average.")
        else:
            names = [r["state"] for r in state_rows if r.get("abbr") == selected]
            if names:
                df = source.metrics(state=names[0])
                st.altair_chart(
                    app_charts.metrics_chart(df, title=f"{names[0]}: daily new cases"),
                    use_container_width=True,
                )
