"""
Dashboard: the map, the per-state yearly chart and the national cumulative chart
over one shared InteractionState, one scheduler and one canonical colour table.

Layout
- The map spans the full width; the two charts share the row below it.
- resize(width) is a full pass over every view.

Year filter
- The per-state chart shows only the selected years. All available years start
  selected; the last remaining year cannot be deselected.

Notes
- The per-state chart holds one bubble per (state, year); its identity key is
  ``<abbr>:<year>`` while hover/selection link on the abbreviation.
- The national chart is coloured by year and keeps its hover local: it owns a
  private InteractionState, so it never dims the state views.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from linkedviews.core.schema import ViewSchema
from linkedviews.geo.projector import GeometryProjector
from linkedviews.scene.timer import FrameScheduler
from linkedviews.viz.interaction import InteractionState
from linkedviews.viz.palette import ColorTable, state_color_table, year_color_table
from linkedviews.viz.reconcile import Timings

from .bubble import BubbleChartView
from .choropleth import ChoroplethView

__all__ = [
    "STATE_YEARLY_SCHEMA",
    "NATIONAL_YEARLY_SCHEMA",
    "Dashboard",
    "mark_id",
]

logger = logging.getLogger(__name__)

# Bookkeeping fields the tooltips never list.
_HIDDEN = ("date", "state", "fips", "mark_id")

STATE_YEARLY_SCHEMA = ViewSchema(
    key_field="mark_id",
    x_field="cases",
    y_field="deaths",
    label_field="abbr",
    color_field="abbr",
    link_field="abbr",
    hidden_fields=_HIDDEN,
)

NATIONAL_YEARLY_SCHEMA = ViewSchema(
    key_field="year",
    x_field="cases",
    y_field="deaths",
    label_field="year",
    hidden_fields=_HIDDEN,
)

# Horizontal gap between the two charts, pixels.
CHART_GAP = 32.0
CHART_HEIGHT = 400.0
# Map height as a share of its width.
MAP_ASPECT = 0.625


def mark_id(row: Mapping[str, Any]) -> str:
    """Identity of one per-state yearly bubble."""
    return f"{row.get('abbr', '')}:{row.get('year', '')}"


def _year(row: Mapping[str, Any]) -> int | None:
    value = row.get("year")
    try:
        return None if value is None else int(value)
    except (TypeError, ValueError):
        return None


class Dashboard:
    """
    Three coordinated views.

    Args:
        projector (GeometryProjector | None): Boundary geometry; None renders no map.
        scheduler (FrameScheduler | None): Shared clock (a fresh one by default).
        state (InteractionState | None): Shared cell (a fresh one by default).
        colors (ColorTable | None): State colours (canonical table by default).
        timings (Timings): Animation durations for every view.
        locale (str): Tooltip number locale.
    """

    def __init__(
        self,
        projector: GeometryProjector | None = None,
        *,
        scheduler: FrameScheduler | None = None,
        state: InteractionState | None = None,
        colors: ColorTable | None = None,
        timings: Timings = Timings(),
        locale: str = "en_US",
    ) -> None:
        self.scheduler = scheduler or FrameScheduler()
        self.state = state or InteractionState()
        self.colors = colors or state_color_table()
        self.timings = timings
        self.locale = locale
        self.map: ChoroplethView | None = None
        if projector is not None:
            self.map = ChoroplethView(
                projector, self.state, self.scheduler, colors=self.colors, timings=timings
            )
        self.state_chart = BubbleChartView(
            STATE_YEARLY_SCHEMA,
            self.state,
            self.scheduler,
            colors=self.colors,
            x_label="Cases (Yearly Aggregate)",
            y_label="Deaths (Yearly Aggregate)",
            timings=timings,
            locale=locale,
            name="state-yearly",
        )
        self._national_state = InteractionState()
        self.national_chart = BubbleChartView(
            NATIONAL_YEARLY_SCHEMA,
            self._national_state,
            self.scheduler,
            colors=year_color_table(()),
            x_label="Cumulative Cases",
            y_label="Cumulative Deaths",
            show_labels=True,
            timings=timings,
            locale=locale,
            name="national-yearly",
        )
        self._state_rows: list[dict[str, Any]] = []
        self._years: tuple[int, ...] = ()
        self._selected_years: tuple[int, ...] = ()

    # ---------- data ----------

    @property
    def available_years(self) -> tuple[int, ...]:
        return self._years

    @property
    def selected_years(self) -> tuple[int, ...]:
        return self._selected_years

    def set_state_yearly(self, rows: Iterable[Mapping[str, Any]]) -> None:
        """Replace the per-state yearly rows; every available year becomes selected."""
        self._state_rows = [{**row, "mark_id": mark_id(row)} for row in rows]
        self._years = tuple(sorted({y for y in map(_year, self._state_rows) if y is not None}))
        self._selected_years = self._years
        self._render_state_chart()

    def set_national_yearly(self, rows: Iterable[Mapping[str, Any]]) -> None:
        data = [dict(row) for row in rows]
        self.national_chart.colors = year_color_table(
            y for y in map(_year, data) if y is not None
        )
        self.national_chart.set_data(data)

    def set_selected_years(self, years: Iterable[int]) -> tuple[int, ...]:
        """Show only these years; an empty selection is ignored."""
        wanted = {int(y) for y in years}
        chosen = tuple(y for y in self._years if y in wanted)
        if not chosen:
            logger.debug("year filter ignored: at least one year must stay selected")
            return self._selected_years
        if chosen != self._selected_years:
            self._selected_years = chosen
            self._render_state_chart()
        return self._selected_years

    def toggle_year(self, year: int, checked: bool | None = None) -> tuple[int, ...]:
        """Check or uncheck one year (flip when checked is None)."""
        year = int(year)
        on = year not in self._selected_years if checked is None else checked
        if on:
            return self.set_selected_years((*self._selected_years, year))
        return self.set_selected_years(y for y in self._selected_years if y != year)

    def filtered_state_rows(self) -> list[dict[str, Any]]:
        selected = set(self._selected_years)
        return [r for r in self._state_rows if _year(r) in selected]

    def _render_state_chart(self) -> None:
        self.state_chart.set_data(self.filtered_state_rows())

    # ---------- interaction ----------

    def select_state(self, abbr: str | None) -> None:
        """Programmatic selection (e.g., from a dropdown)."""
        self.state.set_selected(abbr)

    # ---------- layout ----------

    def resize(self, width: float, chart_height: float = CHART_HEIGHT) -> None:
        """Full re-layout of every view for a container of the given width."""
        chart_width = max((width - CHART_GAP) / 2.0, 0.0)
        if self.map is not None:
            self.map.resize(width, width * MAP_ASPECT)
        self.state_chart.resize(chart_width, chart_height)
        self.national_chart.resize(chart_width, chart_height)

    def views(self) -> Sequence[ChoroplethView | BubbleChartView]:
        out: list[ChoroplethView | BubbleChartView] = []
        if self.map is not None:
            out.append(self.map)
        out.extend([self.state_chart, self.national_chart])
        return out

    def close(self) -> None:
        for view in self.views():
            view.close()
