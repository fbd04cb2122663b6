"""
Bubble/scatter chart view: one Reconciler over one SceneGraph, linked to the
shared InteractionState.

Responsibilities
- set_data(dataset): full replacement; recomputes scales, then reconciles marks.
- resize(width, height): full re-layout pass at the new inner extent.
- Pointer wiring: enter/leave write the hover slot and show/hide the tooltip,
  move re-places the tooltip, click toggles the selection.
- Restyle every live mark whenever the shared state changes.

Notes
- Mark positions are in viewport pixels (inner chart offset by the margins), so
  SceneGraph pointer coordinates and tooltip bounds share one frame.
- An inner extent <= 0 defers drawing (deferred=True); the next valid resize or
  data update renders normally.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from linkedviews.core.constants import CHART_MARGIN, DEFAULT_TICK_COUNT
from linkedviews.core.schema import ViewSchema
from linkedviews.core.typing import Dataset, Datum, Point
from linkedviews.scene.graph import SceneGraph, VisualAttributes
from linkedviews.scene.timer import FrameScheduler
from linkedviews.viz.encoding import CHART_STYLE, MarkStyle, encode
from linkedviews.viz.interaction import InteractionChange, InteractionSnapshot, InteractionState
from linkedviews.viz.palette import ColorTable
from linkedviews.viz.reconcile import JoinResult, MarkCallbacks, Reconciler, Timings
from linkedviews.viz.scales import ScaleSet, compute_scales, format_si
from linkedviews.viz.tooltip import Tooltip

__all__ = ["Tick", "BubbleLabel", "BubbleChartView"]

logger = logging.getLogger(__name__)

# Text labels sit this far below the bubble centre.
LABEL_OFFSET = 20.0


@dataclass(frozen=True)
class Tick:
    value: float
    position: float
    label: str


@dataclass(frozen=True)
class BubbleLabel:
    text: str
    position: Point


class BubbleChartView:
    """
    One linked bubble chart.

    Args:
        schema (ViewSchema): Field roles for this chart.
        state (InteractionState): Shared hover/selection cell.
        scheduler (FrameScheduler): Shared animation clock.
        colors (ColorTable): Canonical colour table for the colour field.
        width (float): Viewport width in pixels.
        height (float): Viewport height in pixels.
        margin (tuple[float, float, float, float]): (top, right, bottom, left).
        x_label (str | None): Axis title and tooltip label for x.
        y_label (str | None): Axis title and tooltip label for y.
        show_labels (bool): Draw the label field under each bubble.
        style (MarkStyle): Encoding constants.
        timings (Timings): Enter/update/exit durations.
        locale (str): Locale for tooltip numbers.
        name (str): Used in log lines only.
    """

    def __init__(
        self,
        schema: ViewSchema,
        state: InteractionState,
        scheduler: FrameScheduler,
        *,
        colors: ColorTable,
        width: float = 0.0,
        height: float = 0.0,
        margin: tuple[float, float, float, float] = CHART_MARGIN,
        x_label: str | None = None,
        y_label: str | None = None,
        show_labels: bool = False,
        style: MarkStyle = CHART_STYLE,
        timings: Timings = Timings(),
        locale: str = "en_US",
        name: str = "bubble",
    ) -> None:
        self.schema = schema
        self.state = state
        self.colors = colors
        self.margin = margin
        self.x_label = x_label
        self.y_label = y_label
        self.show_labels = show_labels
        self.style = style
        self.name = name
        self.scene = SceneGraph(scheduler, width, height)
        self.tooltip = Tooltip(schema, x_label=x_label, y_label=y_label, locale=locale)
        self.tooltip.bounds = (float(width), float(height))
        self.engine = Reconciler(
            self.scene,
            scheduler,
            schema.key_of,
            MarkCallbacks(
                on_enter=self._on_enter,
                on_move=self._on_move,
                on_leave=self._on_leave,
                on_click=self._on_click,
            ),
            timings,
        )
        self.scales: ScaleSet | None = None
        self.deferred = False
        self._dataset: tuple[Datum, ...] = ()
        self._unsubscribe: Callable[[], None] | None = state.subscribe(self._on_state_change)

    # ---------- geometry ----------

    @property
    def width(self) -> float:
        return self.scene.width

    @property
    def height(self) -> float:
        return self.scene.height

    @property
    def inner_size(self) -> tuple[float, float]:
        top, right, bottom, left = self.margin
        return (self.width - left - right, self.height - top - bottom)

    @property
    def dataset(self) -> tuple[Datum, ...]:
        return self._dataset

    # ---------- updates ----------

    def set_data(self, dataset: Dataset) -> JoinResult | None:
        """Replace the dataset and run one reconciliation pass."""
        self._dataset = tuple(dataset)
        return self._render()

    def resize(self, width: float, height: float) -> JoinResult | None:
        """Full re-layout at a new viewport size."""
        self.scene.resize(width, height)
        self.tooltip.bounds = (float(width), float(height))
        return self._render()

    def close(self) -> None:
        """Unsubscribe from the shared state and destroy every mark."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.engine.clear()
        self.tooltip.hide()

    def _render(self) -> JoinResult | None:
        inner_w, inner_h = self.inner_size
        if inner_w <= 0 or inner_h <= 0:
            self.deferred = True
            logger.debug("%s: render deferred (inner %.0fx%.0f)", self.name, inner_w, inner_h)
            return None
        self.deferred = False
        self.scales = compute_scales(self._dataset, self.schema, inner_w, inner_h, self.colors)
        encoder = self._encoder(self.scales)
        return self.engine.reconcile(self._dataset, encoder, self.state.snapshot())

    def _encoder(
        self, scales: ScaleSet
    ) -> Callable[[Datum, InteractionSnapshot], VisualAttributes]:
        top, _, _, left = self.margin
        style = self.style

        def _encode(datum: Datum, snapshot: InteractionSnapshot) -> VisualAttributes:
            attrs = encode(datum, scales, snapshot, style)
            return replace(attrs, cx=attrs.cx + left, cy=attrs.cy + top)

        return _encode

    # ---------- derived outputs ----------

    def axis_ticks(self, count: int = DEFAULT_TICK_COUNT) -> tuple[list[Tick], list[Tick]]:
        """(x ticks, y ticks) in viewport pixels; empty for degenerate domains."""
        if self.scales is None:
            return [], []
        top, _, _, left = self.margin
        x_ticks = [
            Tick(v, left + self.scales.x(v), format_si(v)) for v in self.scales.x.ticks(count)
        ]
        y_ticks = [
            Tick(v, top + self.scales.y(v), format_si(v)) for v in self.scales.y.ticks(count)
        ]
        return x_ticks, y_ticks

    def labels(self) -> list[BubbleLabel]:
        if not self.show_labels:
            return []
        out = []
        for mark in self.engine.live_marks():
            text = self.schema.label_of(mark.datum)
            if text:
                out.append(BubbleLabel(text, (mark.target.cx, mark.target.cy + LABEL_OFFSET)))
        return out

    # ---------- pointer + state callbacks ----------

    def _on_enter(self, datum: Datum, pointer: Point) -> None:
        self.state.set_hovered(self.schema.link_of(datum))
        self.tooltip.show(datum, pointer)

    def _on_move(self, datum: Datum, pointer: Point) -> None:
        self.tooltip.move(pointer)

    def _on_leave(self, datum: Datum, pointer: Point) -> None:
        self.state.set_hovered(None)
        self.tooltip.hide()

    def _on_click(self, datum: Datum, pointer: Point) -> None:
        self.state.toggle_selected(self.schema.link_of(datum))

    def _on_state_change(self, change: InteractionChange) -> None:
        if not self.deferred:
            self.engine.restyle(change.snapshot)
