"""
Choropleth map view: one region mark per boundary feature, linked to the shared
InteractionState.

Regions are keyed by their canonical abbreviation; features whose identifier is not
in the region table are keyed ``id:<id>`` and carry an empty label, so they still
render (fallback fill) without colliding with each other.

Resize re-fits the projector and runs a full pass. Region hit areas are the
projected polygons, refreshed on every pass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from linkedviews.core.typing import Datum, Key, Point
from linkedviews.geo.projector import GeoFeature, GeometryProjector, Projection
from linkedviews.scene.graph import SceneGraph, SceneNode, VisualAttributes
from linkedviews.scene.timer import FrameScheduler
from linkedviews.viz.encoding import MAP_STYLE, MarkStyle, encode_region
from linkedviews.viz.interaction import InteractionChange, InteractionSnapshot, InteractionState
from linkedviews.viz.palette import ColorTable
from linkedviews.viz.reconcile import JoinResult, MarkCallbacks, Reconciler, Timings
from linkedviews.viz.tooltip import place_tooltip

__all__ = ["ChoroplethView", "RegionLabel", "MAP_TOOLTIP_OFFSET"]

logger = logging.getLogger(__name__)

# The region-name tooltip sits just above the pointer.
MAP_TOOLTIP_OFFSET: tuple[float, float] = (0.0, -10.0)


@dataclass(frozen=True)
class RegionLabel:
    """Abbreviation placed at a region centroid."""

    text: str
    position: Point


def _region_key(datum: Datum) -> Key:
    return Key(str(datum["key"]))


class ChoroplethView:
    """Linked region map over an immutable GeometryProjector."""

    def __init__(
        self,
        projector: GeometryProjector,
        state: InteractionState,
        scheduler: FrameScheduler,
        *,
        colors: ColorTable,
        width: float = 0.0,
        height: float = 0.0,
        padding: float = 0.0,
        style: MarkStyle = MAP_STYLE,
        timings: Timings = Timings(),
        tooltip_size: tuple[float, float] = (140.0, 24.0),
    ) -> None:
        self.projector = projector
        self.state = state
        self.colors = colors
        self.padding = padding
        self.style = style
        self.tooltip_size = tooltip_size
        self.scene = SceneGraph(scheduler, width, height)
        self.engine = Reconciler(
            self.scene,
            scheduler,
            _region_key,
            MarkCallbacks(
                on_enter=self._on_enter,
                on_move=self._on_move,
                on_leave=self._on_leave,
                on_click=self._on_click,
            ),
            timings,
        )
        self.projection: Projection | None = None
        self.deferred = False
        self.tooltip_text: str | None = None
        self.tooltip_position: Point | None = None
        self._by_key: dict[Key, GeoFeature] = {f.key: f for f in projector.features}
        self._unsubscribe: Callable[[], None] | None = state.subscribe(self._on_state_change)

    @property
    def width(self) -> float:
        return self.scene.width

    @property
    def height(self) -> float:
        return self.scene.height

    def feature(self, key: str) -> GeoFeature | None:
        return self._by_key.get(Key(key))

    # ---------- passes ----------

    def resize(self, width: float, height: float) -> JoinResult | None:
        self.scene.resize(width, height)
        return self.render()

    def render(self) -> JoinResult | None:
        """Fit the projector to the current viewport and reconcile every region."""
        if self.width <= 0 or self.height <= 0:
            self.deferred = True
            logger.debug("map: render deferred (%.0fx%.0f)", self.width, self.height)
            return None
        self.deferred = False
        projection = self.projector.project_to_viewport(self.width, self.height, self.padding)
        self.projection = projection
        dataset = [self._datum(f) for f in self.projector.features]
        result = self.engine.reconcile(dataset, self._encoder(projection), self.state.snapshot())
        for mark in self.engine.live_marks():
            feature = self._by_key[mark.key]
            node = mark.node
            if isinstance(node, SceneNode):
                node.hit_area = self.projector.screen_geometry(feature, projection)
        return result

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.engine.clear()
        self._hide_tooltip()

    @staticmethod
    def _datum(feature: GeoFeature) -> dict[str, Any]:
        return {"key": feature.key, "id": feature.id, "abbr": feature.abbr, "name": feature.name}

    def _encoder(
        self, projection: Projection
    ) -> Callable[[Datum, InteractionSnapshot], VisualAttributes]:
        paths: dict[Key, str] = {}

        def _encode(datum: Datum, snapshot: InteractionSnapshot) -> VisualAttributes:
            feature = self._by_key[_region_key(datum)]
            path = paths.get(feature.key)
            if path is None:
                path = paths[feature.key] = self.projector.path_for(feature, projection)
            return encode_region(
                feature.key,
                path,
                self.projector.centroid_of(feature, projection),
                self.colors.color_for(feature.abbr),
                snapshot,
                self.style,
            )

        return _encode

    def labels(self) -> list[RegionLabel]:
        """Abbreviation labels at region centroids (unknown regions have none)."""
        if self.projection is None:
            return []
        return [
            RegionLabel(f.abbr, self.projector.centroid_of(f, self.projection))
            for f in self.projector.features
            if f.abbr
        ]

    # ---------- pointer + state callbacks ----------

    def _on_enter(self, datum: Datum, pointer: Point) -> None:
        self.state.set_hovered(_region_key(datum))
        self.tooltip_text = str(datum.get("name") or "")
        self._on_move(datum, pointer)

    def _on_move(self, datum: Datum, pointer: Point) -> None:
        if self.tooltip_text is not None:
            self.tooltip_position = place_tooltip(
                pointer, self.tooltip_size, (self.width, self.height), MAP_TOOLTIP_OFFSET
            )

    def _on_leave(self, datum: Datum, pointer: Point) -> None:
        self.state.set_hovered(None)
        self._hide_tooltip()

    def _on_click(self, datum: Datum, pointer: Point) -> None:
        self.state.toggle_selected(_region_key(datum))

    def _hide_tooltip(self) -> None:
        self.tooltip_text = None
        self.tooltip_position = None

    def _on_state_change(self, change: InteractionChange) -> None:
        if not self.deferred:
            self.engine.restyle(change.snapshot)
