"""
Encoding policy: (datum, scales, interaction state) -> visual attributes.

The policy is a pure function. Identical inputs always produce identical outputs,
so views can re-run it on every mark whenever the interaction state changes without
keeping per-mark memo state.

Keys are compared through ViewSchema.link_of.

Rules, in priority order:
    1. radius: large_radius for the selected key, otherwise base_radius.
    2. opacity: full when nothing is hovered or selected; otherwise full only for the
       active key (selection beats hover) and dim for every other mark.
    3. stroke: only on the selected mark.
    4. filter: only on the hovered mark, and only when nothing is selected or the
       hovered mark is the selected one.
"""

from __future__ import annotations

from dataclasses import dataclass

from linkedviews.core.constants import (
    BASE_RADIUS,
    DIM_OPACITY,
    FULL_OPACITY,
    GLOW_FILTER,
    LARGE_RADIUS,
    MAP_DIM_OPACITY,
    MAP_GLOW_FILTER,
    SELECTED_STROKE,
    SELECTED_STROKE_WIDTH,
)
from linkedviews.core.typing import Datum, Point
from linkedviews.scene.graph import VisualAttributes

from .interaction import InteractionSnapshot
from .scales import ScaleSet

__all__ = [
    "MarkStyle",
    "CHART_STYLE",
    "MAP_STYLE",
    "Emphasis",
    "emphasis",
    "encode",
    "encode_region",
]


@dataclass(frozen=True)
class MarkStyle:
    """Per-view constants consumed by the policy."""

    base_radius: float = BASE_RADIUS
    large_radius: float = LARGE_RADIUS
    dim_opacity: float = DIM_OPACITY
    stroke: str = SELECTED_STROKE
    stroke_width: float = SELECTED_STROKE_WIDTH
    glow: str = GLOW_FILTER


CHART_STYLE = MarkStyle()
MAP_STYLE = MarkStyle(
    base_radius=0.0,
    large_radius=0.0,
    dim_opacity=MAP_DIM_OPACITY,
    glow=MAP_GLOW_FILTER,
)


@dataclass(frozen=True)
class Emphasis:
    radius: float
    opacity: float
    stroke: str | None
    stroke_width: float
    filter: str | None


def emphasis(key: str, state: InteractionSnapshot, style: MarkStyle = CHART_STYLE) -> Emphasis:
    """Apply the four rules to one key."""
    selected, hovered = state.selected, state.hovered
    is_selected = selected is not None and key == selected
    is_hovered = hovered is not None and key == hovered

    active = state.active
    if active is None or key == active:
        opacity = FULL_OPACITY
    else:
        opacity = style.dim_opacity

    glow = is_hovered and (selected is None or is_selected)
    return Emphasis(
        radius=style.large_radius if is_selected else style.base_radius,
        opacity=opacity,
        stroke=style.stroke if is_selected else None,
        stroke_width=style.stroke_width if is_selected else 0.0,
        filter=style.glow if glow else None,
    )


def encode(
    datum: Datum,
    scales: ScaleSet,
    state: InteractionSnapshot,
    style: MarkStyle = CHART_STYLE,
) -> VisualAttributes:
    """Target attributes of a bubble mark."""
    schema = scales.schema
    e = emphasis(schema.link_of(datum), state, style)
    return VisualAttributes(
        cx=scales.x(schema.x_of(datum)),
        cy=scales.y(schema.y_of(datum)),
        radius=e.radius,
        fill=scales.color.color_for(schema.color_key_of(datum)),
        opacity=e.opacity,
        stroke=e.stroke,
        stroke_width=e.stroke_width,
        filter=e.filter,
    )


def encode_region(
    key: str,
    path: str,
    centroid: Point,
    fill: str,
    state: InteractionSnapshot,
    style: MarkStyle = MAP_STYLE,
) -> VisualAttributes:
    """Target attributes of a choropleth region mark."""
    e = emphasis(key, state, style)
    return VisualAttributes(
        cx=centroid[0],
        cy=centroid[1],
        radius=e.radius,
        fill=fill,
        opacity=e.opacity,
        stroke=e.stroke,
        stroke_width=e.stroke_width,
        filter=e.filter,
        path=path,
    )
