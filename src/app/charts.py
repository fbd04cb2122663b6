"""
Altair snapshots of the linked views.

Each builder reads a view's live marks (their target attributes, i.e. the state the
running transitions settle on) and returns a Vega-Lite chart that paints exactly
those attributes: fill, opacity, radius, stroke. Emphasis therefore comes from the
engine's encoding policy, not from Altair conditions.

Selections
- Bubble and map charts carry a point selection named POINT_SELECTION on the
  "link" field; app.ui reads it back from st.altair_chart(on_select="rerun").
"""

from __future__ import annotations

import math
from typing import Any

import altair as alt
import polars as pl
from shapely.geometry import mapping

from linkedviews.views.bubble import BubbleChartView
from linkedviews.views.choropleth import ChoroplethView
from linkedviews.viz.tooltip import format_number, tooltip_content

__all__ = [
    "POINT_SELECTION",
    "bubble_rows",
    "bubble_chart",
    "region_features",
    "choropleth_chart",
    "metrics_chart",
]

POINT_SELECTION = "pick"

# Geometry is already in screen pixels.
_IDENTITY: dict[str, Any] = {"type": "identity", "scale": 1, "translate": [0, 0]}


# Uniform chart defaults for a professional look
def _apply_chart_defaults(ch: alt.TopLevelMixin) -> alt.TopLevelMixin:
    try:
        return (
            ch.configure_axis(labelFontSize=12, titleFontSize=12, grid=True)
            .configure_legend(labelFontSize=12, titleFontSize=12)
            .configure_title(fontSize=14)
            .configure_view(strokeOpacity=0)
        )
    except AttributeError:
        # Non-top-level charts cannot be configured; return as-is
        return ch


def _pick() -> Any:
    return alt.selection_point(name=POINT_SELECTION, fields=["link"], on="click", empty=False)


# ----------------------------
# Bubble charts
# ----------------------------


def bubble_rows(view: BubbleChartView) -> list[dict[str, Any]]:
    """One row per live mark: data-space position plus the encoded attributes."""
    schema = view.schema
    locale = view.tooltip.locale
    rows: list[dict[str, Any]] = []
    for mark in view.engine.live_marks():
        d, a = mark.datum, mark.target
        content = tooltip_content(
            d, schema, x_label=view.x_label, y_label=view.y_label, locale=locale
        )
        rows.append(
            {
                "key": mark.key,
                "link": schema.link_of(d),
                "x": schema.x_of(d),
                "y": schema.y_of(d),
                "label": schema.label_of(d),
                "fill": a.fill,
                "opacity": a.opacity,
                "size": math.pi * a.radius**2,
                "stroke": a.stroke or "transparent",
                "stroke_width": a.stroke_width,
                "x_text": format_number(schema.x_of(d), locale),
                "y_text": format_number(schema.y_of(d), locale),
                "details": "; ".join(content.extra),
            }
        )
    return rows


def bubble_chart(view: BubbleChartView, *, title: str | None = None) -> alt.TopLevelMixin:
    """Bubble chart over the view's scale domains with '.2s' axis labels."""
    x_title = view.x_label or view.schema.x_field
    y_title = view.y_label or view.schema.y_field
    x_domain = list(view.scales.x.domain) if view.scales else [0.0, 0.0]
    y_domain = list(view.scales.y.domain) if view.scales else [0.0, 0.0]
    data = alt.Data(values=bubble_rows(view))
    si = alt.Axis(format=".2s")
    base = alt.Chart(data).encode(
        x=alt.X("x:Q", title=x_title, scale=alt.Scale(domain=x_domain), axis=si),
        y=alt.Y("y:Q", title=y_title, scale=alt.Scale(domain=y_domain), axis=si),
    )
    circles = base.mark_circle().encode(
        size=alt.Size("size:Q", scale=None),
        color=alt.Color("fill:N", scale=None),
        opacity=alt.Opacity("opacity:Q", scale=None),
        stroke=alt.Stroke("stroke:N", scale=None),
        strokeWidth=alt.StrokeWidth("stroke_width:Q", scale=None),
        tooltip=[
            alt.Tooltip("x_text:N", title=x_title),
            alt.Tooltip("y_text:N", title=y_title),
            alt.Tooltip("details:N", title="Details"),
        ],
    ).add_params(_pick())
    layers: list[Any] = [circles]
    if view.show_labels:
        layers.append(
            base.mark_text(dy=20, fontSize=12, color="#111").encode(text=alt.Text("label:N"))
        )
    ch = alt.layer(*layers).properties(
        width=max(view.inner_size[0], 1.0), height=max(view.inner_size[1], 1.0)
    )
    if title:
        ch = ch.properties(title=title)
    return _apply_chart_defaults(ch)


# ----------------------------
# Choropleth
# ----------------------------


def region_features(view: ChoroplethView) -> list[dict[str, Any]]:
    """GeoJSON features in screen coordinates, one per live region mark."""
    if view.projection is None:
        return []
    out: list[dict[str, Any]] = []
    for mark in view.engine.live_marks():
        feature = view.feature(mark.key)
        if feature is None:
            continue
        a = mark.target
        geom = view.projector.screen_geometry(feature, view.projection)
        out.append(
            {
                "type": "Feature",
                "geometry": mapping(geom),
                "properties": {
                    "key": mark.key,
                    "link": mark.key,
                    "name": feature.name,
                    "abbr": feature.abbr,
                    "fill": a.fill,
                    "opacity": a.opacity,
                    "stroke": a.stroke or "#ffffff",
                    "stroke_width": a.stroke_width or 0.5,
                },
            }
        )
    return out


def choropleth_chart(view: ChoroplethView, *, title: str | None = None) -> alt.TopLevelMixin:
    """Region map painted in screen pixels (identity projection) with abbreviation labels."""
    features = region_features(view)
    shapes = (
        alt.Chart(alt.Data(values=features))
        .transform_calculate(link="datum.properties.link")
        .mark_geoshape()
        .encode(
            color=alt.Color("properties.fill:N", scale=None),
            opacity=alt.Opacity("properties.opacity:Q", scale=None),
            stroke=alt.Stroke("properties.stroke:N", scale=None),
            strokeWidth=alt.StrokeWidth("properties.stroke_width:Q", scale=None),
            tooltip=[alt.Tooltip("properties.name:N", title="State")],
        )
        .add_params(_pick())
        .project(**_IDENTITY)
    )
    labels = [{"x": lb.position[0], "y": lb.position[1], "text": lb.text} for lb in view.labels()]
    text = (
        alt.Chart(alt.Data(values=labels))
        .mark_text(fontSize=10, color="#374151")
        .encode(longitude="x:Q", latitude="y:Q", text="text:N")
        .project(**_IDENTITY)
    )
    ch = (
        alt.layer(shapes, text)
        .properties(width=max(view.width, 1.0), height=max(view.height, 1.0))
    )
    if title:
        ch = ch.properties(title=title)
    return _apply_chart_defaults(ch)


# ----------------------------
# Daily metrics
# ----------------------------


def metrics_chart(df: pl.DataFrame, *, title: str | None = None) -> alt.TopLevelMixin:
    """Daily new cases (bars) with the 7-day rolling average (line)."""
    data = df.select("date", "daily_cases", "rolling_average", "growth_rate").with_columns(
        pl.col("date").cast(pl.Utf8)
    )
    base = alt.Chart(alt.Data(values=data.to_dicts())).encode(
        x=alt.X("date:T", title="Date")
    )
    bars = base.mark_bar(opacity=0.35, color="#2563eb").encode(
        y=alt.Y("daily_cases:Q", title="New cases", axis=alt.Axis(format=".2s")),
        tooltip=["date:T", "daily_cases:Q", "rolling_average:Q", "growth_rate:Q"],
    )
    line = base.mark_line(color="#ef4444").encode(y="rolling_average:Q")
    ch = alt.layer(bars, line)
    if title:
        ch = ch.properties(title=title)
    return _apply_chart_defaults(ch)
