"""
linkedviews.views — Coordinated views built on the engine.

## Public API
- BubbleChartView — one linked bubble chart (scales, marks, tooltip, ticks).
- ChoroplethView — linked region map over a GeometryProjector.
- Dashboard — map + per-state yearly chart + national cumulative chart.

## Import DAG discipline
- Depends on: linkedviews.core, linkedviews.scene, linkedviews.geo, linkedviews.viz.
- Must not import linkedviews.io or app.
"""

from __future__ import annotations

from .bubble import BubbleChartView, BubbleLabel, Tick
from .choropleth import ChoroplethView, RegionLabel
from .dashboard import NATIONAL_YEARLY_SCHEMA, STATE_YEARLY_SCHEMA, Dashboard

__all__ = [
    "BubbleChartView",
    "BubbleLabel",
    "ChoroplethView",
    "Dashboard",
    "NATIONAL_YEARLY_SCHEMA",
    "RegionLabel",
    "STATE_YEARLY_SCHEMA",
    "Tick",
]
