"""
Fixed engine constants shared by the viz, views and scene layers.

This module is zero-IO and uses only the Python standard library. Changing a value
here changes every view at once; views never hard-code their own copies.

Notes:
    - Durations are milliseconds on the scene scheduler clock.
    - Exit is intentionally longer than entry so that removed marks read as dissolving.
"""

from __future__ import annotations

__all__ = [
    "ENTER_MS",
    "UPDATE_MS",
    "EXIT_MS",
    "BASE_RADIUS",
    "LARGE_RADIUS",
    "DIM_OPACITY",
    "MAP_DIM_OPACITY",
    "FULL_OPACITY",
    "SELECTED_STROKE",
    "SELECTED_STROKE_WIDTH",
    "GLOW_FILTER",
    "MAP_GLOW_FILTER",
    "FALLBACK_COLOR",
    "DOMAIN_PADDING",
    "TOOLTIP_OFFSET",
    "CHART_MARGIN",
    "DEFAULT_TICK_COUNT",
    "FRAME_MS",
]

# Animation durations (ms).
ENTER_MS: float = 200.0
UPDATE_MS: float = 200.0
EXIT_MS: float = 400.0

# Radii for bubble marks; the selected mark is drawn 1.5x larger.
BASE_RADIUS: float = 8.0
LARGE_RADIUS: float = 12.0

FULL_OPACITY: float = 1.0
DIM_OPACITY: float = 0.15
MAP_DIM_OPACITY: float = 0.2

SELECTED_STROKE: str = "#111"
SELECTED_STROKE_WIDTH: float = 3.0

GLOW_FILTER: str = "url(#bubble-glow)"
MAP_GLOW_FILTER: str = "url(#drop-shadow)"

FALLBACK_COLOR: str = "#ccc"

# Share of the maximum used as padding below zero-or-min on each axis.
DOMAIN_PADDING: float = 0.05

# Tooltip anchor relative to the pointer (dx, dy) in pixels.
TOOLTIP_OFFSET: tuple[float, float] = (10.0, -10.0)

# Chart margins (top, right, bottom, left) in pixels.
CHART_MARGIN: tuple[float, float, float, float] = (20.0, 20.0, 60.0, 60.0)

DEFAULT_TICK_COUNT: int = 10

# One display frame at 60 Hz.
FRAME_MS: float = 1000.0 / 60.0
