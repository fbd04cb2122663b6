"""
Headless rendering substrate: a frame scheduler and a retained-mode scene graph.

The reconciliation engine only talks to this package through create / update_to /
destroy and per-node pointer handlers, so any host that offers the same operations
(an SVG bridge, a canvas, a test double) can replace it.
"""

from __future__ import annotations

from .graph import SceneGraph, SceneNode, VisualAttributes, interpolate_attributes
from .timer import FrameScheduler, TimerHandle

__all__ = [
    "FrameScheduler",
    "SceneGraph",
    "SceneNode",
    "TimerHandle",
    "VisualAttributes",
    "interpolate_attributes",
]
