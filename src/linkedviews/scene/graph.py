"""
Headless retained-mode scene graph (the rendering substrate the engine drives).

A SceneGraph stands in for one SVG element: it holds nodes in paint order, animates
their attributes over time on a shared FrameScheduler, and turns raw pointer input
into per-node enter/move/leave/click events the way a browser does.

Responsibilities
- create(initial) -> SceneNode; node.update_to(target, duration_ms); node.destroy().
- Lazy, time-sliced interpolation (cubic in-out) read from the scheduler clock.
- Hit testing (circles, or a shapely hit area) and leave-before-enter dispatch.

Notes
- Numeric attributes and #rrggbb colours interpolate; other string attributes switch
  at the start of a transition.
- A new transition starts from the attributes interpolated at that instant, so
  interrupting an animation never jumps.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, fields
from typing import Any, Literal

from shapely.geometry import Point as ShapelyPoint
from shapely.geometry.base import BaseGeometry

from .timer import FrameScheduler

__all__ = [
    "VisualAttributes",
    "SceneNode",
    "SceneGraph",
    "PointerKind",
    "ease_cubic_in_out",
    "interpolate_attributes",
]

PointerKind = Literal["enter", "move", "leave", "click"]
PointerHandler = Callable[[float, float], None]


@dataclass(frozen=True)
class VisualAttributes:
    """Visual attributes of one mark.

    Attributes:
        cx (float): Anchor x (bubble centre or region centroid), pixels.
        cy (float): Anchor y, pixels.
        radius (float): Circle radius; 0 for region marks.
        fill (str): Fill colour (#rrggbb or named).
        opacity (float): 0..1.
        stroke (str | None): Outline colour, None for no outline.
        stroke_width (float): Outline width.
        filter (str | None): Emphasis filter reference, None for none.
        path (str | None): SVG path data for region marks.
    """

    cx: float = 0.0
    cy: float = 0.0
    radius: float = 0.0
    fill: str = "#ccc"
    opacity: float = 1.0
    stroke: str | None = None
    stroke_width: float = 0.0
    filter: str | None = None
    path: str | None = None


_NUMERIC = ("cx", "cy", "radius", "opacity", "stroke_width")


def ease_cubic_in_out(t: float) -> float:
    t = min(1.0, max(0.0, t)) * 2.0
    if t <= 1.0:
        return t * t * t / 2.0
    t -= 2.0
    return (t * t * t + 2.0) / 2.0


def _parse_hex(color: str) -> tuple[int, int, int] | None:
    c = color.strip()
    if not c.startswith("#"):
        return None
    c = c[1:]
    if len(c) == 3:
        c = "".join(ch * 2 for ch in c)
    if len(c) != 6:
        return None
    try:
        return int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)
    except ValueError:
        return None


def _mix_color(a: str, b: str, t: float) -> str:
    ca, cb = _parse_hex(a), _parse_hex(b)
    if ca is None or cb is None:
        return b
    r, g, bl = (round(x + (y - x) * t) for x, y in zip(ca, cb, strict=True))
    return f"#{r:02x}{g:02x}{bl:02x}"


def interpolate_attributes(
    start: VisualAttributes, end: VisualAttributes, t: float
) -> VisualAttributes:
    """Blend two attribute sets at eased progress t in [0, 1]."""
    if t >= 1.0:
        return end
    values: dict[str, Any] = {}
    for f in fields(VisualAttributes):
        a, b = getattr(start, f.name), getattr(end, f.name)
        if f.name in _NUMERIC:
            values[f.name] = a + (b - a) * t
        elif f.name == "fill":
            values[f.name] = _mix_color(a, b, t)
        else:
            values[f.name] = b
    return VisualAttributes(**values)


class SceneNode:
    """One retained visual element owned by a SceneGraph."""

    def __init__(self, graph: SceneGraph, node_id: int, initial: VisualAttributes) -> None:
        self.graph = graph
        self.node_id = node_id
        self.hit_area: BaseGeometry | None = None
        self.interactive = True
        self._start = initial
        self._target = initial
        self._t0 = graph.scheduler.now()
        self._t1 = self._t0
        self._destroyed = False
        self._handlers: dict[str, PointerHandler] = {}

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def target(self) -> VisualAttributes:
        return self._target

    @property
    def attrs(self) -> VisualAttributes:
        """Attributes as painted at the scheduler's current time."""
        now = self.graph.scheduler.now()
        if now >= self._t1:
            return self._target
        span = self._t1 - self._t0
        return interpolate_attributes(
            self._start, self._target, ease_cubic_in_out((now - self._t0) / span)
        )

    @property
    def animating(self) -> bool:
        return self.graph.scheduler.now() < self._t1

    def remaining_ms(self) -> float:
        return max(0.0, self._t1 - self.graph.scheduler.now())

    def update_to(self, target: VisualAttributes, duration_ms: float) -> None:
        """Animate from the current attributes to target over duration_ms (0 = immediate)."""
        if self._destroyed:
            return
        now = self.graph.scheduler.now()
        self._start = self.attrs
        self._target = target
        self._t0 = now
        self._t1 = now + max(0.0, float(duration_ms))

    def on(self, kind: PointerKind, handler: PointerHandler | None) -> None:
        if handler is None:
            self._handlers.pop(kind, None)
        else:
            self._handlers[kind] = handler

    def emit(self, kind: PointerKind, x: float, y: float) -> None:
        if self._destroyed:
            return
        handler = self._handlers.get(kind)
        if handler is not None:
            handler(x, y)

    def contains(self, x: float, y: float) -> bool:
        if self.hit_area is not None:
            return bool(self.hit_area.covers(ShapelyPoint(x, y)))
        a = self.attrs
        return a.radius > 0 and (x - a.cx) ** 2 + (y - a.cy) ** 2 <= a.radius**2

    def destroy(self) -> None:
        if self._destroyed:
            return
        self.graph._remove(self)
        self._destroyed = True
        self._handlers.clear()

    def __repr__(self) -> str:
        return f"SceneNode(id={self.node_id}, destroyed={self._destroyed})"


class SceneGraph:
    """A paint-ordered collection of SceneNodes sharing one scheduler.

    Args:
        scheduler (FrameScheduler): Clock used for every node's interpolation.
        width (float): Viewport width in pixels.
        height (float): Viewport height in pixels.
    """

    def __init__(self, scheduler: FrameScheduler, width: float = 0.0, height: float = 0.0) -> None:
        self.scheduler = scheduler
        self.width = float(width)
        self.height = float(height)
        self._nodes: list[SceneNode] = []
        self._next_id = 0
        self._under: SceneNode | None = None
        self._pointer: tuple[float, float] = (-1.0, -1.0)

    # ---------- substrate operations ----------

    def create(self, initial: VisualAttributes) -> SceneNode:
        node = SceneNode(self, self._next_id, initial)
        self._next_id += 1
        self._nodes.append(node)
        return node

    def _remove(self, node: SceneNode) -> None:
        if node in self._nodes:
            self._nodes.remove(node)
        if self._under is node:
            # hovered node removed: deliver its leave
            self._under = None
            node.emit("leave", *self._pointer)

    def nodes(self) -> list[SceneNode]:
        return list(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def raise_to_top(self, node: SceneNode) -> None:
        if node in self._nodes:
            self._nodes.remove(node)
            self._nodes.append(node)

    def resize(self, width: float, height: float) -> None:
        self.width, self.height = float(width), float(height)

    # ---------- pointer input ----------

    def node_at(self, x: float, y: float) -> SceneNode | None:
        for node in reversed(self._nodes):
            if node.interactive and node.contains(x, y):
                return node
        return None

    def pointer_move(self, x: float, y: float) -> SceneNode | None:
        """Deliver leave (old) before enter (new), then move, like a browser."""
        self._pointer = (x, y)
        hit = self.node_at(x, y)
        previous = self._under
        if hit is not previous:
            self._under = hit
            if previous is not None:
                previous.emit("leave", x, y)
            if hit is not None:
                hit.emit("enter", x, y)
        if hit is not None:
            hit.emit("move", x, y)
        return hit

    def pointer_exit(self, x: float = -1.0, y: float = -1.0) -> None:
        """Pointer left the whole viewport."""
        self._pointer = (x, y)
        previous, self._under = self._under, None
        if previous is not None:
            previous.emit("leave", x, y)

    def click(self, x: float, y: float) -> SceneNode | None:
        hit = self.node_at(x, y)
        if hit is not None:
            hit.emit("click", x, y)
        return hit
