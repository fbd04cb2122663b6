"""
TopoJSON decoding: pydantic models for the boundary document and arc stitching into
shapely polygons (lon/lat).

Responsibilities
- Validate the document shape (Topology -> objects -> geometries, arcs, transform).
- Decode quantized, delta-encoded arcs with the document transform.
- Stitch arc references (negative index = reversed arc) into rings and polygons.

Notes
- Only Polygon and MultiPolygon geometries carry boundaries; other types are skipped.
- Rings with fewer than four positions after stitching are dropped.
- An arc reference outside the arc table raises TopologyError: the document is unusable.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from linkedviews.core.errors import TopologyError

__all__ = [
    "Transform",
    "TopoGeometry",
    "Topology",
    "RawFeature",
    "load_topology",
    "decode_arcs",
    "raw_features",
]

logger = logging.getLogger(__name__)

Position = tuple[float, float]


class Transform(BaseModel):
    """Quantization transform: position = quantized * scale + translate."""

    model_config = ConfigDict(frozen=True)

    scale: tuple[float, float]
    translate: tuple[float, float]


class TopoGeometry(BaseModel):
    """One geometry object; GeometryCollections nest further geometries."""

    model_config = ConfigDict(extra="allow")

    type: str
    id: str | int | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    arcs: Any = None
    geometries: list[TopoGeometry] | None = None


class Topology(BaseModel):
    """Top-level TopoJSON document."""

    model_config = ConfigDict(extra="allow")

    type: Literal["Topology"]
    objects: dict[str, TopoGeometry]
    arcs: list[list[list[float]]]
    transform: Transform | None = None


@dataclass(frozen=True)
class RawFeature:
    """A decoded boundary feature in geographic coordinates."""

    id: str
    name: str
    geometry: BaseGeometry


def load_topology(path: str | Path) -> Topology:
    """Read and validate a TopoJSON file."""
    text = Path(path).read_text(encoding="utf-8")
    topology = Topology.model_validate_json(text)
    logger.info("loaded topology %s (%d arcs)", path, len(topology.arcs))
    return topology


def decode_arcs(topology: Topology) -> list[list[Position]]:
    """Return every arc as absolute positions (delta-decoded when quantized)."""
    out: list[list[Position]] = []
    tf = topology.transform
    for arc in topology.arcs:
        if tf is None:
            out.append([(float(p[0]), float(p[1])) for p in arc])
            continue
        (sx, sy), (tx, ty) = tf.scale, tf.translate
        x = y = 0.0
        points: list[Position] = []
        for p in arc:
            x += p[0]
            y += p[1]
            points.append((x * sx + tx, y * sy + ty))
        out.append(points)
    return out


def _ring(indices: Sequence[int], arcs: list[list[Position]]) -> list[Position]:
    points: list[Position] = []
    for i in indices:
        idx = i if i >= 0 else ~i
        if idx >= len(arcs):
            raise TopologyError(f"arc index {i} out of range ({len(arcs)} arcs)")
        arc = arcs[idx] if i >= 0 else arcs[idx][::-1]
        if points:
            points.pop()
        points.extend(arc)
    return points


def _polygon(rings: Sequence[Sequence[int]], arcs: list[list[Position]]) -> Polygon | None:
    decoded = [r for r in (_ring(ring, arcs) for ring in rings) if len(r) >= 4]
    if not decoded:
        return None
    return Polygon(decoded[0], decoded[1:])


def _geometry(obj: TopoGeometry, arcs: list[list[Position]]) -> BaseGeometry | None:
    if obj.type == "Polygon":
        return _polygon(obj.arcs or [], arcs)
    if obj.type == "MultiPolygon":
        parts = [p for p in (_polygon(rings, arcs) for rings in obj.arcs or []) if p is not None]
        return MultiPolygon(parts) if parts else None
    return None


def raw_features(topology: Topology, object_name: str) -> list[RawFeature]:
    """Decode every boundary feature of one named object (GeometryCollections flattened)."""
    root = topology.objects.get(object_name)
    if root is None:
        raise TopologyError(
            f"object {object_name!r} not in topology (has: {sorted(topology.objects)})"
        )
    arcs = decode_arcs(topology)
    out: list[RawFeature] = []
    stack = [root]
    while stack:
        obj = stack.pop(0)
        if obj.geometries is not None:
            stack[0:0] = obj.geometries
            continue
        geom = _geometry(obj, arcs)
        if geom is None:
            continue
        name = obj.properties.get("name")
        out.append(
            RawFeature(
                id="" if obj.id is None else str(obj.id),
                name="" if name is None else str(name),
                geometry=geom,
            )
        )
    return out
