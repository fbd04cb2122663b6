"""
Geometry projector: fits a static boundary topology into any viewport.

The expensive work happens once, at load: arcs are decoded, every feature is
projected to an equal-area plane (pyproj, CONUS Albers by default), Alaska and
Hawaii are moved into insets, and planar centroids are computed (shapely). After
that the projector is immutable. Fitting to a viewport is a single affine map
(uniform scale + translate, y flipped), so re-projection on every resize costs the
same as the first fit and needs no special casing.

Responsibilities
- project_to_viewport(width, height) -> Projection
- path_for(feature, projection) -> SVG path data
- centroid_of(feature, projection) -> (x, y)
- label_for(feature) -> abbreviation ('' for identifiers missing from the table)
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import shapely
from pyproj import Transformer
from shapely import affinity
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from linkedviews.core.typing import Key, Point

from .regions import abbr_for_fips
from .topology import RawFeature, Topology, load_topology, raw_features

__all__ = [
    "DEFAULT_CRS",
    "DEFAULT_INSETS",
    "InsetSpec",
    "GeoFeature",
    "Projection",
    "GeometryProjector",
    "load_projector",
    "svg_path",
]

logger = logging.getLogger(__name__)

# NAD83 / Conus Albers (equal area).
DEFAULT_CRS = "EPSG:5070"


@dataclass(frozen=True)
class InsetSpec:
    """Move one feature into an inset.

    Attributes:
        scale (float): Uniform scale about the feature's own centroid.
        anchor (tuple[float, float]): Where the feature's lower-left bound lands,
            as fractions of the mainland bounding box (0, 0 = lower-left corner).
    """

    scale: float
    anchor: tuple[float, float]


DEFAULT_INSETS: Mapping[str, InsetSpec] = {
    "02": InsetSpec(scale=0.35, anchor=(0.0, -0.02)),
    "15": InsetSpec(scale=1.0, anchor=(0.26, 0.0)),
}


@dataclass(frozen=True)
class GeoFeature:
    """Immutable region: identity, name, planar geometry and planar centroid."""

    id: str
    name: str
    abbr: str
    geometry: BaseGeometry
    centroid: Point

    @property
    def key(self) -> Key:
        """Identity used for marks; unknown ids stay unique without a label."""
        return Key(self.abbr or f"id:{self.id}")


@dataclass(frozen=True)
class Projection:
    """Affine planar -> screen map: (x, y) -> (tx + k*x, ty - k*y)."""

    k: float
    tx: float
    ty: float
    width: float
    height: float

    def __call__(self, x: float, y: float) -> Point:
        return (self.tx + self.k * x, self.ty - self.k * y)

    def apply(self, geom: BaseGeometry) -> BaseGeometry:
        return affinity.affine_transform(geom, [self.k, 0.0, 0.0, -self.k, self.tx, self.ty])


def _ring_path(coords: Iterable[tuple[float, ...]]) -> str:
    pts = [f"{x:.2f},{y:.2f}" for x, y, *_ in coords]
    if not pts:
        return ""
    return "M" + "L".join(pts) + "Z"


def svg_path(geom: BaseGeometry) -> str:
    """SVG path data for a (Multi)Polygon in screen coordinates."""
    if geom.is_empty:
        return ""
    polygons: Sequence[Polygon]
    if isinstance(geom, Polygon):
        polygons = [geom]
    elif isinstance(geom, MultiPolygon):
        polygons = list(geom.geoms)
    else:
        return ""
    parts: list[str] = []
    for poly in polygons:
        parts.append(_ring_path(poly.exterior.coords))
        parts.extend(_ring_path(r.coords) for r in poly.interiors)
    return "".join(parts)


def _apply_insets(
    features: list[tuple[RawFeature, BaseGeometry]], insets: Mapping[str, InsetSpec]
) -> list[tuple[RawFeature, BaseGeometry]]:
    # anchor box: lower 48 + DC only
    mainland = [
        g for f, g in features if f.id not in insets and abbr_for_fips(f.id) and not g.is_empty
    ]
    if not mainland or not insets:
        return features
    minx = min(g.bounds[0] for g in mainland)
    miny = min(g.bounds[1] for g in mainland)
    maxx = max(g.bounds[2] for g in mainland)
    maxy = max(g.bounds[3] for g in mainland)
    out: list[tuple[RawFeature, BaseGeometry]] = []
    for raw, geom in features:
        spec = insets.get(raw.id)
        if spec is None or geom.is_empty:
            out.append((raw, geom))
            continue
        scaled = affinity.scale(geom, spec.scale, spec.scale, origin="centroid")
        bx, by = scaled.bounds[0], scaled.bounds[1]
        ax = minx + spec.anchor[0] * (maxx - minx)
        ay = miny + spec.anchor[1] * (maxy - miny)
        out.append((raw, affinity.translate(scaled, ax - bx, ay - by)))
    return out


class GeometryProjector:
    """Read-only set of planar GeoFeatures with viewport fitting.

    Args:
        features (Sequence[GeoFeature]): Planar features (already projected and inset).
    """

    def __init__(self, features: Sequence[GeoFeature]) -> None:
        self._features = tuple(features)
        live = [f.geometry for f in self._features if f.abbr and not f.geometry.is_empty]
        if not live:
            live = [f.geometry for f in self._features if not f.geometry.is_empty]
        if live:
            self._bounds = (
                min(g.bounds[0] for g in live),
                min(g.bounds[1] for g in live),
                max(g.bounds[2] for g in live),
                max(g.bounds[3] for g in live),
            )
        else:
            self._bounds = (0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_topology(
        cls,
        topology: Topology,
        object_name: str = "states",
        *,
        crs: str = DEFAULT_CRS,
        insets: Mapping[str, InsetSpec] = DEFAULT_INSETS,
    ) -> GeometryProjector:
        raws = raw_features(topology, object_name)
        transformer = Transformer.from_crs("EPSG:4326", crs, always_xy=True)
        planar = [
            (r, shapely.transform(r.geometry, transformer.transform, interleaved=False))
            for r in raws
        ]
        planar = _apply_insets(planar, insets)
        features = []
        for raw, geom in planar:
            c = geom.centroid
            centroid = (0.0, 0.0) if c.is_empty else (float(c.x), float(c.y))
            features.append(
                GeoFeature(
                    id=raw.id,
                    name=raw.name,
                    abbr=abbr_for_fips(raw.id),
                    geometry=geom,
                    centroid=centroid,
                )
            )
        logger.info("projected %d features from object %r to %s", len(features), object_name, crs)
        return cls(features)

    @classmethod
    def from_file(cls, path: str | Path, object_name: str = "states") -> GeometryProjector:
        return cls.from_topology(load_topology(path), object_name)

    @property
    def features(self) -> tuple[GeoFeature, ...]:
        return self._features

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        return self._bounds

    def project_to_viewport(self, width: float, height: float, padding: float = 0.0) -> Projection:
        """Fit the known regions into (width, height), centred, aspect preserved.

        Features without an abbreviation (territories, unknown ids) keep their marks
        but do not take part in the fit, unless no known region exists.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport must be positive, got {width}x{height}")
        x0, y0, x1, y1 = self._bounds
        avail_w = max(width - 2 * padding, 1e-9)
        avail_h = max(height - 2 * padding, 1e-9)
        dx, dy = x1 - x0, y1 - y0
        if dx <= 0 and dy <= 0:
            k = 1.0
        elif dx <= 0:
            k = avail_h / dy
        elif dy <= 0:
            k = avail_w / dx
        else:
            k = min(avail_w / dx, avail_h / dy)
        tx = (width - k * dx) / 2.0 - k * x0
        ty = (height + k * dy) / 2.0 + k * y0
        return Projection(k=k, tx=tx, ty=ty, width=float(width), height=float(height))

    def screen_geometry(self, feature: GeoFeature, projection: Projection) -> BaseGeometry:
        return projection.apply(feature.geometry)

    def path_for(self, feature: GeoFeature, projection: Projection) -> str:
        return svg_path(self.screen_geometry(feature, projection))

    def centroid_of(self, feature: GeoFeature, projection: Projection) -> Point:
        return projection(*feature.centroid)

    def label_for(self, feature: GeoFeature) -> str:
        return feature.abbr


@functools.lru_cache(maxsize=4)
def load_projector(path: str, object_name: str = "states") -> GeometryProjector:
    """Load a topology file once per process; the projector is immutable afterwards."""
    return GeometryProjector.from_file(path, object_name)
