"""
linkedviews.geo — Boundary topology decoding, region tables and viewport projection.

## Public API
- load_topology / raw_features — TopoJSON -> shapely polygons (lon/lat).
- GeometryProjector — immutable planar features; project_to_viewport, path_for, centroid_of.
- FIPS_TO_ABBR / NAME_TO_ABBR / ALL_STATE_ABBRS — fixed region tables.

## Import DAG discipline
- Depends on: linkedviews.core, pydantic, shapely, pyproj.
"""

from __future__ import annotations

from .projector import GeoFeature, GeometryProjector, Projection, load_projector
from .regions import ALL_STATE_ABBRS, FIPS_TO_ABBR, NAME_TO_ABBR, abbr_for_fips, abbr_for_name
from .topology import Topology, load_topology, raw_features

__all__ = [
    "ALL_STATE_ABBRS",
    "FIPS_TO_ABBR",
    "GeoFeature",
    "GeometryProjector",
    "NAME_TO_ABBR",
    "Projection",
    "Topology",
    "abbr_for_fips",
    "abbr_for_name",
    "load_projector",
    "load_topology",
    "raw_features",
]
