from __future__ import annotations

import pytest
from shapely.geometry import box

from linkedviews.geo.projector import GeoFeature, GeometryProjector


def _square(fid: str, name: str, abbr: str, x0: float) -> GeoFeature:
    geom = box(x0, 0, x0 + 10, 10)
    c = geom.centroid
    return GeoFeature(id=fid, name=name, abbr=abbr, geometry=geom, centroid=(c.x, c.y))


@pytest.fixture()
def projector() -> GeometryProjector:
    """Three adjacent planar squares: CA, TX and one id missing from the region table.

    Only CA and TX take part in the fit (x 0..20).
    """
    return GeometryProjector(
        [
            _square("06", "California", "CA", 0.0),
            _square("48", "Texas", "TX", 10.0),
            _square("99", "Nowhere", "", 20.0),
        ]
    )


@pytest.fixture()
def state_rows() -> list[dict]:
    def row(year: int, state: str, fips: str, abbr: str, cases: int, deaths: int) -> dict:
        return {
            "year": year,
            "state": state,
            "fips": fips,
            "cases": cases,
            "deaths": deaths,
            "abbr": abbr,
        }

    return [
        row(2020, "California", "06", "CA", 100, 10),
        row(2020, "Texas", "48", "TX", 80, 6),
        row(2021, "California", "06", "CA", 300, 30),
        row(2021, "Texas", "48", "TX", 250, 20),
    ]


@pytest.fixture()
def national_rows() -> list[dict]:
    return [
        {"year": 2020, "cases": 180, "deaths": 16},
        {"year": 2021, "cases": 550, "deaths": 50},
    ]
