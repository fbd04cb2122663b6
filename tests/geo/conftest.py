from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture()
def topo_doc() -> dict[str, Any]:
    """Two unit squares (quantized, delta-encoded) in a GeometryCollection."""
    return {
        "type": "Topology",
        "transform": {"scale": [0.01, 0.01], "translate": [-101.0, 39.0]},
        "objects": {
            "states": {
                "type": "GeometryCollection",
                "geometries": [
                    {
                        "type": "Polygon",
                        "id": "06",
                        "properties": {"name": "California"},
                        "arcs": [[0]],
                    },
                    {
                        "type": "Polygon",
                        "id": "99",
                        "properties": {"name": "Nowhere"},
                        "arcs": [[1]],
                    },
                    {"type": "Point", "id": "00", "coordinates": [0, 0]},
                ],
            }
        },
        "arcs": [
            [[100, 100], [100, 0], [0, 100], [-100, 0], [0, -100]],
            [[300, 100], [100, 0], [0, 100], [-100, 0], [0, -100]],
        ],
    }
