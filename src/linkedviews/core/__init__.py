"""
Core contracts for linkedviews (constants, typing aliases, view schema, errors).

## Contracts (single source of truth)
- constants — durations, radii, opacities, padding, offsets.
- typing — Key, Datum, Dataset, Point aliases.
- schema — ViewSchema: declared field roles per view instantiation.
- errors — SchemaError, TopologyError.

## Notes
- Zero-IO policy: stdlib + pydantic only.
- Downstream layers (viz, geo, views, io) import from here; core imports nothing above it.
"""

from __future__ import annotations

from .errors import LinkedViewsError, SchemaError, TopologyError
from .schema import ViewSchema, coerce_number
from .typing import Dataset, Datum, Key, Point

__all__ = [
    "Dataset",
    "Datum",
    "Key",
    "LinkedViewsError",
    "Point",
    "SchemaError",
    "TopologyError",
    "ViewSchema",
    "coerce_number",
]
