"""
Core exception types for programmer-facing configuration failures.

Provides typed exceptions for the few failures the core is allowed to surface:
- SchemaError for an invalid view schema (e.g., identity key reused as an axis).
- TopologyError for a boundary document that cannot be decoded at all.

Notes:
    - Malformed data values are never errors: numeric fields coerce to 0 and unknown
      region identifiers render with an empty label.
    - This module uses only the Python standard library and has no side effects.

Examples:
    >>> from linkedviews.core.errors import SchemaError
    >>> try:
    ...     raise SchemaError("x_field and y_field must differ")
    ... except ValueError as e:
    ...     msg = str(e)
    >>> "differ" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "LinkedViewsError",
    "SchemaError",
    "TopologyError",
]


class LinkedViewsError(Exception):
    """Base class for linkedviews errors."""


class SchemaError(LinkedViewsError, ValueError):
    """View schema misconfiguration (field roles that contradict each other)."""


class TopologyError(LinkedViewsError, ValueError):
    """Boundary topology that is structurally unusable (missing object, bad arc index)."""
