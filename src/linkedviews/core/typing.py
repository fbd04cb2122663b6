"""
Lightweight typing aliases used across views, scales and the reconciliation engine.

This module contains no runtime logic and is zero-IO.

Examples:
    >>> from linkedviews.core.typing import Key, Datum
    >>> def key_of(d: Datum) -> Key:
    ...     return Key(str(d["abbr"]))
    >>> key_of({"abbr": "CA", "cases": 10})
    'CA'
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, NewType

__all__ = [
    "Key",
    "Datum",
    "Dataset",
    "Point",
]

# Identity key of a datum; stable and unique within one dataset snapshot.
Key = NewType("Key", str)

# One record; field declaration order is the mapping's iteration order.
Datum = Mapping[str, Any]

Dataset = Sequence[Datum]

# Screen coordinates (x, y) in pixels.
Point = tuple[float, float]
