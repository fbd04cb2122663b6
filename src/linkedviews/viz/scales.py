"""
Domain/scale calculator: numeric domains, linear pixel scales, ticks and SI labels.

Responsibilities
- compute_axis_domain: max over the dataset (0 if empty), min = min(0, minimum),
  start = min - 5% of max, end = max.
- LinearScale: immutable domain -> range mapping; replaced wholesale, never mutated.
- compute_scales: bundle x/y scales and the colour table for one view pass.
- ticks / format_si: axis ticks (suppressed for degenerate domains) and ".2s" labels.

Notes
- Values pass through ViewSchema.numeric, so malformed fields count as 0.
- A degenerate domain (start == end) maps every value to the middle of the range.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from linkedviews.core.constants import DEFAULT_TICK_COUNT, DOMAIN_PADDING
from linkedviews.core.schema import ViewSchema
from linkedviews.core.typing import Dataset

from .palette import ColorTable

__all__ = [
    "AxisDomain",
    "LinearScale",
    "ScaleSet",
    "compute_axis_domain",
    "compute_scales",
    "ticks",
    "format_si",
]


@dataclass(frozen=True)
class AxisDomain:
    """Padded numeric domain of one axis."""

    start: float
    end: float

    @property
    def degenerate(self) -> bool:
        return self.start == self.end


def compute_axis_domain(values: Iterable[float], padding: float = DOMAIN_PADDING) -> AxisDomain:
    """Compute the padded domain for one axis.

    Args:
        values (Iterable[float]): Already-coerced numeric values.
        padding (float): Share of the maximum subtracted below zero-or-min.

    Returns:
        AxisDomain: (min(0, minimum) - padding * max, max); (0, 0) when empty.

    Examples:
        >>> compute_axis_domain([10.0, 100.0])
        AxisDomain(start=-5.0, end=100.0)
    """
    vals = list(values)
    hi = max(vals) if vals else 0.0
    lo = min(0.0, min(vals)) if vals else 0.0
    return AxisDomain(start=lo - padding * hi, end=hi)


@dataclass(frozen=True)
class LinearScale:
    """Linear mapping from domain (d0, d1) to range (r0, r1)."""

    domain: tuple[float, float]
    range: tuple[float, float]

    @property
    def degenerate(self) -> bool:
        return self.domain[0] == self.domain[1]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d0 == d1:
            return (r0 + r1) / 2.0
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r0 == r1:
            return d0
        return d0 + (pixel - r0) / (r1 - r0) * (d1 - d0)

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> list[float]:
        if self.degenerate:
            return []
        return ticks(self.domain[0], self.domain[1], count)


@dataclass(frozen=True)
class ScaleSet:
    """Everything the encoding policy needs to position and colour a datum."""

    schema: ViewSchema
    x: LinearScale
    y: LinearScale
    color: ColorTable


def compute_scales(
    dataset: Dataset,
    schema: ViewSchema,
    inner_width: float,
    inner_height: float,
    color: ColorTable,
) -> ScaleSet:
    """Build the x/y scales for a dataset (x: 0 -> width, y inverted: height -> 0)."""
    xd = compute_axis_domain(schema.x_of(d) for d in dataset)
    yd = compute_axis_domain(schema.y_of(d) for d in dataset)
    return ScaleSet(
        schema=schema,
        x=LinearScale((xd.start, xd.end), (0.0, float(inner_width))),
        y=LinearScale((yd.start, yd.end), (float(inner_height), 0.0)),
        color=color,
    )


_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _tick_step(start: float, stop: float, count: int) -> float:
    raw = (stop - start) / max(count, 1)
    power = math.floor(math.log10(raw))
    step = 10.0**power
    err = raw / step
    if err >= _E10:
        step *= 10
    elif err >= _E5:
        step *= 5
    elif err >= _E2:
        step *= 2
    return step


def ticks(start: float, stop: float, count: int = DEFAULT_TICK_COUNT) -> list[float]:
    """Return roughly count round tick values within [start, stop].

    Examples:
        >>> ticks(0, 100, 5)
        [0.0, 20.0, 40.0, 60.0, 80.0, 100.0]
        >>> ticks(3, 3)
        []
    """
    if start == stop or count <= 0:
        return []
    lo, hi = min(start, stop), max(start, stop)
    step = _tick_step(lo, hi, count)
    first = math.ceil(lo / step)
    last = math.floor(hi / step)
    out = [round(i * step, 12) for i in range(first, last + 1)]
    return out if start <= stop else out[::-1]


_SI_PREFIXES = {
    -8: "y", -7: "z", -6: "a", -5: "f", -4: "p", -3: "n", -2: "µ", -1: "m",
    0: "", 1: "k", 2: "M", 3: "G", 4: "T", 5: "P", 6: "E", 7: "Z", 8: "Y",
}  # fmt: skip


def format_si(value: float, digits: int = 2) -> str:
    """Format with an SI prefix and `digits` significant digits (like d3 ".2s").

    Examples:
        >>> format_si(1_500_000)
        '1.5M'
        >>> format_si(0)
        '0.0'
    """
    if value == 0:
        return f"{0:.{max(digits - 1, 0)}f}"
    rounded = float(f"{value:.{digits}g}")
    exp3 = max(-8, min(8, math.floor(math.log10(abs(rounded)) / 3)))
    scaled = rounded / 10 ** (exp3 * 3)
    int_digits = len(str(int(abs(scaled)))) if abs(scaled) >= 1 else 1
    decimals = max(digits - int_digits, 0)
    return f"{scaled:.{decimals}f}{_SI_PREFIXES[exp3]}"
