"""
Tooltip content and placement.

Content: the two axis fields with locale-aware thousands separators, then every other
scalar field of the datum (identity, axis, label and hidden fields excluded) as a
``name: value`` line, in the datum's own field order.

Placement: anchored at pointer + TOOLTIP_OFFSET. If the box would overflow the right
edge it flips to the left of the pointer; the result is then clamped into the view
bounds on both axes. The same inputs always give the same position.

Visibility is tied to hover only: show() on pointer enter, hide() on leave. Nothing
is kept once hidden.
"""

from __future__ import annotations

from dataclasses import dataclass

from linkedviews.core.constants import TOOLTIP_OFFSET
from linkedviews.core.schema import ViewSchema
from linkedviews.core.typing import Datum, Point

__all__ = [
    "TooltipContent",
    "Tooltip",
    "format_number",
    "tooltip_content",
    "place_tooltip",
]


# (grouping, decimal) per language; unknown languages use the "en" pair
_SEPARATORS: dict[str, tuple[str, str]] = {
    "en": (",", "."),
    "de": (".", ","),
    "es": (".", ","),
    "it": (".", ","),
    "nl": (".", ","),
    "fr": (" ", ","),
}


def format_number(value: float, locale: str = "en_US") -> str:
    """Format a number with the locale's grouping and decimal symbols.

    Integral values print without decimals, others with at most two.

    Examples:
        >>> format_number(1234567)
        '1,234,567'
        >>> format_number(1234567, locale="de_DE")
        '1.234.567'
    """
    value = float(value)
    if value.is_integer():
        text = f"{int(value):,}"
    else:
        text = f"{value:,.2f}".rstrip("0").rstrip(".")
    group, decimal = _SEPARATORS.get(locale.split("_")[0].lower(), _SEPARATORS["en"])
    return text.translate(str.maketrans({",": group, ".": decimal}))


@dataclass(frozen=True)
class TooltipContent:
    header: tuple[str, ...]
    extra: tuple[str, ...]

    @property
    def lines(self) -> tuple[str, ...]:
        return self.header + self.extra

    def as_text(self) -> str:
        return "\n".join(self.lines)


def tooltip_content(
    datum: Datum,
    schema: ViewSchema,
    *,
    x_label: str | None = None,
    y_label: str | None = None,
    locale: str = "en_US",
) -> TooltipContent:
    header = (
        f"{x_label or schema.x_field}: {format_number(schema.x_of(datum), locale)}",
        f"{y_label or schema.y_field}: {format_number(schema.y_of(datum), locale)}",
    )
    extra = tuple(f"{name}: {value}" for name, value in schema.extra_fields(datum))
    return TooltipContent(header=header, extra=extra)


def place_tooltip(
    pointer: Point,
    size: tuple[float, float],
    bounds: tuple[float, float],
    offset: tuple[float, float] = TOOLTIP_OFFSET,
) -> Point:
    """Return the top-left corner of the tooltip box.

    Args:
        pointer (Point): Pointer position, screen-relative.
        size (tuple[float, float]): Tooltip (width, height).
        bounds (tuple[float, float]): Visible area (width, height).
        offset (tuple[float, float]): Anchor offset from the pointer.

    Examples:
        >>> place_tooltip((100, 100), (50, 20), (800, 600))
        (110.0, 90.0)
        >>> place_tooltip((790, 5), (50, 20), (800, 600))
        (730.0, 0.0)
    """
    px, py = pointer
    w, h = size
    bw, bh = bounds
    dx, dy = offset
    left = px + dx
    if left + w > bw:
        left = px - dx - w
    top = py + dy
    left = min(max(left, 0.0), max(bw - w, 0.0))
    top = min(max(top, 0.0), max(bh - h, 0.0))
    return (float(left), float(top))


class Tooltip:
    """Per-view overlay state driven by pointer callbacks."""

    def __init__(
        self,
        schema: ViewSchema,
        *,
        x_label: str | None = None,
        y_label: str | None = None,
        locale: str = "en_US",
        size: tuple[float, float] = (180.0, 60.0),
    ) -> None:
        self.schema = schema
        self.x_label = x_label
        self.y_label = y_label
        self.locale = locale
        self.size = size
        self.bounds: tuple[float, float] = (0.0, 0.0)
        self.visible = False
        self.content: TooltipContent | None = None
        self.position: Point | None = None

    def show(self, datum: Datum, pointer: Point) -> None:
        self.content = tooltip_content(
            datum, self.schema, x_label=self.x_label, y_label=self.y_label, locale=self.locale
        )
        self.visible = True
        self.move(pointer)

    def move(self, pointer: Point) -> None:
        if self.visible:
            self.position = place_tooltip(pointer, self.size, self.bounds)

    def hide(self) -> None:
        self.visible = False
        self.content = None
        self.position = None
