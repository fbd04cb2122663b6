"""
Pydantic v2 model for the declared schema of a view instantiation.

A view never looks fields up by ad-hoc strings: it declares which field is the
identity key, which two numeric fields position a mark, which field labels it and
which fields are bookkeeping that tooltips must skip. All field access in the core
goes through ViewSchema accessors.

Responsibilities
- Validate role assignments (distinct axis fields, key not reused as an axis).
- Provide key_of / numeric / label_of accessors with graceful coercion.
- Select the "additional fields" shown by tooltips, in datum declaration order.

Style
- Zero-IO (stdlib + pydantic only).
- Numeric coercion never raises: missing, None, NaN and non-numeric values become 0.0.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import SchemaError
from .typing import Datum, Key

__all__ = [
    "ViewSchema",
    "coerce_number",
    "is_scalar",
]


def coerce_number(value: Any) -> float:
    """Coerce a raw field value to float, degrading to 0.0 instead of raising.

    Args:
        value (Any): Raw field value (number, numeric string, None, anything else).

    Returns:
        float: Parsed finite value, or 0.0 for missing / non-numeric / non-finite input.

    Examples:
        >>> coerce_number("12.5"), coerce_number(None), coerce_number("n/a")
        (12.5, 0.0, 0.0)
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, Real):
        out = float(value)
    elif isinstance(value, str):
        try:
            out = float(value.strip().replace(",", ""))
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(out):
        return 0.0
    return out


def is_scalar(value: Any) -> bool:
    """Return True for values a tooltip can print on one line."""
    return value is None or isinstance(value, (str, int, float, bool))


class ViewSchema(BaseModel):
    """
    Field roles for one view instantiation.

    Attributes:
        key_field (str): Identity field; stable and unique within a dataset snapshot.
        x_field (str): Numeric field mapped to the horizontal axis.
        y_field (str): Numeric field mapped to the vertical axis.
        label_field (str | None): Optional text label field (defaults to none).
        color_field (str | None): Categorical field used for colour (defaults to key_field).
        link_field (str | None): Field compared with the shared hover/selection keys
            (defaults to key_field). Lets several marks of one view share a linked entity.
        hidden_fields (tuple[str, ...]): Bookkeeping fields never shown in tooltips.

    Notes:
        - Instances are frozen and hashable so that views can be compared cheaply.
        - Identity uniqueness is a precondition of the dataset, not checked here.

    Examples:
        >>> s = ViewSchema(key_field="abbr", x_field="cases", y_field="deaths")
        >>> s.numeric({"cases": "7"}, "cases")
        7.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key_field: str
    x_field: str
    y_field: str
    label_field: str | None = None
    color_field: str | None = None
    link_field: str | None = None
    hidden_fields: tuple[str, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _check_roles(self) -> ViewSchema:
        if self.x_field == self.y_field:
            raise SchemaError("x_field and y_field must differ")
        if self.key_field in (self.x_field, self.y_field):
            raise SchemaError(f"key_field {self.key_field!r} cannot also be an axis field")
        return self

    @property
    def effective_color_field(self) -> str:
        return self.color_field or self.key_field

    def key_of(self, datum: Datum) -> Key:
        """Return the identity key of a datum as a string ('' when missing)."""
        value = datum.get(self.key_field)
        return Key("" if value is None else str(value))

    def link_of(self, datum: Datum) -> Key:
        """Return the key matched against the shared interaction state."""
        if self.link_field is None:
            return self.key_of(datum)
        value = datum.get(self.link_field)
        return Key("" if value is None else str(value))

    def color_key_of(self, datum: Datum) -> str:
        value = datum.get(self.effective_color_field)
        return "" if value is None else str(value)

    def numeric(self, datum: Datum, field: str) -> float:
        return coerce_number(datum.get(field))

    def x_of(self, datum: Datum) -> float:
        return self.numeric(datum, self.x_field)

    def y_of(self, datum: Datum) -> float:
        return self.numeric(datum, self.y_field)

    def label_of(self, datum: Datum) -> str:
        if self.label_field is None:
            return ""
        value = datum.get(self.label_field)
        return "" if value is None else str(value)

    def reserved_fields(self) -> frozenset[str]:
        """Fields excluded from the tooltip "additional fields" block."""
        names = {self.key_field, self.x_field, self.y_field, *self.hidden_fields}
        if self.label_field:
            names.add(self.label_field)
        if self.color_field:
            names.add(self.color_field)
        if self.link_field:
            names.add(self.link_field)
        return frozenset(names)

    def extra_fields(self, datum: Datum) -> list[tuple[str, Any]]:
        """Return (name, value) pairs for every other scalar field, in declaration order."""
        reserved = self.reserved_fields()
        return [
            (name, value)
            for name, value in datum.items()
            if name not in reserved and is_scalar(value)
        ]
