from __future__ import annotations

import pytest
from pydantic import ValidationError

from linkedviews.core.errors import SchemaError
from linkedviews.core.schema import ViewSchema, coerce_number


def _schema(**kw) -> ViewSchema:
    base = {"key_field": "abbr", "x_field": "cases", "y_field": "deaths"}
    base.update(kw)
    return ViewSchema(**base)


def test_coerce_number_degrades_to_zero() -> None:
    assert coerce_number("1,234") == 1234.0
    assert coerce_number(7) == 7.0
    assert coerce_number(None) == 0.0
    assert coerce_number("n/a") == 0.0
    assert coerce_number(float("nan")) == 0.0
    assert coerce_number(float("inf")) == 0.0
    assert coerce_number([1]) == 0.0


def test_axis_fields_must_differ() -> None:
    # pydantic wraps validator errors; the SchemaError message survives
    with pytest.raises((SchemaError, ValidationError), match="must differ"):
        _schema(y_field="cases")


def test_key_cannot_be_an_axis() -> None:
    with pytest.raises((SchemaError, ValidationError), match="cannot also be an axis"):
        _schema(key_field="cases")


def test_accessors_use_declared_roles() -> None:
    s = _schema(label_field="state")
    d = {"abbr": "CA", "cases": "10", "deaths": None, "state": "California"}

    assert s.key_of(d) == "CA"
    assert s.x_of(d) == 10.0
    assert s.y_of(d) == 0.0
    assert s.label_of(d) == "California"
    assert s.key_of({}) == ""
    assert _schema().label_of(d) == ""


def test_link_of_defaults_to_key_and_follows_link_field() -> None:
    d = {"mark_id": "CA:2021", "abbr": "CA", "cases": 1, "deaths": 1}

    assert _schema(key_field="mark_id").link_of(d) == "CA:2021"
    assert _schema(key_field="mark_id", link_field="abbr").link_of(d) == "CA"


def test_color_field_defaults_to_key() -> None:
    d = {"abbr": "TX", "year": 2021, "cases": 1, "deaths": 1}

    assert _schema().color_key_of(d) == "TX"
    assert _schema(color_field="year").color_key_of(d) == "2021"


def test_extra_fields_skip_reserved_and_keep_datum_order() -> None:
    s = _schema(
        key_field="mark_id",
        label_field="abbr",
        link_field="abbr",
        hidden_fields=("fips",),
    )
    d = {
        "year": 2021,
        "mark_id": "CA:2021",
        "state": "California",
        "fips": "06",
        "abbr": "CA",
        "cases": 5,
        "deaths": 1,
        "nested": {"a": 1},
    }

    assert s.extra_fields(d) == [("year", 2021), ("state", "California")]


def test_schema_is_frozen_and_hashable() -> None:
    s = _schema()
    assert hash(s) == hash(_schema())
    with pytest.raises(ValidationError):
        s.x_field = "other"  # type: ignore[misc]
