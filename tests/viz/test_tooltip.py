from __future__ import annotations

from linkedviews.core.schema import ViewSchema
from linkedviews.viz.tooltip import Tooltip, format_number, place_tooltip, tooltip_content

SCHEMA = ViewSchema(
    key_field="mark_id",
    x_field="cases",
    y_field="deaths",
    label_field="abbr",
    hidden_fields=("fips",),
)


def test_format_number_uses_locale_grouping() -> None:
    assert format_number(1234567) == "1,234,567"
    assert format_number(1234567.0) == "1,234,567"
    assert format_number(1234567, locale="de_DE") == "1.234.567"
    assert format_number(0) == "0"
    assert format_number(1234.5, locale="de_DE") == "1.234,5"
    assert format_number(0.25) == "0.25"


def test_content_lists_axes_then_other_fields_in_datum_order() -> None:
    datum = {
        "year": 2021,
        "mark_id": "CA:2021",
        "state": "California",
        "fips": "06",
        "abbr": "CA",
        "cases": 5000,
        "deaths": 70,
    }

    content = tooltip_content(datum, SCHEMA, x_label="Cases", y_label="Deaths")

    assert content.lines == (
        "Cases: 5,000",
        "Deaths: 70",
        "year: 2021",
        "state: California",
    )
    assert content.as_text().startswith("Cases: 5,000\n")


def test_content_falls_back_to_field_names() -> None:
    content = tooltip_content({"mark_id": "x", "cases": 1, "deaths": 2}, SCHEMA)
    assert content.header == ("cases: 1", "deaths: 2")
    assert content.extra == ()


def test_placement_offsets_then_flips_then_clamps() -> None:
    # plain offset
    assert place_tooltip((100, 100), (50, 20), (800, 600)) == (110.0, 90.0)
    # right-edge overflow flips to the left of the pointer
    assert place_tooltip((780, 100), (50, 20), (800, 600)) == (720.0, 90.0)
    # top edge clamps
    assert place_tooltip((100, 2), (50, 20), (800, 600)) == (110.0, 0.0)
    # box larger than the view pins to the origin
    assert place_tooltip((10, 10), (900, 700), (800, 600)) == (0.0, 0.0)


def test_tooltip_visibility_follows_show_and_hide() -> None:
    tip = Tooltip(SCHEMA, size=(50, 20))
    tip.bounds = (800, 600)

    tip.move((10, 10))
    assert tip.position is None

    tip.show({"mark_id": "CA:2021", "cases": 1, "deaths": 1}, (100, 100))
    assert tip.visible
    assert tip.position == (110.0, 90.0)
    tip.move((200, 200))
    assert tip.position == (210.0, 190.0)

    tip.hide()
    assert not tip.visible
    assert tip.content is None and tip.position is None
