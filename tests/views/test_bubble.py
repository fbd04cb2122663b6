from __future__ import annotations

import pytest

from linkedviews.core.constants import DIM_OPACITY, LARGE_RADIUS
from linkedviews.core.schema import ViewSchema
from linkedviews.scene.timer import FrameScheduler
from linkedviews.viz.interaction import InteractionState
from linkedviews.viz.palette import ColorTable
from linkedviews.views.bubble import LABEL_OFFSET, BubbleChartView

SCHEMA = ViewSchema(key_field="abbr", x_field="cases", y_field="deaths", label_field="abbr")
DATA = [
    {"abbr": "CA", "cases": 100, "deaths": 10, "state": "California"},
    {"abbr": "TX", "cases": 50, "deaths": 5, "state": "Texas"},
]


def _view(state: InteractionState | None = None, **kw) -> tuple[FrameScheduler, BubbleChartView]:
    s = FrameScheduler()
    view = BubbleChartView(
        SCHEMA,
        state or InteractionState(),
        s,
        colors=ColorTable({"CA": "#ff0000", "TX": "#0000ff"}),
        **kw,
    )
    return s, view


def _centre(view: BubbleChartView, key: str) -> tuple[float, float]:
    mark = view.engine.mark(key)
    assert mark is not None
    return mark.target.cx, mark.target.cy


def test_zero_size_defers_until_resize() -> None:
    s, view = _view()

    assert view.set_data(DATA) is None
    assert view.deferred
    assert len(view.engine) == 0

    result = view.resize(400, 300)
    s.flush()

    assert not view.deferred
    assert result is not None and result.entered == ("CA", "TX")


def test_marks_are_positioned_inside_margins() -> None:
    s, view = _view(width=400, height=300)

    view.set_data(DATA)
    s.flush()

    # inner 320x220 offset by (left=60, top=20); CA holds both maxima
    assert _centre(view, "CA") == pytest.approx((380.0, 20.0))
    assert view.engine.mark("CA").target.fill == "#ff0000"


def test_hover_writes_shared_state_and_shows_tooltip() -> None:
    # Arrange
    s, view = _view(width=400, height=300)
    view.set_data(DATA)
    s.flush()
    cx, cy = _centre(view, "CA")

    # Act
    view.scene.pointer_move(cx, cy)

    # Assert
    assert view.state.get_hovered() == "CA"
    assert view.tooltip.visible
    assert view.tooltip.content.header == ("cases: 100", "deaths: 10")
    assert view.tooltip.content.extra == ("state: California",)
    # right-edge overflow flips the box left of the pointer
    assert view.tooltip.position == (cx - 10 - 180, cy - 10)
    assert view.engine.mark("TX").target.opacity == DIM_OPACITY

    view.scene.pointer_move(0, 0)
    assert view.state.get_hovered() is None
    assert not view.tooltip.visible
    assert view.engine.mark("TX").target.opacity == 1.0


def test_click_toggles_selection() -> None:
    s, view = _view(width=400, height=300)
    view.set_data(DATA)
    s.flush()
    cx, cy = _centre(view, "TX")

    view.scene.click(cx, cy)
    assert view.state.get_selected() == "TX"
    assert view.engine.mark("TX").target.radius == LARGE_RADIUS

    view.scene.click(cx, cy)
    assert view.state.get_selected() is None


def test_state_written_elsewhere_restyles_this_view() -> None:
    state = InteractionState()
    s, view = _view(state, width=400, height=300)
    view.set_data(DATA)
    s.flush()

    state.set_selected("CA")

    assert view.engine.mark("CA").target.radius == LARGE_RADIUS
    assert view.engine.mark("TX").target.opacity == DIM_OPACITY


def test_new_data_keeps_current_emphasis() -> None:
    state = InteractionState()
    state.set_selected("TX")
    s, view = _view(state, width=400, height=300)

    view.set_data(DATA)

    assert view.engine.mark("TX").target.radius == LARGE_RADIUS


def test_axis_ticks_and_degenerate_axes() -> None:
    s, view = _view(width=400, height=300)
    view.set_data(DATA)

    xt, yt = view.axis_ticks(5)
    assert [t.label for t in xt] == ["0.0", "20", "40", "60", "80", "100"]
    assert xt[-1].position == pytest.approx(380.0)
    assert yt[-1].position == pytest.approx(20.0)

    view.set_data([{"abbr": "CA", "cases": 0, "deaths": 0}])
    assert view.axis_ticks() == ([], [])


def test_labels_sit_below_bubbles() -> None:
    s, view = _view(width=400, height=300, show_labels=True)
    view.set_data(DATA)

    labels = {lb.text: lb.position for lb in view.labels()}

    cx, cy = _centre(view, "CA")
    assert labels["CA"] == (cx, cy + LABEL_OFFSET)


def test_close_detaches_from_state() -> None:
    state = InteractionState()
    s, view = _view(state, width=400, height=300)
    view.set_data(DATA)

    view.close()
    state.set_hovered("CA")

    assert len(view.engine) == 0
    assert len(view.scene) == 0


def test_removing_the_hovered_mark_clears_hover_and_tooltip() -> None:
    # Arrange: pointer rests on CA
    s, view = _view(width=400, height=300)
    view.set_data(DATA)
    s.flush()
    view.scene.pointer_move(*_centre(view, "CA"))
    assert view.state.get_hovered() == "CA"

    # Act: CA leaves the dataset and its exit completes without pointer movement
    view.set_data([DATA[1]])
    s.flush()

    # Assert
    assert view.engine.mark("CA") is None
    assert view.state.get_hovered() is None
    assert not view.tooltip.visible
    assert view.engine.mark("TX").target.opacity == 1.0
