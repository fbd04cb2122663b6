from __future__ import annotations

import pytest

from linkedviews.core.constants import FALLBACK_COLOR, MAP_DIM_OPACITY, MAP_GLOW_FILTER
from linkedviews.geo.projector import GeometryProjector
from linkedviews.scene.timer import FrameScheduler
from linkedviews.viz.interaction import InteractionState
from linkedviews.viz.palette import state_color_table
from linkedviews.views.choropleth import ChoroplethView


def _map(projector: GeometryProjector, **kw) -> tuple[InteractionState, ChoroplethView]:
    state = InteractionState()
    view = ChoroplethView(projector, state, FrameScheduler(), colors=state_color_table(), **kw)
    return state, view


def test_one_mark_per_feature_with_unknown_ids_kept(projector: GeometryProjector) -> None:
    _, view = _map(projector, width=300, height=100)

    result = view.render()

    assert result is not None
    assert result.entered == ("CA", "TX", "id:99")
    assert view.engine.mark("id:99").target.fill == FALLBACK_COLOR
    assert view.engine.mark("CA").target.fill == state_color_table().color_for("CA")
    assert view.engine.mark("CA").target.path.startswith("M")


def test_labels_only_for_known_regions(projector: GeometryProjector) -> None:
    _, view = _map(projector, width=300, height=100)
    view.render()

    labels = {lb.text: lb.position for lb in view.labels()}

    assert set(labels) == {"CA", "TX"}
    assert labels["CA"] == pytest.approx((100.0, 50.0))


def test_zero_viewport_defers(projector: GeometryProjector) -> None:
    _, view = _map(projector)

    assert view.render() is None
    assert view.deferred
    assert view.labels() == []

    assert view.resize(300, 100) is not None
    assert not view.deferred


def test_hover_highlights_region_and_places_name_tooltip(projector: GeometryProjector) -> None:
    state, view = _map(projector, width=300, height=100)
    view.render()

    view.scene.pointer_move(100, 50)

    assert state.get_hovered() == "CA"
    assert view.tooltip_text == "California"
    assert view.tooltip_position == (100.0, 40.0)
    assert view.engine.mark("CA").target.filter == MAP_GLOW_FILTER
    assert view.engine.mark("TX").target.opacity == MAP_DIM_OPACITY

    view.scene.pointer_move(500, 500)
    assert state.get_hovered() is None
    assert view.tooltip_text is None


def test_click_toggles_selection(projector: GeometryProjector) -> None:
    state, view = _map(projector, width=300, height=100)
    view.render()

    view.scene.click(200, 50)
    assert state.get_selected() == "TX"
    assert view.engine.mark("TX").target.stroke is not None

    view.scene.click(200, 50)
    assert state.get_selected() is None


def test_resize_refits_and_keeps_marks(projector: GeometryProjector) -> None:
    state, view = _map(projector, width=300, height=100)
    view.render()
    ca = view.engine.mark("CA")

    result = view.resize(600, 200)

    assert result.entered == ()
    assert result.updated == ("CA", "TX", "id:99")
    assert view.engine.mark("CA") is ca
    # hit areas follow the new fit
    view.scene.pointer_move(150, 150)
    assert state.get_hovered() == "CA"


def test_close_detaches(projector: GeometryProjector) -> None:
    state, view = _map(projector, width=300, height=100)
    view.render()

    view.close()
    state.set_selected("CA")

    assert len(view.scene) == 0
