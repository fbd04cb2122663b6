from __future__ import annotations

from linkedviews.core.schema import ViewSchema
from linkedviews.core.typing import Datum
from linkedviews.scene.graph import SceneGraph, VisualAttributes
from linkedviews.scene.timer import FrameScheduler
from linkedviews.viz.interaction import InteractionSnapshot
from linkedviews.viz.reconcile import MarkCallbacks, Phase, Reconciler, Timings

SCHEMA = ViewSchema(key_field="abbr", x_field="x", y_field="y")
IDLE = InteractionSnapshot()


def _encoder(datum: Datum, state: InteractionSnapshot) -> VisualAttributes:
    active = state.active
    opacity = 1.0 if active is None or active == datum["abbr"] else 0.15
    return VisualAttributes(
        cx=float(datum["x"]), cy=float(datum["y"]), radius=8.0, opacity=opacity
    )


def _engine(
    callbacks: MarkCallbacks | None = None,
) -> tuple[FrameScheduler, SceneGraph, Reconciler]:
    s = FrameScheduler()
    g = SceneGraph(s, 500, 500)
    return s, g, Reconciler(g, s, SCHEMA.key_of, callbacks, Timings(200, 200, 400))


def _rows(*keys: str, x: float = 10.0) -> list[dict]:
    return [{"abbr": k, "x": x + i * 50, "y": 10.0} for i, k in enumerate(keys)]


def test_enter_starts_collapsed_and_settles_to_steady() -> None:
    s, g, engine = _engine()

    result = engine.reconcile(_rows("CA", "TX"), _encoder, IDLE)

    assert result.entered == ("CA", "TX")
    mark = engine.mark("CA")
    assert mark is not None and mark.phase is Phase.ENTERING
    assert mark.node.attrs.radius == 0.0 and mark.node.attrs.opacity == 0.0
    s.advance(200)
    assert mark.phase is Phase.STEADY
    assert mark.node.attrs.radius == 8.0
    assert len(g) == 2


def test_update_reuses_the_same_mark_and_node() -> None:
    s, _, engine = _engine()
    engine.reconcile(_rows("CA"), _encoder, IDLE)
    s.flush()
    before = engine.mark("CA")

    result = engine.reconcile(_rows("CA", x=100.0), _encoder, IDLE)
    s.advance(200)

    after = engine.mark("CA")
    assert result.updated == ("CA",)
    assert after is before
    assert after.node.attrs.cx == 100.0


def test_exit_collapses_then_destroys() -> None:
    s, g, engine = _engine()
    engine.reconcile(_rows("CA", "TX"), _encoder, IDLE)
    s.flush()

    result = engine.reconcile(_rows("CA"), _encoder, IDLE)

    assert result.exited == ("TX",)
    tx = engine.mark("TX")
    assert tx is not None and tx.phase is Phase.EXITING
    assert not tx.node.interactive
    assert [m.key for m in engine.live_marks()] == ["CA"]
    s.advance(399)
    assert engine.mark("TX") is not None
    s.advance(1)
    assert engine.mark("TX") is None
    assert len(g) == 1


def test_reentering_key_cancels_exit_and_keeps_node() -> None:
    s, g, engine = _engine()
    engine.reconcile(_rows("CA", "TX"), _encoder, IDLE)
    s.flush()
    engine.reconcile(_rows("CA"), _encoder, IDLE)
    s.advance(100)
    exiting = engine.mark("TX")

    result = engine.reconcile(_rows("CA", "TX"), _encoder, IDLE)
    s.advance(200)

    assert result.revived == ("TX",)
    assert result.updated == ("CA", "TX")
    assert engine.mark("TX") is exiting
    assert exiting.phase is Phase.STEADY
    assert exiting.node.interactive
    assert exiting.node.attrs.radius == 8.0
    assert len(g) == 2


def test_rapid_updates_never_duplicate_marks() -> None:
    s, g, engine = _engine()
    for keys in (("CA",), ("CA", "TX"), ("TX",), ("CA", "TX", "NY"), ("NY",)):
        engine.reconcile(_rows(*keys), _encoder, IDLE)
        s.advance(50)

    assert [m.key for m in engine.live_marks()] == ["NY"]
    assert len({id(n) for n in g.nodes()}) == len(g)
    s.flush()
    assert len(g) == 1


def test_duplicate_keys_keep_first_datum() -> None:
    _, _, engine = _engine()
    rows = [{"abbr": "CA", "x": 1, "y": 1}, {"abbr": "CA", "x": 2, "y": 2}]

    result = engine.reconcile(rows, _encoder, IDLE)

    assert result.entered == ("CA",)
    assert engine.mark("CA").datum["x"] == 1


def test_restyle_updates_targets_without_reentering() -> None:
    s, _, engine = _engine()
    engine.reconcile(_rows("CA", "TX"), _encoder, IDLE)
    s.flush()

    engine.restyle(InteractionSnapshot(hovered="CA"))

    assert engine.mark("CA").target.opacity == 1.0
    assert engine.mark("TX").target.opacity == 0.15
    # settled marks change immediately
    assert engine.mark("TX").node.attrs.opacity == 0.15


def test_restyle_during_entry_folds_into_running_animation() -> None:
    s, _, engine = _engine()
    engine.reconcile(_rows("CA", "TX"), _encoder, IDLE)
    s.advance(50)

    engine.restyle(InteractionSnapshot(hovered="CA"))

    tx = engine.mark("TX")
    assert tx.phase is Phase.ENTERING
    assert tx.node.remaining_ms() == 150.0
    s.advance(150)
    assert tx.node.attrs == tx.target
    assert tx.node.attrs.opacity == 0.15


def test_exiting_marks_only_receive_leave() -> None:
    # Arrange
    events: list[tuple[str, str]] = []
    callbacks = MarkCallbacks(
        on_enter=lambda d, p: events.append(("enter", d["abbr"])),
        on_leave=lambda d, p: events.append(("leave", d["abbr"])),
        on_click=lambda d, p: events.append(("click", d["abbr"])),
    )
    s, g, engine = _engine(callbacks)
    engine.reconcile(_rows("CA"), _encoder, IDLE)
    s.flush()
    g.pointer_move(10, 10)

    # Act: CA starts exiting while the pointer is over it
    engine.reconcile([], _encoder, IDLE)
    engine.mark("CA").node.emit("click", 10, 10)
    g.pointer_move(300, 300)

    # Assert
    assert events == [("enter", "CA"), ("leave", "CA")]


def test_clear_destroys_everything() -> None:
    s, g, engine = _engine()
    engine.reconcile(_rows("CA", "TX"), _encoder, IDLE)

    engine.clear()
    s.flush()

    assert len(engine) == 0
    assert len(g) == 0
