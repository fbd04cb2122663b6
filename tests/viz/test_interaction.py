from __future__ import annotations

import pytest

from linkedviews.viz.interaction import InteractionChange, InteractionState


def test_writes_notify_every_subscriber_once() -> None:
    state = InteractionState()
    a: list[InteractionChange] = []
    b: list[InteractionChange] = []
    state.subscribe(a.append)
    state.subscribe(b.append)

    state.set_hovered("CA")
    state.set_hovered("CA")

    assert len(a) == len(b) == 1
    assert a[0].slot == "hovered"
    assert a[0].previous is None
    assert a[0].snapshot.hovered == "CA"


def test_empty_string_clears_a_slot() -> None:
    state = InteractionState()
    state.set_selected("TX")
    state.set_selected("")
    assert state.get_selected() is None


def test_toggle_selected_clears_when_repeated() -> None:
    state = InteractionState()

    state.toggle_selected("NY")
    assert state.get_selected() == "NY"
    state.toggle_selected("CA")
    assert state.get_selected() == "CA"
    state.toggle_selected("CA")
    assert state.get_selected() is None


def test_selection_beats_hover_for_active_key() -> None:
    state = InteractionState()
    state.set_hovered("CA")
    assert state.snapshot().active == "CA"
    state.set_selected("TX")
    assert state.snapshot().active == "TX"


def test_unsubscribe_stops_notifications() -> None:
    state = InteractionState()
    seen: list[InteractionChange] = []
    unsubscribe = state.subscribe(seen.append)

    unsubscribe()
    unsubscribe()
    state.set_hovered("CA")

    assert seen == []


def test_writes_from_listeners_are_queued_in_order() -> None:
    # Arrange: a listener that reacts to a hover by selecting the same key
    state = InteractionState()
    log: list[tuple[str, str | None, str | None]] = []

    def echo(change: InteractionChange) -> None:
        if change.slot == "hovered" and change.snapshot.hovered is not None:
            state.set_selected(change.snapshot.hovered)

    def record(change: InteractionChange) -> None:
        log.append((change.slot, change.snapshot.hovered, change.snapshot.selected))

    state.subscribe(echo)
    state.subscribe(record)

    # Act
    state.set_hovered("CA")

    # Assert: every listener saw the hover before anyone saw the selection
    assert log == [("hovered", "CA", None), ("selected", "CA", "CA")]
    assert state.get_selected() == "CA"


def test_last_writer_wins_per_slot() -> None:
    state = InteractionState()
    state.set_hovered("CA")
    state.set_hovered("TX")
    state.set_hovered(None)
    assert state.get_hovered() is None


def test_failing_listener_does_not_drop_queued_changes() -> None:
    # Arrange: the first listener queues a selection, then raises
    state = InteractionState()
    seen: list[tuple[str, str | None]] = []

    def chain_then_fail(change: InteractionChange) -> None:
        if change.slot == "hovered" and change.snapshot.hovered == "CA":
            state.set_selected("CA")
            raise RuntimeError("listener broke")

    state.subscribe(chain_then_fail)
    state.subscribe(lambda c: seen.append((c.slot, getattr(c.snapshot, c.slot))))

    # Act
    with pytest.raises(RuntimeError, match="listener broke"):
        state.set_hovered("CA")

    # Assert: both changes reached the other subscriber, and the cell still works
    assert seen == [("hovered", "CA"), ("selected", "CA")]
    state.set_hovered(None)
    assert seen[-1] == ("hovered", None)
