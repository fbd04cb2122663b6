"""
Shared interaction state: one hover slot and one selection slot for every view.

InteractionState is a single observable cell. Any view may write either slot; every
subscriber is notified synchronously after each effective write. Writes are applied
immediately and in call order (last writer wins per slot); a write made by a listener
while a notification is being delivered is queued behind it, so no write is lost and
listeners observe changes in the order they happened.

A listener that raises does not stop delivery: every queued change still reaches
every listener, then the first error is re-raised to the writer.

Examples:
    >>> state = InteractionState()
    >>> seen = []
    >>> _ = state.subscribe(lambda change: seen.append(change.snapshot))
    >>> state.set_hovered("CA")
    >>> state.set_hovered("CA")  # idempotent: no second notification
    >>> [s.hovered for s in seen]
    ['CA']
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from linkedviews.core.typing import Key

__all__ = [
    "InteractionSnapshot",
    "InteractionChange",
    "InteractionState",
    "Listener",
]

logger = logging.getLogger(__name__)

Slot = Literal["hovered", "selected"]


@dataclass(frozen=True)
class InteractionSnapshot:
    """Immutable view of both slots at one instant."""

    hovered: Key | None = None
    selected: Key | None = None

    @property
    def active(self) -> Key | None:
        """The key that wins emphasis: selection is sticky, hover is transient."""
        return self.selected if self.selected is not None else self.hovered


@dataclass(frozen=True)
class InteractionChange:
    """One effective write: which slot changed, its previous value, and the resulting state."""

    slot: Slot
    previous: Key | None
    snapshot: InteractionSnapshot


Listener = Callable[[InteractionChange], None]


def _norm(key: str | None) -> Key | None:
    if key is None or key == "":
        return None
    return Key(str(key))


class InteractionState:
    """Process-wide hover/selection cell with synchronous publish/subscribe."""

    def __init__(self) -> None:
        self._hovered: Key | None = None
        self._selected: Key | None = None
        self._listeners: list[Listener] = []
        self._outbox: deque[InteractionChange] = deque()
        self._delivering = False

    # ---------- read ----------

    def get_hovered(self) -> Key | None:
        return self._hovered

    def get_selected(self) -> Key | None:
        return self._selected

    def snapshot(self) -> InteractionSnapshot:
        return InteractionSnapshot(hovered=self._hovered, selected=self._selected)

    # ---------- write ----------

    def set_hovered(self, key: str | None) -> None:
        new = _norm(key)
        if new == self._hovered:
            return
        previous, self._hovered = self._hovered, new
        self._publish(InteractionChange("hovered", previous, self.snapshot()))

    def set_selected(self, key: str | None) -> None:
        new = _norm(key)
        if new == self._selected:
            return
        previous, self._selected = self._selected, new
        self._publish(InteractionChange("selected", previous, self.snapshot()))

    def toggle_selected(self, key: str | None) -> None:
        """Select key, or clear the selection when key is already selected."""
        new = _norm(key)
        self.set_selected(None if new == self._selected else new)

    # ---------- subscribe ----------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _publish(self, change: InteractionChange) -> None:
        self._outbox.append(change)
        if self._delivering:
            # delivered by the outer loop after the current notification completes
            return
        self._delivering = True
        failure: Exception | None = None
        try:
            while self._outbox:
                current = self._outbox.popleft()
                logger.debug(
                    "interaction %s: %s -> %s",
                    current.slot,
                    current.previous,
                    getattr(current.snapshot, current.slot),
                )
                for listener in list(self._listeners):
                    try:
                        listener(current)
                    except Exception as e:
                        if failure is None:
                            failure = e
                        logger.exception("interaction listener %r failed", listener)
        finally:
            self._delivering = False
        if failure is not None:
            raise failure
