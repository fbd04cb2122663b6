"""
Keyed reconciliation engine: enter/update/exit diffing with cancellable animations.

Each view owns one Reconciler. It keeps an explicit map key -> Mark, where a Mark
carries the bound datum, its lifecycle phase, the substrate node it drives and the
timer that ends its current lifecycle transition.

Lifecycle per key::

    absent -> entering -> steady -> exiting -> absent
                  ^                    |
                  +---- re-entered ----+   (exit cancelled, promoted to steady)

Responsibilities
- reconcile(dataset, encoder, state): diff the current marks (including in-flight
  entering/exiting ones) against a full replacement dataset.
- Keep the same Mark and node for every key that persists; never recreate them.
- restyle(state): re-run the encoder on live marks after an interaction change.

Notes
- Entering marks start at radius 0 / opacity 0 at their target position.
- Exiting marks animate radius and opacity to 0 and are destroyed when the exit
  timer fires; from the moment they start exiting they only receive leave events.
- Only one pass runs at a time: passes are synchronous on the event loop.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol

from linkedviews.core.constants import ENTER_MS, EXIT_MS, UPDATE_MS
from linkedviews.core.typing import Dataset, Datum, Key, Point
from linkedviews.scene.graph import VisualAttributes
from linkedviews.scene.timer import FrameScheduler, TimerHandle

from .interaction import InteractionSnapshot

__all__ = [
    "Phase",
    "Timings",
    "Mark",
    "MarkCallbacks",
    "JoinResult",
    "MarkNode",
    "Substrate",
    "Encoder",
    "Reconciler",
]

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    ENTERING = "entering"
    STEADY = "steady"
    EXITING = "exiting"


@dataclass(frozen=True)
class Timings:
    """Transition durations in milliseconds."""

    enter_ms: float = ENTER_MS
    update_ms: float = UPDATE_MS
    exit_ms: float = EXIT_MS


class MarkNode(Protocol):
    """What the engine needs from one rendered element."""

    interactive: bool

    def update_to(self, target: VisualAttributes, duration_ms: float) -> None: ...

    def remaining_ms(self) -> float: ...

    def on(self, kind: str, handler: Callable[[float, float], None] | None) -> None: ...

    def destroy(self) -> None: ...


class Substrate(Protocol):
    def create(self, initial: VisualAttributes) -> MarkNode: ...


PointerCallback = Callable[[Datum, Point], None]
Encoder = Callable[[Datum, InteractionSnapshot], VisualAttributes]


@dataclass(frozen=True)
class MarkCallbacks:
    """Pointer callbacks registered on every mark; each receives the bound datum."""

    on_enter: PointerCallback | None = None
    on_move: PointerCallback | None = None
    on_leave: PointerCallback | None = None
    on_click: PointerCallback | None = None


@dataclass(eq=False)
class Mark:
    """Persistent visual element for one identity key."""

    key: Key
    datum: Datum
    phase: Phase
    node: MarkNode
    target: VisualAttributes
    timer: TimerHandle | None = None

    def cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None


@dataclass(frozen=True)
class JoinResult:
    """Keys per join group for one pass (in dataset order; exits in previous order)."""

    entered: tuple[Key, ...] = ()
    updated: tuple[Key, ...] = ()
    exited: tuple[Key, ...] = ()
    revived: tuple[Key, ...] = ()


def _collapsed(attrs: VisualAttributes) -> VisualAttributes:
    return replace(attrs, radius=0.0, opacity=0.0)


class Reconciler:
    """Owns every mark of one view for its whole lifetime.

    Args:
        substrate (Substrate): Creates nodes (e.g., a SceneGraph).
        scheduler (FrameScheduler): Clock/timer primitive for lifecycle transitions.
        key_of (Callable[[Datum], Key]): Identity accessor (ViewSchema.key_of).
        callbacks (MarkCallbacks | None): Pointer callbacks bound on each created mark.
        timings (Timings): Enter/update/exit durations.
    """

    def __init__(
        self,
        substrate: Substrate,
        scheduler: FrameScheduler,
        key_of: Callable[[Datum], Key],
        callbacks: MarkCallbacks | None = None,
        timings: Timings = Timings(),
    ) -> None:
        self.substrate = substrate
        self.scheduler = scheduler
        self.key_of = key_of
        self.callbacks = callbacks or MarkCallbacks()
        self.timings = timings
        self._marks: dict[Key, Mark] = {}
        self._order: list[Key] = []
        self._encoder: Encoder | None = None

    # ---------- queries ----------

    def mark(self, key: str) -> Mark | None:
        return self._marks.get(Key(key))

    def live_marks(self) -> list[Mark]:
        """Marks bound to the current dataset, in dataset order."""
        return [self._marks[k] for k in self._order if k in self._marks]

    def all_marks(self) -> list[Mark]:
        """Live marks followed by marks still exiting."""
        live = self.live_marks()
        exiting = [m for m in self._marks.values() if m.phase is Phase.EXITING]
        return live + exiting

    def __len__(self) -> int:
        return len(self._marks)

    # ---------- passes ----------

    def reconcile(
        self, dataset: Dataset, encoder: Encoder, state: InteractionSnapshot
    ) -> JoinResult:
        """Bind a full replacement dataset to marks and start the transitions."""
        self._encoder = encoder
        entered: list[Key] = []
        updated: list[Key] = []
        revived: list[Key] = []
        order: list[Key] = []
        seen: set[Key] = set()

        for datum in dataset:
            key = self.key_of(datum)
            if key in seen:
                # identity uniqueness is a caller precondition; first datum wins
                logger.debug("duplicate key %r ignored in reconcile", key)
                continue
            seen.add(key)
            order.append(key)
            target = encoder(datum, state)
            mark = self._marks.get(key)
            if mark is None:
                self._enter(key, datum, target)
                entered.append(key)
                continue
            if mark.phase is Phase.EXITING:
                revived.append(key)
                logger.debug("exit of %r cancelled; mark promoted to steady", key)
            mark.cancel_timer()
            mark.datum = datum
            mark.phase = Phase.STEADY
            mark.target = target
            mark.node.interactive = True
            mark.node.update_to(target, self.timings.update_ms)
            updated.append(key)

        exited: list[Key] = []
        for key, mark in list(self._marks.items()):
            if key in seen or mark.phase is Phase.EXITING:
                continue
            self._exit(mark)
            exited.append(key)

        self._order = order
        logger.debug(
            "reconcile: +%d ~%d -%d (revived %d, tracked %d)",
            len(entered),
            len(updated),
            len(exited),
            len(revived),
            len(self._marks),
        )
        return JoinResult(tuple(entered), tuple(updated), tuple(exited), tuple(revived))

    def restyle(self, state: InteractionSnapshot) -> None:
        """Re-evaluate the encoder for live marks after an interaction change.

        Marks still entering keep their remaining entry time so the change folds
        into the running animation; settled marks change immediately.
        """
        if self._encoder is None:
            return
        for mark in self.live_marks():
            target = self._encoder(mark.datum, state)
            if target == mark.target:
                continue
            mark.target = target
            mark.node.update_to(target, mark.node.remaining_ms())

    def clear(self) -> None:
        """Destroy every mark immediately (view teardown)."""
        for mark in self._marks.values():
            mark.cancel_timer()
            mark.node.destroy()
        self._marks.clear()
        self._order = []

    # ---------- lifecycle transitions ----------

    def _enter(self, key: Key, datum: Datum, target: VisualAttributes) -> None:
        node = self.substrate.create(_collapsed(target))
        mark = Mark(key=key, datum=datum, phase=Phase.ENTERING, node=node, target=target)
        self._bind(mark)
        node.update_to(target, self.timings.enter_ms)
        mark.timer = self.scheduler.call_later(
            self.timings.enter_ms, lambda: self._settle(key, mark)
        )
        self._marks[key] = mark

    def _settle(self, key: Key, mark: Mark) -> None:
        if self._marks.get(key) is mark and mark.phase is Phase.ENTERING:
            mark.phase = Phase.STEADY
            mark.timer = None

    def _exit(self, mark: Mark) -> None:
        mark.cancel_timer()
        mark.phase = Phase.EXITING
        mark.node.interactive = False
        mark.node.update_to(_collapsed(mark.target), self.timings.exit_ms)
        key = mark.key
        mark.timer = self.scheduler.call_later(
            self.timings.exit_ms, lambda: self._remove(key, mark)
        )

    def _remove(self, key: Key, mark: Mark) -> None:
        if self._marks.get(key) is not mark or mark.phase is not Phase.EXITING:
            return
        mark.timer = None
        mark.node.destroy()
        del self._marks[key]

    def _bind(self, mark: Mark) -> None:
        cb = self.callbacks

        def _wire(kind: str, fn: PointerCallback | None, *, while_exiting: bool = False) -> None:
            if fn is None:
                return

            def handler(x: float, y: float) -> None:
                if while_exiting or mark.phase is not Phase.EXITING:
                    fn(mark.datum, (x, y))

            mark.node.on(kind, handler)

        _wire("enter", cb.on_enter)
        _wire("move", cb.on_move)
        _wire("leave", cb.on_leave, while_exiting=True)
        _wire("click", cb.on_click)
