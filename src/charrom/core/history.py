"""Linear undo/redo history with batching.

The manager keeps a timeline ``past + [present] + future`` of immutable
HistoryEntry snapshots over an arbitrary state type. It knows nothing
about characters; the editor stores whatever snapshot it needs (for
example the character list plus the selected index).

Batching collapses a continuous gesture, such as dragging across pixels,
into a single undo step:

    history.start_batch()
    for edit in gesture:
        history.set_state(apply(edit, history.state))
    history.end_batch("Draw")
"""

import operator
import time
from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

from charrom.config import HistoryConfig
from charrom.domain import HistoryEntry

T = TypeVar("T")

INITIAL_LABEL = "Initial state"

logger = structlog.get_logger(__name__)


class HistoryManager(Generic[T]):
    """Undo/redo timeline over snapshots of type ``T``.

    The manager owns its past and future lists exclusively. Readers get
    tuples or entries, never the internal lists, and every state must be
    treated as an immutable snapshot.

    Example:
        history = HistoryManager(initial)
        history.set_state(edited, "Invert")
        history.undo()
        assert history.state == initial
    """

    def __init__(
        self,
        initial_state: T,
        max_history: int | None = None,
        equals: Callable[[T, T], bool] = operator.eq,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the history.

        Args:
            initial_state: State of the first present entry
            max_history: Maximum number of past entries kept (None = unbounded)
            equals: Structural comparison used to decide whether a batch
                changed anything
            clock: Timestamp source for new entries
        """
        if max_history is not None and max_history < 0:
            raise ValueError(f"max_history must be non-negative, got {max_history}")

        self._max_history = max_history
        self._equals = equals
        self._clock = clock

        self._past: list[HistoryEntry[T]] = []
        self._present: HistoryEntry[T] = self._entry(initial_state, INITIAL_LABEL)
        self._future: list[HistoryEntry[T]] = []

        self._batch_start: HistoryEntry[T] | None = None

    @classmethod
    def from_config(
        cls,
        initial_state: T,
        config: HistoryConfig,
        equals: Callable[[T, T], bool] = operator.eq,
    ) -> "HistoryManager[T]":
        """Create a history bounded by ``config.max_history``."""
        return cls(initial_state, max_history=config.max_history, equals=equals)

    def _entry(self, state: T, label: str | None) -> HistoryEntry[T]:
        return HistoryEntry(state=state, label=label, timestamp=self._clock())

    def _push_past(self, entry: HistoryEntry[T]) -> None:
        """Append to past, dropping the oldest entries beyond the bound."""
        self._past.append(entry)
        if self._max_history is not None and len(self._past) > self._max_history:
            del self._past[: len(self._past) - self._max_history]

    @property
    def state(self) -> T:
        """Current state."""
        return self._present.state

    @property
    def present(self) -> HistoryEntry[T]:
        """Current entry."""
        return self._present

    @property
    def can_undo(self) -> bool:
        return len(self._past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._future) > 0

    @property
    def history(self) -> tuple[HistoryEntry[T], ...]:
        """Full timeline: past, present, future."""
        return (*self._past, self._present, *self._future)

    @property
    def history_index(self) -> int:
        """Position of the present entry within ``history``."""
        return len(self._past)

    @property
    def total_entries(self) -> int:
        return len(self._past) + 1 + len(self._future)

    @property
    def is_batching(self) -> bool:
        return self._batch_start is not None

    def set_state(self, state: T, label: str | None = None) -> None:
        """Record a new state.

        Outside a batch the present moves to past and the future is
        discarded. Inside a batch only the present is replaced.

        Args:
            state: New state snapshot
            label: Description of the edit
        """
        if self._batch_start is not None:
            self._present = self._entry(state, label)
            return

        self._push_past(self._present)
        self._present = self._entry(state, label)
        self._future.clear()
        logger.debug("History push", label=label, past=len(self._past))

    def start_batch(self) -> None:
        """Begin collapsing subsequent ``set_state`` calls into one step.

        Calling this while a batch is already open has no effect.
        """
        if self._batch_start is None:
            self._batch_start = self._present

    def end_batch(self, label: str | None = None) -> None:
        """Close the open batch.

        When the present state differs from the state captured by
        ``start_batch`` the captured entry becomes one past entry (with the
        usual bound and future clearing) and the present takes ``label``.
        An unchanged state records nothing. Without an open batch this is a
        no-op.

        Args:
            label: Label for the collapsed step; keeps the present label
                when omitted
        """
        start = self._batch_start
        self._batch_start = None
        if start is None:
            return

        if self._equals(start.state, self._present.state):
            logger.debug("Batch discarded", reason="state unchanged")
            return

        self._push_past(start)
        self._present = HistoryEntry(
            state=self._present.state,
            label=label if label else self._present.label,
            timestamp=self._present.timestamp,
        )
        self._future.clear()
        logger.debug("Batch committed", label=self._present.label, past=len(self._past))

    def undo(self) -> None:
        """Step back one entry. No-op when there is nothing to undo."""
        if not self._past:
            return
        self._future.insert(0, self._present)
        self._present = self._past.pop()
        logger.debug("Undo", index=self.history_index)

    def redo(self) -> None:
        """Step forward one entry. No-op when there is nothing to redo."""
        if not self._future:
            return
        self._past.append(self._present)
        self._present = self._future.pop(0)
        logger.debug("Redo", index=self.history_index)

    def jump_to_history(self, index: int) -> None:
        """Move the present to any position in the timeline.

        The index is clamped into the timeline. Jumping to the current
        position changes nothing.

        Args:
            index: Position in ``history``
        """
        clamped = max(0, min(index, self.total_entries - 1))
        if clamped == len(self._past):
            return

        timeline = list(self.history)
        self._past = timeline[:clamped]
        self._present = timeline[clamped]
        self._future = timeline[clamped + 1:]
        logger.debug("History jump", index=clamped, total=len(timeline))

    def reset_state(self, state: T) -> None:
        """Replace the present and forget all history.

        Used when a different character set is loaded. The replaced state is
        not recoverable.
        """
        self._past = []
        self._present = self._entry(state, INITIAL_LABEL)
        self._future = []
        self._batch_start = None

    def clear_history(self) -> None:
        """Drop past and future, keeping the present."""
        self._past = []
        self._future = []
