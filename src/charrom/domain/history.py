"""History timeline entries."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class HistoryEntry(Generic[T]):
    """A snapshot in the undo/redo timeline.

    Entries are never mutated after creation; relabelling at the end of a
    batch produces a new entry.

    Attributes:
        state: The state snapshot
        label: Human-readable description of the edit that produced it
        timestamp: Creation time in seconds since the epoch
    """

    state: T
    label: str | None
    timestamp: float
