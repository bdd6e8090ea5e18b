"""
History Manager - linear undo/redo over measurement store snapshots
"""

from typing import List, Optional, Sequence

from .measurement_store import Snapshot


class HistoryManager:
    """Two stacks of immutable store snapshots

    Depth is unbounded; a session keeps every snapshot until the
    document changes.
    """

    def __init__(self):
        self._undo_stack: List[Snapshot] = []
        self._redo_stack: List[Snapshot] = []

    def push_undo(self, snapshot: Sequence):
        """Record the state before a new action; invalidates redo"""
        self._undo_stack.append(tuple(snapshot))
        self._redo_stack.clear()

    def undo(self, current: Sequence) -> Optional[Snapshot]:
        """Pop the latest undo snapshot, queueing current state for redo

        Returns None when there is nothing to undo.
        """
        if not self._undo_stack:
            return None
        previous = self._undo_stack.pop()
        self._redo_stack.append(tuple(current))
        return previous

    def redo(self, current: Sequence) -> Optional[Snapshot]:
        """Re-apply the most recently undone state"""
        if not self._redo_stack:
            return None
        following = self._redo_stack.pop()
        self._undo_stack.append(tuple(current))
        return following

    def clear(self):
        self._undo_stack.clear()
        self._redo_stack.clear()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)
