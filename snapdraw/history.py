"""Bounded undo/redo over snapshots of the stroke collection."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, List

from .model import HistorySnapshot, Stroke, StrokeCollection

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 20


def _snapshot(collection: Iterable[Stroke]) -> HistorySnapshot:
    # Strokes are frozen with tuple points, so copying the sequence is a deep copy.
    return tuple(collection)


class HistoryManager:
    """Two LIFO stacks of collection snapshots, most recent on the left.

    The undo stack keeps at most ``capacity`` entries; pushing past that
    evicts the oldest snapshot. Any new push invalidates the redo path.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"history capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._undo: Deque[HistorySnapshot] = deque()
        self._redo: Deque[HistorySnapshot] = deque()

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def push_snapshot(self, collection: Iterable[Stroke]) -> None:
        self._undo.appendleft(_snapshot(collection))
        while len(self._undo) > self.capacity:
            self._undo.pop()
        self._redo.clear()
        logger.debug("Snapshot pushed (undo=%d, redo cleared)", len(self._undo))

    def undo(self, collection: Iterable[Stroke]) -> StrokeCollection:
        """Return the previous collection, or a copy of ``collection`` if there is none."""

        current = _snapshot(collection)
        if not self._undo:
            return list(current)
        self._redo.appendleft(current)
        restored = self._undo.popleft()
        logger.debug("Undo -> %d strokes (undo=%d, redo=%d)", len(restored), len(self._undo), len(self._redo))
        return list(restored)

    def redo(self, collection: Iterable[Stroke]) -> StrokeCollection:
        current = _snapshot(collection)
        if not self._redo:
            return list(current)
        self._undo.appendleft(current)
        restored = self._redo.popleft()
        logger.debug("Redo -> %d strokes (undo=%d, redo=%d)", len(restored), len(self._undo), len(self._redo))
        return list(restored)

    def reset(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def snapshots(self) -> List[HistorySnapshot]:
        """Undo snapshots, most recent first."""

        return list(self._undo)


__all__ = ["DEFAULT_CAPACITY", "HistoryManager"]
