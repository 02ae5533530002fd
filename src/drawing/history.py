"""
Undo/redo log of committed strokes.

The history is the single source of truth for what is on the canvas: the
renderer replays it from scratch whenever it changes.
"""
from collections import deque
import logging
from typing import Callable, Deque, List, Tuple

from .geometry import Stroke

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class StrokeHistory:
    """
    Bounded, ordered stroke log with a redo stack.

    - Adding a stroke clears the redo stack (a fresh stroke starts a new
      timeline).
    - When more than `capacity` strokes are stored the oldest is dropped for
      good; it does not go to the redo stack.
    - Every mutation notifies listeners exactly once, after it completes.
    """

    def __init__(self, capacity: int = 50):
        if capacity < 1:
            raise ValueError("History capacity must be >= 1")
        self._capacity = capacity
        self._strokes: Deque[Stroke] = deque(maxlen=capacity)
        self._redo_stack: List[Stroke] = []
        self._listeners: List[Listener] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    # Listeners

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        self._listeners.remove(callback)

    def on_change(self, callback: Listener) -> None:
        """Register a change callback; existing listeners stay subscribed."""
        self.add_listener(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    # Mutations

    def add_stroke(self, stroke: Stroke) -> None:
        if len(self._strokes) == self._capacity:
            evicted = self._strokes[0]
            logger.debug("History full, evicting stroke %s", evicted.id)
        self._strokes.append(stroke)
        self._redo_stack.clear()
        self._notify()

    def undo(self) -> bool:
        """
        Move the most recent stroke to the redo stack.

        Returns:
            False (and no notification) if there is nothing to undo.
        """
        if not self._strokes:
            return False
        stroke = self._strokes.pop()
        self._redo_stack.append(stroke)
        logger.debug("Undo stroke %s", stroke.id)
        self._notify()
        return True

    def redo(self) -> bool:
        """
        Restore the most recently undone stroke.

        Returns:
            False (and no notification) if there is nothing to redo.
        """
        if not self._redo_stack:
            return False
        stroke = self._redo_stack.pop()
        self._strokes.append(stroke)
        logger.debug("Redo stroke %s", stroke.id)
        self._notify()
        return True

    def clear(self) -> None:
        self._strokes.clear()
        self._redo_stack.clear()
        self._notify()

    # Queries

    def can_undo(self) -> bool:
        return len(self._strokes) > 0

    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    def is_empty(self) -> bool:
        return not self._strokes

    def get_strokes(self) -> Tuple[Stroke, ...]:
        """Snapshot of the visible strokes, oldest first."""
        return tuple(self._strokes)

    def __len__(self) -> int:
        return len(self._strokes)
