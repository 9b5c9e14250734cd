"""
Undo/Redo history for the annotation collection.
"""
import copy
from typing import List, Optional

from .models import Annotation


class UndoRedoStack:
    """Snapshot-based undo/redo for annotation lists."""

    def __init__(self, max_size: int = 50):
        """
        Args:
            max_size: Maximum number of states to keep in history
        """
        self.undo_stack: List[List[Annotation]] = []
        self.redo_stack: List[List[Annotation]] = []
        self.max_size = max_size

    @staticmethod
    def _snapshot(annotations: List[Annotation]) -> List[Annotation]:
        # Copies keep their ids, so identity survives undo/redo
        return [copy.deepcopy(ann) for ann in annotations]

    def push_state(self, annotations: List[Annotation]) -> None:
        """
        Record the state before a change. Clears redo history.

        Args:
            annotations: Current list of annotations to save
        """
        self.undo_stack.append(self._snapshot(annotations))
        self.redo_stack.clear()

        if len(self.undo_stack) > self.max_size:
            self.undo_stack.pop(0)

    def can_undo(self) -> bool:
        return len(self.undo_stack) > 0

    def can_redo(self) -> bool:
        return len(self.redo_stack) > 0

    def undo(self, current_state: List[Annotation]) -> Optional[List[Annotation]]:
        """
        Step back one state.

        Args:
            current_state: Annotations before undo

        Returns:
            Previous state, or None if there is nothing to undo
        """
        if not self.can_undo():
            return None

        self.redo_stack.append(self._snapshot(current_state))
        return self.undo_stack.pop()

    def redo(self, current_state: List[Annotation]) -> Optional[List[Annotation]]:
        """
        Step forward one state.

        Args:
            current_state: Annotations before redo

        Returns:
            Next state, or None if there is nothing to redo
        """
        if not self.can_redo():
            return None

        self.undo_stack.append(self._snapshot(current_state))
        return self.redo_stack.pop()

    def clear(self) -> None:
        """Clear both stacks."""
        self.undo_stack.clear()
        self.redo_stack.clear()
