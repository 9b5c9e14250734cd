"""
Prev/next navigation over annotations in reading order.

The navigator keeps a sorted snapshot of the engine's annotations and a
cursor into it. The engine stays the source of truth for selection: the
cursor set by ``next``/``previous`` is provisional, and the engine's
``selection_changed`` signal always has the last word.

The engine is any QObject providing:

* ``get_all_annotations()``, ``has_document()``
* ``select_annotation(record)`` returning whether the record was selected,
  and ``deselect_all()``
* signals ``annotations_loaded()`` and ``selection_changed(str, list)``
"""
import logging
from typing import Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from waypoint.core.annotations.models import SelectionAction
from .reading_order import sort_reading_order

logger = logging.getLogger(__name__)


class AnnotationNavigator(QObject):
    """Reading-order cursor over an annotation engine's collection."""

    annotations_refreshed = pyqtSignal(int)  # Emits new annotation count
    cursor_changed = pyqtSignal(object)  # Emits new cursor (int or None)

    def __init__(self, engine=None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._engine = None
        self._annotations: Tuple = ()
        self._cursor: Optional[int] = None

        if engine is not None:
            self.set_engine(engine)

    # ===== Engine wiring =====

    @property
    def engine(self):
        return self._engine

    def set_engine(self, engine) -> None:
        """
        Attach to an engine, detaching from the previous one first.

        The cache and cursor are reset and rebuilt from the new engine.
        """
        self.detach()
        self._engine = engine
        engine.annotations_loaded.connect(self.refresh)
        engine.selection_changed.connect(self.on_selection_changed)
        self.refresh()

    def detach(self) -> None:
        """Disconnect from the current engine and clear all state."""
        if self._engine is not None:
            for signal, slot in ((self._engine.annotations_loaded, self.refresh),
                                 (self._engine.selection_changed, self.on_selection_changed)):
                try:
                    signal.disconnect(slot)
                except TypeError as e:
                    logger.debug("Engine signal was already disconnected: %s", e)
            self._engine = None

        self._annotations = ()
        self.annotations_refreshed.emit(0)
        self._set_cursor(None)

    # ===== Read access =====

    @property
    def annotations(self) -> Tuple:
        """Annotations in reading order as of the last refresh."""
        return self._annotations

    @property
    def cursor(self) -> Optional[int]:
        return self._cursor

    @property
    def current(self):
        """The annotation under the cursor, or None."""
        if self._cursor is None:
            return None
        return self._annotations[self._cursor]

    @property
    def count(self) -> int:
        return len(self._annotations)

    def position_text(self) -> str:
        """Human-readable position such as ``"3 of 12"``."""
        if not self._annotations:
            return ""
        if self._cursor is None:
            return f"– of {len(self._annotations)}"
        return f"{self._cursor + 1} of {len(self._annotations)}"

    # ===== Cache =====

    def _has_document(self) -> bool:
        return self._engine is not None and self._engine.has_document()

    def refresh(self) -> bool:
        """
        Re-read and re-sort the engine's annotations.

        The cursor keeps pointing at the same record, looked up by id in
        the new cache; it becomes None if that record is gone.

        Returns:
            True if the cache was rebuilt, False if there is no document yet
        """
        if not self._has_document():
            return False

        previous = self.current
        self._annotations = tuple(sort_reading_order(self._engine.get_all_annotations()))
        self._set_cursor(self.index_of(previous))
        logger.debug("Refreshed navigator cache: %d annotations", len(self._annotations))
        self.annotations_refreshed.emit(len(self._annotations))
        return True

    def index_of(self, annotation) -> Optional[int]:
        """Position of a record in the cache, matched by id."""
        if annotation is None:
            return None
        for i, cached in enumerate(self._annotations):
            if cached.id == annotation.id:
                return i
        return None

    # ===== Selection sync =====

    def on_selection_changed(self, action: str, records: list) -> None:
        """
        Follow the engine's selection.

        A selected record missing from the cache (added since the last
        refresh, or already removed) leaves the cursor at None.
        """
        if action == SelectionAction.DESELECTED.value:
            self._set_cursor(None)
        elif action == SelectionAction.SELECTED.value:
            index = self.index_of(records[0]) if records else None
            if index is None:
                logger.debug("Selected annotation is not in the navigator cache")
            self._set_cursor(index)
        else:
            logger.debug("Ignoring unknown selection action %r", action)

    def _set_cursor(self, cursor: Optional[int]) -> None:
        if cursor != self._cursor:
            self._cursor = cursor
            self.cursor_changed.emit(cursor)

    # ===== Navigation =====

    def select_index(self, index: int) -> bool:
        """
        Select the annotation at a position in the current cache.

        Returns:
            True if the index was valid and the engine accepted the selection
        """
        if not 0 <= index < len(self._annotations):
            logger.debug("select_index(%s) out of range for %d annotations",
                         index, len(self._annotations))
            return False
        if not self._has_document():
            return False

        self._engine.deselect_all()
        return self._select(index)

    def next(self) -> bool:
        """Select the next annotation, wrapping to the first."""
        return self._step(1)

    def previous(self) -> bool:
        """Select the previous annotation, wrapping to the last."""
        return self._step(-1)

    def _step(self, direction: int) -> bool:
        if not self._annotations or not self._has_document():
            return False

        # Deselecting echoes a "deselected" event, so remember where we were
        anchor = self.current
        self._engine.deselect_all()
        if not self.refresh():
            return False

        count = len(self._annotations)
        if count == 0:
            return False

        position = self.index_of(anchor)
        if direction > 0:
            target = 0 if position is None or position == count - 1 else position + 1
        else:
            target = count - 1 if position is None or position == 0 else position - 1

        return self._select(target)

    def _select(self, index: int) -> bool:
        if not self._engine.select_annotation(self._annotations[index]):
            logger.debug("Engine rejected selection of %s", self._annotations[index].id)
            self._set_cursor(None)
            return False
        self._set_cursor(index)
        return True
