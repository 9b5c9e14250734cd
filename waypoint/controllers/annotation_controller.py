"""
Controller exposing the annotation store to the UI and the navigator.
"""
import logging
from typing import List, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from waypoint.core.annotations import (
    Annotation, AnnotationManager, AnnotationType, SelectionAction, DEFAULT_COLORS
)

logger = logging.getLogger(__name__)

# Shapes smaller than this (in PDF points) are treated as stray clicks
MIN_ANNOTATION_SIZE = 2.0


class AnnotationController(QObject):
    """
    Annotation engine: owns mutations and selection, and reports them.

    Every change to the collection emits ``annotations_loaded``; every
    change to the selection emits ``selection_changed`` with the action
    name (``"selected"`` or ``"deselected"``) and the affected records.
    Emission is synchronous, so listeners see the new state before the
    call returns.
    """

    annotations_loaded = pyqtSignal()
    selection_changed = pyqtSignal(str, list)

    def __init__(self, annotation_manager: AnnotationManager, parent: QObject = None):
        super().__init__(parent)
        self.annotation_manager = annotation_manager
        self._document_open = False

    # ===== Document lifecycle =====

    def has_document(self) -> bool:
        return self._document_open

    def load_annotations(self, pdf_path: str) -> int:
        """
        Attach to a newly opened PDF and load its stored annotations.

        Returns:
            Number of annotations loaded
        """
        self.annotation_manager.clear_all()
        self.annotation_manager.set_pdf_path(pdf_path)
        self._document_open = True
        self.annotation_manager.auto_load_annotations()

        count = self.annotation_manager.get_annotation_count()
        self.annotations_loaded.emit()
        return count

    def close_document(self) -> None:
        """Deselect, drop all annotations and forget the document."""
        self.deselect_all()
        self.annotation_manager.clear_all()
        self._document_open = False
        self.annotations_loaded.emit()

    # ===== Engine contract =====

    def get_all_annotations(self) -> List[Annotation]:
        """Current annotations in insertion order (a copy of the list)."""
        return list(self.annotation_manager.annotations)

    def get_selected_annotations(self) -> List[Annotation]:
        return self.annotation_manager.get_selected_annotations()

    def select_annotation(self, annotation: Annotation) -> bool:
        """
        Select an annotation, replacing any current selection.

        Returns:
            True if the annotation exists and is now selected
        """
        current = self.annotation_manager.selected_annotation
        if current is not None and current.id == annotation.id:
            self.selection_changed.emit(SelectionAction.SELECTED.value, [current])
            return True

        if current is not None:
            self.deselect_all()

        selected = self.annotation_manager.select(annotation)
        if selected is None:
            logger.debug("Cannot select unknown annotation %s", annotation.id)
            return False

        self.selection_changed.emit(SelectionAction.SELECTED.value, [selected])
        return True

    def deselect_all(self) -> None:
        """Clear the selection, emitting ``deselected`` if there was one."""
        previous = self.annotation_manager.get_selected_annotations()
        if self.annotation_manager.deselect():
            self.selection_changed.emit(SelectionAction.DESELECTED.value, previous)

    # ===== Editing =====

    def create_annotation(self, page_index: int,
                          rect: Tuple[float, float, float, float],
                          annotation_type: AnnotationType = AnnotationType.RECTANGLE,
                          color: Optional[Tuple[int, int, int]] = None,
                          stroke_width: float = 2.0) -> Optional[Annotation]:
        """
        Create a rectangle or redaction mark on a page.

        Args:
            page_index: 0-based page index
            rect: (x0, y0, x1, y1) in PDF points, corners in any order
            annotation_type: RECTANGLE or REDACTION
            color: RGB color, defaults per type
            stroke_width: Border width in points

        Returns:
            The new annotation, or None if the shape was too small
        """
        if not self._document_open:
            return None

        annotation = Annotation(
            page_index=page_index,
            annotation_type=annotation_type,
            rect=rect,
            color=color or DEFAULT_COLORS[annotation_type],
            stroke_width=stroke_width
        )
        if annotation.width < MIN_ANNOTATION_SIZE or annotation.height < MIN_ANNOTATION_SIZE:
            return None

        self.annotation_manager.add_annotation(annotation)
        logger.debug("Created %s annotation %s on page %d",
                     annotation_type.value, annotation.id, annotation.page_number)
        self.annotations_loaded.emit()
        return annotation

    def delete_annotation(self, annotation: Annotation) -> bool:
        """
        Delete an annotation.

        Returns:
            True if it was deleted
        """
        was_selected = any(ann.id == annotation.id for ann in self.get_selected_annotations())
        if was_selected:
            self.deselect_all()

        if not self.annotation_manager.remove_annotation(annotation):
            return False

        self.annotations_loaded.emit()
        return True

    def delete_selected(self) -> bool:
        """Delete the selected annotation, if any."""
        selected = self.get_selected_annotations()
        if not selected:
            return False
        return self.delete_annotation(selected[0])

    def select_at_point(self, page_index: int, x: float, y: float,
                        zoom: float) -> Optional[Annotation]:
        """
        Select the topmost annotation under a screen point, or deselect.

        Args:
            page_index: 0-based page index
            x, y: Point in screen pixels relative to the page
            zoom: Current zoom level

        Returns:
            The selected annotation, or None
        """
        annotation = self.annotation_manager.get_annotation_at_point(page_index, x, y, zoom)
        if annotation is None:
            self.deselect_all()
            return None

        self.select_annotation(annotation)
        return annotation

    def get_annotations_for_page(self, page_index: int) -> List[Annotation]:
        return self.annotation_manager.get_annotations_for_page(page_index)

    # ===== Redaction =====

    def redaction_regions(self) -> List[Tuple[int, Tuple[float, float, float, float]]]:
        """Pending redaction marks as (page_index, rect) pairs."""
        return [
            (ann.page_index, ann.rect)
            for ann in self.annotation_manager.get_annotations_of_type(AnnotationType.REDACTION)
        ]

    def consume_redactions(self) -> int:
        """
        Remove redaction marks once they have been applied to the document.

        Returns:
            Number of marks removed
        """
        marks = self.annotation_manager.get_annotations_of_type(AnnotationType.REDACTION)
        if not marks:
            return 0

        selected = self.get_selected_annotations()
        if selected and selected[0].annotation_type == AnnotationType.REDACTION:
            self.deselect_all()

        removed = self.annotation_manager.remove_annotations(marks)
        self.annotations_loaded.emit()
        return removed

    # ===== History =====

    def undo(self) -> bool:
        """Undo the last change."""
        return self._replace_from_history(self.annotation_manager.undo)

    def redo(self) -> bool:
        """Redo the last undone change."""
        return self._replace_from_history(self.annotation_manager.redo)

    def _replace_from_history(self, step) -> bool:
        # History steps drop the selection, so report it first
        self.deselect_all()
        if not step():
            return False
        self.annotations_loaded.emit()
        return True

    def can_undo(self) -> bool:
        return self.annotation_manager.can_undo()

    def can_redo(self) -> bool:
        return self.annotation_manager.can_redo()
