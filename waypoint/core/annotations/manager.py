"""
Annotation store for a single PDF document.

Owns the annotation collection, the current selection, undo/redo
history and auto-save. Knows nothing about Qt; the controller layer
turns its state changes into signals.
"""
import copy
import logging
from typing import Iterable, List, Optional

from waypoint.utils.exceptions import AnnotationStoreError
from .models import Annotation, AnnotationType
from .persistence import AnnotationPersistence
from .undo_redo import UndoRedoStack

logger = logging.getLogger(__name__)


class AnnotationManager:
    """Manages all annotations for a PDF document with undo/redo support."""

    def __init__(self, persistence: AnnotationPersistence,
                 autosave: bool = True, undo_limit: int = 50):
        self.annotations: List[Annotation] = []
        self.pdf_path: Optional[str] = None
        self.has_unsaved_changes: bool = False
        self.autosave = autosave

        self.undo_redo_stack = UndoRedoStack(max_size=undo_limit)
        self.persistence = persistence

        self.selected_annotation: Optional[Annotation] = None

        # Snapshot of the last saved/loaded state for change detection
        self.initial_annotations: List[Annotation] = []

    def set_pdf_path(self, pdf_path: Optional[str]) -> None:
        self.pdf_path = pdf_path

    # ===== Mutations =====

    def add_annotation(self, annotation: Annotation) -> None:
        """Add a new annotation with undo support."""
        self.undo_redo_stack.push_state(self.annotations)
        self.annotations.append(annotation)
        self._after_change()

    def remove_annotation(self, annotation: Annotation) -> bool:
        """
        Remove an annotation with undo support.

        Returns:
            True if the annotation was found and removed
        """
        return self.remove_annotations([annotation]) > 0

    def remove_annotations(self, annotations: Iterable[Annotation]) -> int:
        """
        Remove several annotations as a single undoable step.

        Returns:
            Number of annotations removed
        """
        doomed = {ann.id for ann in annotations}
        remaining = [ann for ann in self.annotations if ann.id not in doomed]
        removed = len(self.annotations) - len(remaining)
        if not removed:
            return 0

        self.undo_redo_stack.push_state(self.annotations)
        self.annotations = remaining
        if self.selected_annotation and self.selected_annotation.id in doomed:
            self.selected_annotation = None
        self._after_change()
        return removed

    def _after_change(self) -> None:
        self._check_for_changes()
        self._auto_save()

    def _check_for_changes(self) -> None:
        """Compare current annotations against the last saved state."""
        def signature(annotations):
            return {
                (ann.id, ann.page_index, ann.annotation_type.value,
                 ann.rect, ann.color, ann.stroke_width)
                for ann in annotations
            }

        self.has_unsaved_changes = (
            signature(self.annotations) != signature(self.initial_annotations)
        )

    # ===== Queries =====

    def _index_of(self, annotation_id: str) -> Optional[int]:
        for i, ann in enumerate(self.annotations):
            if ann.id == annotation_id:
                return i
        return None

    def get_annotation_by_id(self, annotation_id: str) -> Optional[Annotation]:
        index = self._index_of(annotation_id)
        return self.annotations[index] if index is not None else None

    def get_annotations_for_page(self, page_index: int) -> List[Annotation]:
        """Get all annotations on a 0-based page, in insertion order."""
        return [ann for ann in self.annotations if ann.page_index == page_index]

    def get_annotations_of_type(self, annotation_type: AnnotationType) -> List[Annotation]:
        return [ann for ann in self.annotations
                if ann.annotation_type == annotation_type]

    def get_annotation_at_point(self, page_index: int, x: float, y: float,
                                zoom: float = 1.0) -> Optional[Annotation]:
        """
        Get annotation at a specific point on a page.

        Args:
            page_index: 0-based page index
            x: X coordinate in screen pixels
            y: Y coordinate in screen pixels
            zoom: Current zoom level

        Returns:
            The topmost annotation at the point, or None
        """
        pdf_x = x / zoom
        pdf_y = y / zoom

        # Later annotations are drawn on top, so check them first
        for ann in reversed(self.get_annotations_for_page(page_index)):
            tolerance = max(ann.stroke_width + 2.0, 5.0) / zoom
            if ann.contains(pdf_x, pdf_y, tolerance):
                return ann
        return None

    def get_annotation_count(self) -> int:
        return len(self.annotations)

    # ===== Selection =====

    def select(self, annotation: Annotation) -> Optional[Annotation]:
        """
        Mark an annotation as selected.

        The stored record with the same id is selected, so a stale copy
        held by a caller still selects the live one.

        Returns:
            The selected record, or None if it is not in the collection
        """
        self.selected_annotation = self.get_annotation_by_id(annotation.id)
        return self.selected_annotation

    def deselect(self) -> bool:
        """
        Clear the selection.

        Returns:
            True if something was selected before
        """
        had_selection = self.selected_annotation is not None
        self.selected_annotation = None
        return had_selection

    def get_selected_annotations(self) -> List[Annotation]:
        return [self.selected_annotation] if self.selected_annotation else []

    # ===== History =====

    def undo(self) -> bool:
        """
        Perform undo operation.

        Returns:
            True if undo was successful
        """
        previous_state = self.undo_redo_stack.undo(self.annotations)
        if previous_state is None:
            return False

        self.annotations = previous_state
        self.selected_annotation = None
        self._after_change()
        return True

    def redo(self) -> bool:
        """
        Perform redo operation.

        Returns:
            True if redo was successful
        """
        next_state = self.undo_redo_stack.redo(self.annotations)
        if next_state is None:
            return False

        self.annotations = next_state
        self.selected_annotation = None
        self._after_change()
        return True

    def can_undo(self) -> bool:
        return self.undo_redo_stack.can_undo()

    def can_redo(self) -> bool:
        return self.undo_redo_stack.can_redo()

    def clear_all(self) -> None:
        """Clear all annotations and reset state."""
        self.annotations.clear()
        self.initial_annotations.clear()
        self.has_unsaved_changes = False
        self.pdf_path = None
        self.selected_annotation = None
        self.undo_redo_stack.clear()

    # ===== Persistence =====

    def _auto_save(self) -> None:
        """Save to the per-document JSON file if auto-save is on."""
        if not (self.autosave and self.pdf_path):
            return
        try:
            self.persistence.save_to_json(self.annotations, self.pdf_path)
        except AnnotationStoreError as e:
            logger.error("Auto-save failed: %s", e)
            return
        self.mark_saved()

    def save_to_json(self, file_path: Optional[str] = None) -> bool:
        """
        Save annotations to a JSON file.

        Returns:
            True if save was successful
        """
        if not self.pdf_path:
            return False

        try:
            self.persistence.save_to_json(self.annotations, self.pdf_path, file_path)
        except AnnotationStoreError as e:
            logger.error("%s", e)
            return False
        self.mark_saved()
        return True

    def load_from_json(self, file_path: Optional[str] = None) -> bool:
        """
        Load annotations from a JSON file, replacing the collection.

        Returns:
            True if load was successful
        """
        if not self.pdf_path:
            return False

        try:
            annotations = self.persistence.load_from_json(self.pdf_path, file_path)
        except AnnotationStoreError as e:
            logger.error("%s", e)
            return False

        self.annotations = annotations
        self.selected_annotation = None
        self.mark_saved()
        self.undo_redo_stack.clear()
        logger.info("Loaded %d annotations for %s", len(annotations), self.pdf_path)
        return True

    def auto_load_annotations(self) -> bool:
        """
        Load stored annotations for the current PDF if there are any.

        Returns:
            True if annotations were loaded
        """
        if self.pdf_path and self.persistence.has_saved_annotations(self.pdf_path):
            return self.load_from_json()
        return False

    def mark_saved(self) -> None:
        """Mark all changes as saved and update initial state."""
        self.initial_annotations = [copy.deepcopy(ann) for ann in self.annotations]
        self.has_unsaved_changes = False
