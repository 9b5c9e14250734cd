"""
Test doubles and builders shared across test modules.
"""
from PyQt5.QtCore import QObject, pyqtSignal

from waypoint.core.annotations import Annotation, AnnotationType


def make_annotation(page_number, y, x, annotation_id=None,
                    annotation_type=AnnotationType.RECTANGLE):
    """Annotation whose top-left corner is at (x, y) on a 1-based page."""
    kwargs = {}
    if annotation_id is not None:
        kwargs["id"] = annotation_id
    return Annotation(
        page_index=page_number - 1,
        annotation_type=annotation_type,
        rect=(x, y, x + 20, y + 10),
        **kwargs
    )


class FakeEngine(QObject):
    """
    Minimal annotation engine recording the calls made to it.

    With ``echo`` on it confirms selections synchronously, like the real
    controller; with it off, selection events only arrive when a test
    emits them.
    """

    annotations_loaded = pyqtSignal()
    selection_changed = pyqtSignal(str, list)

    def __init__(self, annotations=(), document=True, echo=True):
        super().__init__()
        self.annotations = list(annotations)
        self.document = document
        self.echo = echo
        self.selected = None
        self.calls = []

    def has_document(self):
        return self.document

    def get_all_annotations(self):
        return list(self.annotations)

    def get_selected_annotations(self):
        return [self.selected] if self.selected else []

    def select_annotation(self, annotation):
        self.calls.append(("select", annotation.id))
        if not any(ann.id == annotation.id for ann in self.annotations):
            return False
        self.selected = annotation
        if self.echo:
            self.selection_changed.emit("selected", [annotation])
        return True

    def deselect_all(self):
        self.calls.append(("deselect",))
        previous = self.selected
        self.selected = None
        if self.echo and previous is not None:
            self.selection_changed.emit("deselected", [previous])

    def set_annotations(self, annotations):
        self.annotations = list(annotations)
        self.annotations_loaded.emit()

    def select_calls(self):
        return [call for call in self.calls if call[0] == "select"]


