from typing import Optional, Sequence

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import QListWidget, QListWidgetItem

from waypoint.core.annotations import Annotation, AnnotationType

TYPE_LABELS = {
    AnnotationType.RECTANGLE: "Rectangle",
    AnnotationType.REDACTION: "Redaction",
}


def describe_annotation(annotation: Annotation) -> str:
    """One-line label for an annotation, e.g. ``"p.2  Rectangle  (72, 140)"``."""
    label = TYPE_LABELS.get(annotation.annotation_type, annotation.annotation_type.value)
    return f"p.{annotation.page_number}  {label}  ({annotation.x:.0f}, {annotation.y:.0f})"


class AnnotationListWidget(QListWidget):
    """Annotations in reading order; the active one is kept selected."""

    index_activated = pyqtSignal(int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFixedWidth(250)
        self.setToolTip("Click an annotation to select it.")
        self.itemClicked.connect(self._item_clicked)

    def _item_clicked(self, item):
        index = item.data(Qt.UserRole)
        if index is not None:
            self.index_activated.emit(index)

    def load_annotations(self, annotations: Sequence[Annotation]) -> None:
        self.clear()
        for i, annotation in enumerate(annotations):
            item = QListWidgetItem(describe_annotation(annotation))
            item.setData(Qt.UserRole, i)
            item.setToolTip(f"Annotation {i + 1} of {len(annotations)}")
            self.addItem(item)

    def set_active_index(self, index: Optional[int]) -> None:
        # Block signals so programmatic highlighting is not echoed as a click
        self.blockSignals(True)
        try:
            if index is None or not 0 <= index < self.count():
                self.clearSelection()
                self.setCurrentRow(-1)
            else:
                self.setCurrentRow(index)
                self.scrollToItem(self.item(index))
        finally:
            self.blockSignals(False)
