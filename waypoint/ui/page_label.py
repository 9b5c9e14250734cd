"""
Widget showing one rendered page with its annotations drawn on top.
"""
from enum import Enum
from typing import List, Optional

from PyQt5.QtCore import Qt, QPoint, QPointF, QRectF, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QPainter, QPen
from PyQt5.QtWidgets import QLabel, QMenu

from waypoint.core.annotations import Annotation, AnnotationType
from waypoint.core.annotations.models import Rect


class ToolMode(Enum):
    SELECT = "select"
    RECTANGLE = "rectangle"
    REDACTION = "redaction"


TOOL_ANNOTATION_TYPES = {
    ToolMode.RECTANGLE: AnnotationType.RECTANGLE,
    ToolMode.REDACTION: AnnotationType.REDACTION,
}

FOCUS_COLOR = QColor(255, 170, 0)
SEARCH_HIT_COLOR = QColor(255, 230, 0, 90)
SEARCH_CURRENT_COLOR = QColor(255, 140, 0, 130)


class AnnotatedPageLabel(QLabel):
    """
    Displays a page pixmap and handles pointer input on it.

    The label does not change annotations itself; it reports clicks and
    drawn shapes in PDF coordinates and lets the main window act.
    """

    point_clicked = pyqtSignal(int, float, float)  # page_index, x, y in screen pixels
    shape_drawn = pyqtSignal(int, object, object)  # page_index, rect in PDF points, AnnotationType
    delete_requested = pyqtSignal(object)  # Annotation

    def __init__(self, page_index: int, parent=None):
        super().__init__(parent)
        self.page_index = page_index
        self.zoom_level = 1.0
        self.annotations: List[Annotation] = []
        self.selected_id: Optional[str] = None
        self.hovered_annotation: Optional[Annotation] = None
        self.search_hits: List[Rect] = []
        self.current_search_hit: Optional[Rect] = None
        self.tool_mode = ToolMode.SELECT

        self._drag_start: Optional[QPoint] = None
        self._drag_end: Optional[QPoint] = None

        self.setAlignment(Qt.AlignCenter)
        self.setMouseTracking(True)
        self.setContextMenuPolicy(Qt.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_context_menu)

    def set_page(self, pixmap, zoom_level: float) -> None:
        self.zoom_level = zoom_level
        self.setPixmap(pixmap)
        self.setFixedSize(pixmap.size())

    def set_annotations(self, annotations: List[Annotation]) -> None:
        self.annotations = list(annotations)
        self.hovered_annotation = None
        self.update()

    def set_selected_id(self, annotation_id: Optional[str]) -> None:
        if annotation_id != self.selected_id:
            self.selected_id = annotation_id
            self.update()

    def set_search_hits(self, hits: List[Rect], current: Optional[Rect] = None) -> None:
        """Highlight search matches (PDF points); ``current`` is drawn stronger."""
        self.search_hits = list(hits)
        self.current_search_hit = current
        self.update()

    def set_tool_mode(self, mode: ToolMode) -> None:
        self.tool_mode = mode
        self._drag_start = self._drag_end = None
        self.setCursor(Qt.ArrowCursor if mode == ToolMode.SELECT else Qt.CrossCursor)
        self.update()

    # ===== Hit testing (for hover feedback only) =====

    def _annotation_at(self, pos: QPoint) -> Optional[Annotation]:
        x = pos.x() / self.zoom_level
        y = pos.y() / self.zoom_level
        for annotation in reversed(self.annotations):
            tolerance = max(annotation.stroke_width + 2.0, 5.0) / self.zoom_level
            if annotation.contains(x, y, tolerance):
                return annotation
        return None

    def _to_screen(self, rect) -> QRectF:
        x0, y0, x1, y1 = rect
        z = self.zoom_level
        return QRectF(x0 * z, y0 * z, (x1 - x0) * z, (y1 - y0) * z)

    # ===== Painting =====

    def paintEvent(self, event):
        # Page image first, annotations on top
        super().paintEvent(event)

        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        painter.setPen(Qt.NoPen)
        for hit in self.search_hits:
            color = SEARCH_CURRENT_COLOR if hit == self.current_search_hit else SEARCH_HIT_COLOR
            painter.fillRect(self._to_screen(hit), color)

        for annotation in self.annotations:
            is_selected = annotation.id == self.selected_id
            is_hovered = annotation is self.hovered_annotation
            screen_rect = self._to_screen(annotation.rect)
            r, g, b = annotation.color

            if annotation.annotation_type == AnnotationType.REDACTION:
                painter.setBrush(QBrush(QColor(r, g, b, 60), Qt.BDiagPattern))
            else:
                painter.setBrush(QBrush(QColor(r, g, b, 40 if is_hovered else 0)))

            pen = QPen(QColor(r, g, b), annotation.stroke_width * self.zoom_level)
            painter.setPen(pen)
            painter.drawRect(screen_rect)

            if is_selected:
                focus_pen = QPen(FOCUS_COLOR, 2, Qt.DashLine)
                painter.setPen(focus_pen)
                painter.setBrush(Qt.NoBrush)
                painter.drawRect(screen_rect.adjusted(-4, -4, 4, 4))

        if self._drag_start is not None and self._drag_end is not None:
            painter.setPen(QPen(FOCUS_COLOR, 1, Qt.DashLine))
            painter.setBrush(Qt.NoBrush)
            painter.drawRect(QRectF(QPointF(self._drag_start), QPointF(self._drag_end)).normalized())

        painter.end()

    # ===== Mouse handling =====

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return

        if self.tool_mode == ToolMode.SELECT:
            self.point_clicked.emit(self.page_index, event.pos().x(), event.pos().y())
        else:
            self._drag_start = event.pos()
            self._drag_end = event.pos()
            self.update()

    def mouseMoveEvent(self, event):
        if self._drag_start is not None:
            self._drag_end = event.pos()
            self.update()
            return

        if self.tool_mode == ToolMode.SELECT:
            annotation = self._annotation_at(event.pos())
            if annotation is not self.hovered_annotation:
                self.hovered_annotation = annotation
                self.setCursor(Qt.PointingHandCursor if annotation else Qt.ArrowCursor)
                self.update()

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.LeftButton or self._drag_start is None:
            super().mouseReleaseEvent(event)
            return

        start, end = self._drag_start, event.pos()
        self._drag_start = self._drag_end = None
        self.update()

        z = self.zoom_level
        rect = (start.x() / z, start.y() / z, end.x() / z, end.y() / z)
        self.shape_drawn.emit(self.page_index, rect, TOOL_ANNOTATION_TYPES[self.tool_mode])

    def _show_context_menu(self, position):
        annotation = self._annotation_at(position)
        if annotation is None:
            return

        menu = QMenu(self)
        delete_action = menu.addAction("Delete Annotation")
        delete_action.triggered.connect(lambda: self.delete_requested.emit(annotation))
        menu.exec_(self.mapToGlobal(position))
