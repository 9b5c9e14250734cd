import logging
import os
from typing import Dict, Optional

from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import (
    QAction, QFileDialog, QFrame, QHBoxLayout, QLabel, QMainWindow, QMessageBox,
    QScrollArea, QSizePolicy, QSpacerItem, QToolButton, QVBoxLayout, QWidget
)

from waypoint.config import AppConfig, get_config
from waypoint.controllers import AnnotationController, ViewController
from waypoint.core.annotations import AnnotationManager, AnnotationPersistence
from waypoint.core.document import PDFDocumentReader
from waypoint.core.navigation import AnnotationNavigator
from waypoint.core.search import PDFSearchEngine
from waypoint.utils.exceptions import DocumentLoadError
from .annotation_list import AnnotationListWidget
from .navigation_bar import NavigationBar
from .page_label import AnnotatedPageLabel, ToolMode
from .search_bar import SearchBar
from .styles import apply_theme

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, file_path: Optional[str] = None, config: Optional[AppConfig] = None):
        super().__init__()
        self.setWindowTitle("Waypoint PDF")

        self.config = config or get_config()
        self.dark_mode = self.config.dark_mode

        self.pdf_reader = PDFDocumentReader()
        self.search_engine = PDFSearchEngine(self.pdf_reader)
        self.annotation_manager = AnnotationManager(
            AnnotationPersistence(self.config.annotations_dir),
            autosave=self.config.autosave,
            undo_limit=self.config.undo_limit
        )
        self.annotation_controller = AnnotationController(self.annotation_manager, self)
        self.navigator = AnnotationNavigator(self.annotation_controller, self)
        self.view_controller = ViewController(
            zoom=self.config.initial_zoom,
            zoom_step=self.config.zoom_step,
            min_zoom=self.config.min_zoom,
            max_zoom=self.config.max_zoom
        )

        self.page_labels: Dict[int, AnnotatedPageLabel] = {}
        self.tool_mode = ToolMode.SELECT

        self.setup_ui()
        self.setup_actions()
        self.connect_signals()
        apply_theme(self, self.dark_mode)

        if file_path:
            self.load_pdf(file_path)

    # ===== UI construction =====

    def _tool_button(self, text, tooltip, slot, checkable=False):
        btn = QToolButton(self.top_frame)
        btn.setText(text)
        btn.setToolTip(tooltip)
        btn.setCheckable(checkable)
        btn.clicked.connect(slot)
        self.top_layout.addWidget(btn)
        return btn

    def _separator(self):
        separator = QFrame()
        separator.setFrameShape(QFrame.VLine)
        separator.setFrameShadow(QFrame.Sunken)
        separator.setStyleSheet("background-color: #555555; max-width: 1px;")
        self.top_layout.addWidget(separator)

    def setup_ui(self):
        # TOP TOOLBAR
        self.top_frame = QFrame()
        self.top_frame.setObjectName("TopFrame")
        self.top_layout = QHBoxLayout(self.top_frame)
        self.top_layout.setContentsMargins(10, 8, 10, 8)
        self.top_layout.setSpacing(8)

        self.open_button = self._tool_button("Open", "Open PDF (Ctrl+O)", self.open_pdf)
        self.close_button = self._tool_button("Close", "Close PDF (Ctrl+W)", self.close_pdf)
        self._separator()

        self.zoom_out_button = self._tool_button("−", "Zoom Out (Ctrl+-)", self.view_controller.zoom_out)
        self.zoom_label = QLabel(f"{self.view_controller.zoom_percent()}%", self.top_frame)
        self.zoom_label.setObjectName("statusLabel")
        self.top_layout.addWidget(self.zoom_label)
        self.zoom_in_button = self._tool_button("+", "Zoom In (Ctrl+=)", self.view_controller.zoom_in)
        self._separator()

        self.select_button = self._tool_button(
            "Select", "Select annotations (Esc)",
            lambda: self.set_tool_mode(ToolMode.SELECT), checkable=True)
        self.rectangle_button = self._tool_button(
            "Rectangle", "Draw rectangle annotations",
            lambda: self.set_tool_mode(ToolMode.RECTANGLE), checkable=True)
        self.redact_button = self._tool_button(
            "Redact", "Mark regions for redaction",
            lambda: self.set_tool_mode(ToolMode.REDACTION), checkable=True)
        self.apply_redactions_button = self._tool_button(
            "Apply Redactions", "Permanently remove marked content", self.apply_redactions)
        self.tool_buttons = {
            ToolMode.SELECT: self.select_button,
            ToolMode.RECTANGLE: self.rectangle_button,
            ToolMode.REDACTION: self.redact_button,
        }
        self.select_button.setChecked(True)
        self._separator()

        self.undo_button = self._tool_button("Undo", "Undo (Ctrl+Z)", self.undo)
        self.redo_button = self._tool_button("Redo", "Redo (Ctrl+Shift+Z)", self.redo)
        self._separator()
        self.search_button = self._tool_button("Search", "Search (Ctrl+F)", self.toggle_search_bar)

        self.top_layout.addSpacerItem(QSpacerItem(15, 20, QSizePolicy.Fixed, QSizePolicy.Minimum))
        self.file_name_label = QLabel("No PDF Loaded", self.top_frame)
        self.file_name_label.setStyleSheet("font-weight: bold; color: #8899AA;")
        self.top_layout.addWidget(self.file_name_label)
        self.top_layout.addSpacerItem(QSpacerItem(40, 20, QSizePolicy.Expanding, QSizePolicy.Minimum))

        self.navigation_bar = NavigationBar(self.top_frame)
        self.top_layout.addWidget(self.navigation_bar)

        # PAGE DISPLAY AREA
        self.page_container = QWidget()
        self.page_layout = QVBoxLayout(self.page_container)
        self.page_layout.setSpacing(self.config.page_spacing)
        self.page_layout.setContentsMargins(0, 20, 0, 20)
        self.page_layout.setAlignment(Qt.AlignHCenter | Qt.AlignTop)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setWidget(self.page_container)

        # SEARCH BAR (above the pages, hidden until opened)
        self.search_bar = SearchBar()

        viewer_layout = QVBoxLayout()
        viewer_layout.setSpacing(0)
        viewer_layout.setContentsMargins(0, 0, 0, 0)
        viewer_layout.addWidget(self.search_bar)
        viewer_layout.addWidget(self.scroll_area)

        # ANNOTATION LIST (right side)
        self.annotation_list = AnnotationListWidget()

        content_layout = QHBoxLayout()
        content_layout.setSpacing(0)
        content_layout.setContentsMargins(0, 0, 0, 0)
        content_layout.addLayout(viewer_layout)
        content_layout.addWidget(self.annotation_list)

        content_widget = QWidget()
        content_widget.setLayout(content_layout)

        main_layout = QVBoxLayout()
        main_layout.setSpacing(0)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.addWidget(self.top_frame)
        main_layout.addWidget(content_widget)

        container = QWidget()
        container.setLayout(main_layout)
        self.setCentralWidget(container)

        self._update_history_buttons()

    def setup_actions(self):
        shortcuts = [
            (QKeySequence.Open, self.open_pdf),
            (QKeySequence.Close, self.close_pdf),
            (QKeySequence.ZoomIn, self.view_controller.zoom_in),
            (QKeySequence("Ctrl+="), self.view_controller.zoom_in),
            (QKeySequence.ZoomOut, self.view_controller.zoom_out),
            (QKeySequence.Undo, self.undo),
            (QKeySequence("Ctrl+Shift+Z"), self.redo),
            (QKeySequence("Ctrl+]"), self.next_annotation),
            (QKeySequence("Ctrl+["), self.previous_annotation),
            (QKeySequence(Qt.Key_Delete), self.delete_selected_annotation),
            (QKeySequence(Qt.Key_Escape), lambda: self.set_tool_mode(ToolMode.SELECT)),
            (QKeySequence.Find, self.show_search_bar),
            (QKeySequence.FindNext, self.find_next),
            (QKeySequence.FindPrevious, self.find_previous),
        ]
        for sequence, slot in shortcuts:
            action = QAction(self)
            action.setShortcut(sequence)
            action.triggered.connect(slot)
            self.addAction(action)

    def connect_signals(self):
        self.annotation_controller.annotations_loaded.connect(self._on_annotations_changed)
        self.annotation_controller.selection_changed.connect(self._on_selection_changed)

        self.navigator.annotations_refreshed.connect(self._on_navigator_refreshed)
        self.navigator.cursor_changed.connect(self._on_cursor_changed)

        self.view_controller.zoom_changed.connect(self._on_zoom_changed)

        self.navigation_bar.prev_requested.connect(self.previous_annotation)
        self.navigation_bar.next_requested.connect(self.next_annotation)
        self.annotation_list.index_activated.connect(self._on_list_index_activated)

        self.search_bar.search_requested.connect(self.execute_search)
        self.search_bar.next_result_requested.connect(self.find_next)
        self.search_bar.prev_result_requested.connect(self.find_previous)
        self.search_bar.close_requested.connect(self.clear_search)

    # ===== Document =====

    def open_pdf(self):
        file_path, _ = QFileDialog.getOpenFileName(self, "Open PDF", "", "PDF Files (*.pdf)")
        if file_path:
            self.load_pdf(file_path)

    def load_pdf(self, file_path: str) -> bool:
        if self.pdf_reader.is_loaded() and not self.close_pdf():
            return False

        try:
            self.pdf_reader.load_pdf(file_path)
        except DocumentLoadError as e:
            logger.error("%s", e)
            QMessageBox.critical(self, "Error", e.message)
            return False

        self.file_name_label.setText(os.path.basename(file_path))
        self.render_pages()
        count = self.annotation_controller.load_annotations(file_path)
        logger.info("Loaded %d annotations", count)
        self.scroll_area.verticalScrollBar().setValue(0)
        return True

    def close_pdf(self) -> bool:
        """Closes the currently loaded PDF. Returns False if the user cancels."""
        if not self.pdf_reader.is_loaded():
            return True
        if not self._confirm_discard_changes():
            return False

        self.annotation_controller.close_document()
        self.clear_search()
        self.pdf_reader.close_document()
        self._clear_pages()
        self.file_name_label.setText("No PDF Loaded")
        self.annotation_list.clear()
        self.navigation_bar.set_status("")
        return True

    def _confirm_discard_changes(self) -> bool:
        """Offer to save unsaved annotations. Returns False if the user cancels."""
        if not self.annotation_manager.has_unsaved_changes:
            return True

        reply = QMessageBox.question(
            self,
            "Unsaved Changes",
            "You have unsaved annotations. Do you want to save them?",
            QMessageBox.Save | QMessageBox.Discard | QMessageBox.Cancel,
            QMessageBox.Save
        )
        if reply == QMessageBox.Cancel:
            return False
        if reply == QMessageBox.Save and not self.annotation_manager.save_to_json():
            QMessageBox.warning(self, "Save Failed", "Annotations could not be saved.")
            return False
        return True

    def closeEvent(self, event):
        if self._confirm_discard_changes():
            event.accept()
        else:
            event.ignore()

    # ===== Pages =====

    def _clear_pages(self):
        while self.page_labels:
            _, label = self.page_labels.popitem()
            self.page_layout.removeWidget(label)
            label.deleteLater()

    def render_pages(self):
        """(Re)build one label per page at the current zoom."""
        self._clear_pages()
        zoom = self.view_controller.zoom_level
        selected = self.annotation_controller.get_selected_annotations()
        selected_id = selected[0].id if selected else None

        for page_index in range(self.pdf_reader.get_page_count()):
            pixmap = self.pdf_reader.render_page(page_index, zoom, self.dark_mode)
            if pixmap is None:
                continue

            label = AnnotatedPageLabel(page_index, self.page_container)
            label.set_page(pixmap, zoom)
            label.set_annotations(self.annotation_controller.get_annotations_for_page(page_index))
            label.set_selected_id(selected_id)
            label.set_tool_mode(self.tool_mode)
            label.point_clicked.connect(self._on_page_clicked)
            label.shape_drawn.connect(self._on_shape_drawn)
            label.delete_requested.connect(self.delete_annotation)

            self.page_layout.addWidget(label, 0, Qt.AlignHCenter)
            self.page_labels[page_index] = label

        self._update_search_highlights()

    def _on_zoom_changed(self, zoom: float):
        vsb = self.scroll_area.verticalScrollBar()
        ratio = vsb.value() / vsb.maximum() if vsb.maximum() else 0.0

        self.zoom_label.setText(f"{self.view_controller.zoom_percent()}%")
        if not self.pdf_reader.is_loaded():
            return

        self.render_pages()
        QTimer.singleShot(0, lambda: vsb.setValue(int(ratio * vsb.maximum())))

    def scroll_to_annotation(self, annotation):
        self._scroll_to_region(annotation.page_index, annotation.y, annotation.height)

    def _scroll_to_region(self, page_index: int, y: float, height: float):
        label = self.page_labels.get(page_index)
        if label is None:
            return

        target = self.view_controller.scroll_target(
            label.y(), y, self.scroll_area.viewport().height(), height
        )
        self.scroll_area.verticalScrollBar().setValue(target)

    # ===== Tools =====

    def set_tool_mode(self, mode: ToolMode):
        self.tool_mode = mode
        for tool, button in self.tool_buttons.items():
            button.setChecked(tool == mode)
        for label in self.page_labels.values():
            label.set_tool_mode(mode)

    def _on_page_clicked(self, page_index: int, x: float, y: float):
        self.annotation_controller.select_at_point(
            page_index, x, y, self.view_controller.zoom_level
        )

    def _on_shape_drawn(self, page_index: int, rect, annotation_type):
        self.annotation_controller.create_annotation(page_index, rect, annotation_type)

    def delete_annotation(self, annotation):
        reply = QMessageBox.question(
            self,
            "Delete Annotation",
            "Are you sure you want to delete this annotation?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No
        )
        if reply == QMessageBox.Yes:
            self.annotation_controller.delete_annotation(annotation)

    def delete_selected_annotation(self):
        selected = self.annotation_controller.get_selected_annotations()
        if selected:
            self.delete_annotation(selected[0])

    def apply_redactions(self):
        regions = self.annotation_controller.redaction_regions()
        if not regions:
            QMessageBox.information(self, "No Redactions", "Mark regions with the Redact tool first.")
            return

        reply = QMessageBox.question(
            self,
            "Apply Redactions",
            f"Permanently remove the content under {len(regions)} marked region(s)?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No
        )
        if reply != QMessageBox.Yes:
            return

        self.pdf_reader.apply_redactions(regions)
        self.annotation_controller.consume_redactions()
        self.clear_search()
        self.render_pages()

        base, _ = os.path.splitext(self.pdf_reader.current_file_path or "document.pdf")
        output_path, _ = QFileDialog.getSaveFileName(
            self, "Save Redacted Copy", f"{base}_redacted.pdf", "PDF Files (*.pdf)"
        )
        if output_path:
            self.pdf_reader.save_as(output_path)

    def undo(self):
        self.annotation_controller.undo()

    def redo(self):
        self.annotation_controller.redo()

    def _update_history_buttons(self):
        self.undo_button.setEnabled(self.annotation_controller.can_undo())
        self.redo_button.setEnabled(self.annotation_controller.can_redo())

    # ===== Navigation =====

    def next_annotation(self):
        if self.navigator.next():
            self.scroll_to_annotation(self.navigator.current)

    def previous_annotation(self):
        if self.navigator.previous():
            self.scroll_to_annotation(self.navigator.current)

    def _on_list_index_activated(self, index: int):
        if self.navigator.select_index(index):
            self.scroll_to_annotation(self.navigator.current)

    # ===== Engine / navigator signal handlers =====

    def _on_annotations_changed(self):
        for page_index, label in self.page_labels.items():
            label.set_annotations(self.annotation_controller.get_annotations_for_page(page_index))
        self._update_history_buttons()

    def _on_selection_changed(self, action: str, records: list):
        selected = self.annotation_controller.get_selected_annotations()
        selected_id = selected[0].id if selected else None
        for label in self.page_labels.values():
            label.set_selected_id(selected_id)

    def _on_navigator_refreshed(self, count: int):
        self.annotation_list.load_annotations(self.navigator.annotations)
        self.annotation_list.set_active_index(self.navigator.cursor)
        self.navigation_bar.set_status(self.navigator.position_text())

    def _on_cursor_changed(self, cursor):
        self.annotation_list.set_active_index(cursor)
        self.navigation_bar.set_status(self.navigator.position_text())

    # ===== Search =====

    def toggle_search_bar(self):
        if self.search_bar.isVisible():
            self.search_bar.hide()
            self.clear_search()
        else:
            self.show_search_bar()

    def show_search_bar(self):
        self.search_bar.show_bar()

    def execute_search(self, search_term: str):
        count = self.search_engine.execute_search(search_term)
        if count == 0:
            self.search_bar.set_status(self.search_engine.status_text(), False)
            self._update_search_highlights()
            return
        self.find_next()

    def find_next(self):
        self._show_search_result(self.search_engine.next_result())

    def find_previous(self):
        self._show_search_result(self.search_engine.previous_result())

    def _show_search_result(self, result):
        self._update_search_highlights()
        self.search_bar.set_status(self.search_engine.status_text(), result is not None)
        if result is not None:
            self._scroll_to_region(result.page_index, result.y, result.height)

    def clear_search(self):
        self.search_engine.clear_search()
        self.search_bar.clear_search()
        self._update_search_highlights()

    def _update_search_highlights(self):
        current = self.search_engine.current_result
        for page_index, label in self.page_labels.items():
            hits = [tuple(r.rect) for r in self.search_engine.results_on_page(page_index)]
            on_page = current is not None and current.page_index == page_index
            label.set_search_hits(hits, tuple(current.rect) if on_page else None)
