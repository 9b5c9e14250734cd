from PyQt5.QtCore import QEvent, Qt, pyqtSignal
from PyQt5.QtWidgets import QFrame, QHBoxLayout, QLabel, QLineEdit, QToolButton


class SearchLineEdit(QLineEdit):
    """
    QLineEdit that turns Tab/Shift+Tab into result navigation.

    Tab has to be caught in ``event`` because Qt uses it for focus
    changes before ``keyPressEvent`` runs.
    """

    navigate_next = pyqtSignal()
    navigate_prev = pyqtSignal()

    def event(self, event: QEvent) -> bool:
        if event.type() == QEvent.KeyPress:
            if event.key() == Qt.Key_Tab:
                self.navigate_next.emit()
                return True
            if event.key() == Qt.Key_Backtab:
                self.navigate_prev.emit()
                return True
        return super().event(event)


class SearchBar(QFrame):
    """Search field with prev/next result buttons, hidden until opened."""

    search_requested = pyqtSignal(str)
    next_result_requested = pyqtSignal()
    prev_result_requested = pyqtSignal()
    close_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("SearchBar")
        self._last_search_term = ""
        self._has_results = False
        self.setup_ui()
        self.hide()

    def setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(10, 6, 10, 6)
        layout.setSpacing(6)

        self.search_input = SearchLineEdit(self)
        self.search_input.setPlaceholderText("Search in document...")
        self.search_input.setFixedWidth(260)
        self.search_input.returnPressed.connect(self._on_navigate_next)
        self.search_input.textChanged.connect(self._on_text_changed)
        self.search_input.navigate_next.connect(self._on_navigate_next)
        self.search_input.navigate_prev.connect(self._on_navigate_prev)
        layout.addWidget(self.search_input)

        self.prev_button = QToolButton(self)
        self.prev_button.setText("◀")
        self.prev_button.setToolTip("Previous (Shift+Tab, Shift+F3)")
        self.prev_button.clicked.connect(self._on_navigate_prev)
        layout.addWidget(self.prev_button)

        self.next_button = QToolButton(self)
        self.next_button.setText("▶")
        self.next_button.setToolTip("Next (Tab, Enter, F3)")
        self.next_button.clicked.connect(self._on_navigate_next)
        layout.addWidget(self.next_button)

        self.status_label = QLabel("", self)
        self.status_label.setObjectName("statusLabel")
        layout.addWidget(self.status_label)
        layout.addStretch()

        self.close_button = QToolButton(self)
        self.close_button.setText("✕")
        self.close_button.setToolTip("Close search")
        self.close_button.clicked.connect(self._on_close)
        layout.addWidget(self.close_button)

    def _search_term(self) -> str:
        return self.search_input.text().strip()

    def _needs_search(self, search_term: str) -> bool:
        return search_term != self._last_search_term or not self._has_results

    def _request_search(self, search_term: str):
        self._last_search_term = search_term
        self._has_results = False
        self.search_requested.emit(search_term)

    def _on_navigate_next(self):
        """Step to the next result, or search first if the term is new."""
        search_term = self._search_term()
        if not search_term:
            return
        if self._needs_search(search_term):
            self._request_search(search_term)
        else:
            self.next_result_requested.emit()

    def _on_navigate_prev(self):
        search_term = self._search_term()
        if not search_term:
            return
        if self._needs_search(search_term):
            self._request_search(search_term)
        else:
            self.prev_result_requested.emit()

    def _on_text_changed(self, text: str):
        if text.strip() != self._last_search_term:
            self._has_results = False

    def _on_close(self):
        self.hide()
        self.close_requested.emit()

    def show_bar(self):
        """Show the bar and focus the search field."""
        self.show()
        self.search_input.setFocus()
        self.search_input.selectAll()

    def set_status(self, text: str, has_results: bool):
        self.status_label.setText(text)
        self._has_results = has_results

    def clear_search(self):
        self.search_input.clear()
        self.status_label.setText("")
        self._last_search_term = ""
        self._has_results = False
