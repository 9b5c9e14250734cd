from PyQt5.QtCore import pyqtSignal
from PyQt5.QtWidgets import QFrame, QHBoxLayout, QLabel, QToolButton


class NavigationBar(QFrame):
    """Prev/next annotation buttons with an "N of M" status."""

    prev_requested = pyqtSignal()
    next_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("NavigationBar")
        self.setup_ui()
        self.set_status("")

    def setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        self.prev_button = QToolButton(self)
        self.prev_button.setText("◀ Prev Annot")
        self.prev_button.setToolTip("Previous annotation (Ctrl+[)")
        self.prev_button.clicked.connect(self.prev_requested.emit)
        layout.addWidget(self.prev_button)

        self.next_button = QToolButton(self)
        self.next_button.setText("Next Annot ▶")
        self.next_button.setToolTip("Next annotation (Ctrl+])")
        self.next_button.clicked.connect(self.next_requested.emit)
        layout.addWidget(self.next_button)

        self.status_label = QLabel("", self)
        self.status_label.setObjectName("statusLabel")
        self.status_label.setMinimumWidth(70)
        layout.addWidget(self.status_label)

    def set_status(self, text: str):
        """Update the position text; buttons are disabled with nothing to visit."""
        self.status_label.setText(text)
        has_annotations = bool(text)
        self.prev_button.setEnabled(has_annotations)
        self.next_button.setEnabled(has_annotations)
