"""
Theme colors and stylesheet generation.
"""
from dataclasses import dataclass

from PyQt5.QtWidgets import QWidget


@dataclass
class ThemeColors:
    """Color definitions for a theme."""
    bg_primary: str
    bg_secondary: str
    bg_tertiary: str
    text_primary: str
    text_secondary: str
    text_muted: str
    accent_primary: str
    accent_hover: str
    border_primary: str


DARK_THEME = ThemeColors(
    bg_primary="#2e2e2e",
    bg_secondary="#3e3e3e",
    bg_tertiary="#4e4e4e",
    text_primary="#f0f0f0",
    text_secondary="#B5B5C5",
    text_muted="#8899AA",
    accent_primary="#4a9eff",
    accent_hover="#3a8eef",
    border_primary="#555555",
)

LIGHT_THEME = ThemeColors(
    bg_primary="#f0f0f0",
    bg_secondary="#ffffff",
    bg_tertiary="#e0e0e0",
    text_primary="#2e2e2e",
    text_secondary="#7A899C",
    text_muted="#8899AA",
    accent_primary="#4a9eff",
    accent_hover="#3a8eef",
    border_primary="#cccccc",
)


def apply_theme(widget: QWidget, dark_mode: bool) -> None:
    """Apply the dark or light stylesheet to a widget and its children."""
    theme = DARK_THEME if dark_mode else LIGHT_THEME
    widget.setStyleSheet(generate_stylesheet(theme))


def generate_stylesheet(theme: ThemeColors) -> str:
    return f"""
        QMainWindow, QWidget, QLabel, QFrame {{
            background-color: {theme.bg_primary};
            color: {theme.text_primary};
            border: none;
        }}
        QScrollArea > QWidget > QWidget {{
            background-color: {theme.bg_tertiary};
        }}
        QToolButton {{
            background-color: transparent;
            color: {theme.text_secondary};
            border: none;
            border-radius: 4px;
            padding: 4px 8px;
        }}
        QToolButton:hover {{
            background-color: {theme.bg_secondary};
        }}
        QToolButton:checked {{
            background-color: {theme.accent_primary};
            color: white;
        }}
        QToolButton:checked:hover {{
            background-color: {theme.accent_hover};
        }}
        QToolButton:disabled {{
            color: {theme.text_muted};
        }}
        QLabel[objectName="statusLabel"] {{
            color: {theme.text_muted};
        }}
        QLineEdit {{
            background-color: {theme.bg_secondary};
            color: {theme.text_primary};
            border: 1px solid {theme.border_primary};
            border-radius: 4px;
            padding: 4px 6px;
        }}
        QLineEdit:focus {{
            border: 1px solid {theme.accent_primary};
        }}
        QListWidget {{
            background-color: {theme.bg_secondary};
            border-left: 1px solid {theme.border_primary};
            color: {theme.text_primary};
        }}
        QListWidget::item:selected {{
            background-color: {theme.accent_primary};
            color: white;
        }}
    """
