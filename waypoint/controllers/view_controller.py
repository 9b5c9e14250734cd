"""
Controller for zoom level and scroll positions.
"""
from PyQt5.QtCore import QObject, pyqtSignal


class ViewController(QObject):
    """Tracks zoom and computes where to scroll for a page position."""

    zoom_changed = pyqtSignal(float)  # Emitted when zoom level changes

    def __init__(self, zoom: float = 1.5, zoom_step: float = 0.25,
                 min_zoom: float = 0.25, max_zoom: float = 5.0):
        super().__init__()
        self.zoom_level = zoom
        self.zoom_step = zoom_step
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom

    def set_zoom(self, zoom: float) -> bool:
        """
        Set the zoom level, clamped to the allowed range.

        Returns:
            True if the zoom level changed
        """
        zoom = max(self.min_zoom, min(self.max_zoom, round(zoom, 4)))
        if zoom == self.zoom_level:
            return False

        self.zoom_level = zoom
        self.zoom_changed.emit(zoom)
        return True

    def zoom_in(self) -> bool:
        return self.set_zoom(self.zoom_level + self.zoom_step)

    def zoom_out(self) -> bool:
        return self.set_zoom(self.zoom_level - self.zoom_step)

    def zoom_percent(self) -> int:
        return int(round(self.zoom_level * 100))

    def scroll_target(self, page_top: int, y: float, viewport_height: int,
                      height: float = 0.0) -> int:
        """
        Scroll position that centers a page-local region in the viewport.

        Args:
            page_top: Pixel offset of the page inside the scrolled container
            y: Top of the region in PDF points
            viewport_height: Height of the visible area in pixels
            height: Height of the region in PDF points

        Returns:
            Scroll bar value (never negative)
        """
        region_top = page_top + y * self.zoom_level
        centered = region_top - (viewport_height - height * self.zoom_level) / 2
        return max(0, int(centered))
