"""
PDF document reading, rendering and redaction.
"""
import logging
from collections import defaultdict
from typing import Iterable, Optional, Tuple

import fitz  # PyMuPDF
from PyQt5.QtGui import QImage, QPixmap

from waypoint.utils.exceptions import DocumentLoadError

logger = logging.getLogger(__name__)

RedactionRegion = Tuple[int, Tuple[float, float, float, float]]


class PDFDocumentReader:
    """Handles PDF document loading, rendering, and basic operations."""

    def __init__(self):
        self.doc: Optional[fitz.Document] = None
        self.total_pages: int = 0
        self.current_file_path: Optional[str] = None

    def load_pdf(self, file_path: str) -> int:
        """
        Load a PDF document, closing any open one.

        Args:
            file_path: Path to the PDF file

        Returns:
            Number of pages

        Raises:
            DocumentLoadError: If the file cannot be opened as a PDF
        """
        if self.doc:
            self.close_document()

        try:
            doc = fitz.open(file_path)
        except Exception as e:
            raise DocumentLoadError(f"Error loading PDF: {e}", file_path=file_path) from e

        if not doc.is_pdf:
            doc.close()
            raise DocumentLoadError("Not a PDF document", file_path=file_path)

        self.doc = doc
        self.total_pages = doc.page_count
        self.current_file_path = file_path
        logger.info("Opened %s (%d pages)", file_path, self.total_pages)
        return self.total_pages

    def close_document(self) -> None:
        """Close the current PDF document and clear all state."""
        if self.doc:
            self.doc.close()
            self.doc = None

        self.total_pages = 0
        self.current_file_path = None

    def get_page(self, page_index: int) -> Optional[fitz.Page]:
        """
        Get a page object for direct operations.

        Args:
            page_index: 0-based index of the page

        Returns:
            PyMuPDF page object, or None if invalid
        """
        if not self.doc or not 0 <= page_index < self.total_pages:
            return None
        return self.doc.load_page(page_index)

    def render_page(self, page_index: int, zoom_level: float,
                    dark_mode: bool = False) -> Optional[QPixmap]:
        """
        Render a single page of the PDF to a pixmap.

        Args:
            page_index: 0-based index of the page to render
            zoom_level: Zoom factor for rendering
            dark_mode: Whether to invert colors for dark mode

        Returns:
            The rendered page, or None for an invalid page
        """
        page = self.get_page(page_index)
        if page is None:
            return None

        pix = page.get_pixmap(matrix=fitz.Matrix(zoom_level, zoom_level), alpha=False)
        img = QImage(pix.samples, pix.width, pix.height, pix.stride, QImage.Format_RGB888)

        if dark_mode:
            img.invertPixels()

        # QImage does not own pix.samples; copy before the buffer goes away
        return QPixmap.fromImage(img.copy())

    def apply_redactions(self, regions: Iterable[RedactionRegion]) -> int:
        """
        Permanently remove content under the given regions.

        The change is made to the in-memory document; call ``save_as`` to
        write it out.

        Args:
            regions: (page_index, (x0, y0, x1, y1)) pairs in PDF points

        Returns:
            Number of regions applied
        """
        if not self.doc:
            return 0

        by_page = defaultdict(list)
        for page_index, rect in regions:
            by_page[page_index].append(rect)

        applied = 0
        for page_index, rects in sorted(by_page.items()):
            page = self.get_page(page_index)
            if page is None:
                logger.warning("Skipping redactions on missing page %d", page_index)
                continue
            for rect in rects:
                page.add_redact_annot(fitz.Rect(rect), fill=(0, 0, 0))
            page.apply_redactions()
            applied += len(rects)

        logger.info("Applied %d redactions", applied)
        return applied

    def save_as(self, output_path: str) -> None:
        """Write the current (possibly redacted) document to a new file."""
        if not self.doc:
            return
        self.doc.save(output_path, garbage=3, deflate=True)

    def is_loaded(self) -> bool:
        return self.doc is not None

    def get_page_count(self) -> int:
        return self.total_pages
