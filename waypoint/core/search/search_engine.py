"""
PDF search functionality with result management.
"""
import logging
from typing import List, Optional

import fitz  # PyMuPDF

from .models import SearchResult

logger = logging.getLogger(__name__)


class PDFSearchEngine:
    """
    Finds a term across every page of the open document.

    Results are kept in reading order (page, then top to bottom, then
    left to right) with a wrap-around cursor for prev/next stepping.
    """

    def __init__(self, reader):
        """
        Args:
            reader: PDFDocumentReader holding the document to search
        """
        self.reader = reader
        self.search_results: List[SearchResult] = []
        self.current_search_index: int = -1
        self.current_search_term: str = ""

    def clear_search(self) -> None:
        """Reset all search state."""
        self.search_results = []
        self.current_search_index = -1
        self.current_search_term = ""

    def execute_search(self, search_term: str) -> int:
        """
        Search the whole document. Matching ignores case.

        Repeating the current term returns the existing results; call
        ``clear_search`` first after the document content changes.

        Args:
            search_term: Text to search for

        Returns:
            Number of results found
        """
        search_term = search_term.strip()
        if not self.reader.is_loaded() or not search_term:
            self.clear_search()
            return 0

        if search_term == self.current_search_term:
            return len(self.search_results)

        results = []
        for page_index in range(self.reader.get_page_count()):
            page = self.reader.get_page(page_index)
            # Quads split a match that wraps lines into one piece per line
            quads = page.search_for(search_term, quads=True)
            for rect in merge_line_fragments([quad.rect for quad in quads]):
                results.append(SearchResult(page_index, rect, search_term))

        self.current_search_term = search_term
        self.search_results = results
        self.current_search_index = -1
        logger.debug("Search for %r found %d results", search_term, len(results))
        return len(results)

    @property
    def current_result(self) -> Optional[SearchResult]:
        if 0 <= self.current_search_index < len(self.search_results):
            return self.search_results[self.current_search_index]
        return None

    def next_result(self) -> Optional[SearchResult]:
        """Move to the next result, wrapping to the first."""
        if not self.search_results:
            return None
        self.current_search_index = (self.current_search_index + 1) % len(self.search_results)
        return self.current_result

    def previous_result(self) -> Optional[SearchResult]:
        """Move to the previous result, wrapping to the last."""
        if not self.search_results:
            return None
        if self.current_search_index <= 0:
            self.current_search_index = len(self.search_results) - 1
        else:
            self.current_search_index -= 1
        return self.current_result

    def results_on_page(self, page_index: int) -> List[SearchResult]:
        return [r for r in self.search_results if r.page_index == page_index]

    def get_result_count(self) -> int:
        return len(self.search_results)

    def status_text(self) -> str:
        """Result position for display, e.g. ``"2 of 7"`` or ``"0 results"``."""
        if not self.current_search_term:
            return ""
        count = len(self.search_results)
        if count == 0:
            return "0 results"
        if self.current_search_index < 0:
            return f"{count} results"
        return f"{self.current_search_index + 1} of {count}"


def merge_line_fragments(rects: List[fitz.Rect], x_gap: float = 1.0) -> List[fitz.Rect]:
    """
    Join pieces of one match that sit side by side on the same line.

    Pieces on different lines, or separated horizontally, stay apart so
    that each visible hit gets its own box.

    Args:
        rects: Match rectangles from one page
        x_gap: Largest horizontal gap, in points, still treated as touching

    Returns:
        Rectangles sorted top to bottom, then left to right
    """
    merged: List[fitz.Rect] = []
    for rect in sorted(rects, key=lambda r: (r.y0, r.x0)):
        if merged:
            last = merged[-1]
            same_line = rect.y0 < last.y1 and rect.y1 > last.y0
            if same_line and rect.x0 <= last.x1 + x_gap:
                merged[-1] = fitz.Rect(last) | rect
                continue
        merged.append(fitz.Rect(rect))
    return merged
