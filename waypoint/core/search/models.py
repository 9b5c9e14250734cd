from dataclasses import dataclass

import fitz  # PyMuPDF


@dataclass
class SearchResult:
    """A single match of the search term on a page."""
    page_index: int
    rect: fitz.Rect
    text: str = ""

    @property
    def page_number(self) -> int:
        return self.page_index + 1

    @property
    def x(self) -> float:
        return self.rect.x0

    @property
    def y(self) -> float:
        return self.rect.y0

    @property
    def height(self) -> float:
        return self.rect.height
