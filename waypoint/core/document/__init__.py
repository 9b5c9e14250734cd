"""PDF document handling."""
from .pdf_reader import PDFDocumentReader

__all__ = ["PDFDocumentReader"]
