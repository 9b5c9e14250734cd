"""
Text search for PDF documents.
"""
from .models import SearchResult
from .search_engine import PDFSearchEngine

__all__ = ['PDFSearchEngine', 'SearchResult']
