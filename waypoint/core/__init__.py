"""
Core logic for Waypoint PDF.
"""
from .annotations import AnnotationManager, Annotation, AnnotationType
from .navigation import AnnotationNavigator, sort_reading_order
from .search import PDFSearchEngine, SearchResult

__all__ = ['AnnotationManager', 'Annotation', 'AnnotationType',
           'AnnotationNavigator', 'sort_reading_order',
           'PDFSearchEngine', 'SearchResult']
