"""
Utility functions and helpers.
"""
from .exceptions import WaypointError, DocumentLoadError, AnnotationStoreError
from .logger import setup_logging

__all__ = [
    # Errors
    'WaypointError',
    'DocumentLoadError',
    'AnnotationStoreError',

    # Logging
    'setup_logging'
]
