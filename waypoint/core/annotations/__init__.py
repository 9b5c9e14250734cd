"""
Annotation system for PDF documents.
"""
from .models import Annotation, AnnotationType, SelectionAction, DEFAULT_COLORS
from .manager import AnnotationManager
from .undo_redo import UndoRedoStack
from .persistence import AnnotationPersistence

__all__ = [
    'Annotation',
    'AnnotationType',
    'SelectionAction',
    'DEFAULT_COLORS',
    'AnnotationManager',
    'UndoRedoStack',
    'AnnotationPersistence'
]
