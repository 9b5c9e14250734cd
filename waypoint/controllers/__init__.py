"""
Controllers between the UI and the core logic.
"""
from .annotation_controller import AnnotationController
from .view_controller import ViewController

__all__ = [
    'AnnotationController',
    'ViewController'
]
