"""
Reading-order navigation over annotations.
"""
from .reading_order import compare_reading_order, reading_order_key, sort_reading_order
from .navigator import AnnotationNavigator

__all__ = [
    'AnnotationNavigator',
    'compare_reading_order',
    'reading_order_key',
    'sort_reading_order'
]
