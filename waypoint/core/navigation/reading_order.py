"""
Accessibility reading order for annotations.

Screen readers and keyboard users walk a document page by page, top to
bottom, left to right. Annotations are ordered by ``(page_number, y, x)``
with y growing downward.
"""
from typing import Iterable, List, Tuple


def reading_order_key(annotation) -> Tuple[int, float, float]:
    """Sort key for an annotation: page number, then y, then x."""
    return (annotation.page_number, annotation.y, annotation.x)


def compare_reading_order(a, b) -> int:
    """
    Three-way comparison of two annotations in reading order.

    Returns:
        -1 if a comes first, 1 if b comes first, 0 if they share a position
    """
    key_a = reading_order_key(a)
    key_b = reading_order_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_reading_order(annotations: Iterable) -> List:
    """
    Return annotations sorted in reading order.

    The sort is stable: annotations at the same position keep the order
    in which they were supplied.
    """
    return sorted(annotations, key=reading_order_key)
