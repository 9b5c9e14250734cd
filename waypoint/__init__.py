"""
Waypoint PDF: a PDF viewer with reading-order annotation navigation.
"""
__version__ = "0.1.0"
