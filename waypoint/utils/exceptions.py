"""
Exception hierarchy for Waypoint PDF.

Navigation itself never raises; these cover document loading and
annotation storage, where failures come from the filesystem or from
malformed input.
"""
from typing import Any, Dict, Optional


class WaypointError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DocumentLoadError(WaypointError):
    """Raised when a PDF cannot be opened."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        super().__init__(message, details)
        self.file_path = file_path


class AnnotationStoreError(WaypointError):
    """Raised when stored annotations cannot be read or written."""

    def __init__(self, message: str, store_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        details = details or {}
        if store_path:
            details["store_path"] = store_path
        super().__init__(message, details)
        self.store_path = store_path
