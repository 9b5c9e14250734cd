"""
Handles persistence of annotations to/from JSON files.
"""
import hashlib
import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from waypoint.utils.exceptions import AnnotationStoreError
from .models import Annotation

logger = logging.getLogger(__name__)


class AnnotationPersistence:
    """Stores one JSON file of annotations per PDF in a data directory."""

    def __init__(self, storage_dir: Union[str, Path]):
        self.storage_dir = Path(storage_dir)

    def get_json_path(self, pdf_path: str) -> Path:
        """
        Get the JSON file path for a given PDF.

        The file name is a hash of the PDF path, so storage is unique per
        document regardless of where it lives.

        Args:
            pdf_path: Path to the PDF file

        Returns:
            Path to the corresponding JSON annotations file
        """
        path_hash = hashlib.md5(pdf_path.encode()).hexdigest()
        return self.storage_dir / f"{path_hash}.json"

    def save_to_json(self, annotations: List[Annotation], pdf_path: str,
                     file_path: Optional[Union[str, Path]] = None) -> Path:
        """
        Save annotations to a JSON file.

        Args:
            annotations: Annotations to save
            pdf_path: Path to the associated PDF
            file_path: Optional custom path for the JSON file

        Returns:
            Path that was written

        Raises:
            AnnotationStoreError: If the file cannot be written
        """
        target = Path(file_path) if file_path else self.get_json_path(pdf_path)
        data = {
            'pdf_path': pdf_path,
            'annotations': [ann.to_dict() for ann in annotations]
        }

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, 'w') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise AnnotationStoreError(
                f"Failed to save annotations: {e}", store_path=str(target)
            ) from e

        logger.debug("Saved %d annotations to %s", len(annotations), target)
        return target

    def load_from_json(self, pdf_path: str,
                       file_path: Optional[Union[str, Path]] = None) -> List[Annotation]:
        """
        Load annotations from a JSON file.

        Args:
            pdf_path: Path to the PDF file
            file_path: Optional custom path for the JSON file

        Returns:
            Loaded annotations (empty if no file exists)

        Raises:
            AnnotationStoreError: If the file is unreadable or malformed
        """
        source = Path(file_path) if file_path else self.get_json_path(pdf_path)
        if not source.exists():
            return []

        try:
            with open(source, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise AnnotationStoreError(
                f"Failed to read annotations: {e}", store_path=str(source)
            ) from e

        stored_pdf_path = data.get('pdf_path')
        if stored_pdf_path != pdf_path:
            logger.warning("Annotation file %s is for a different PDF: %s",
                           source, stored_pdf_path)

        try:
            return [Annotation.from_dict(ann_data)
                    for ann_data in data.get('annotations', [])]
        except (KeyError, TypeError, ValueError) as e:
            raise AnnotationStoreError(
                f"Malformed annotation record: {e}", store_path=str(source)
            ) from e

    def delete_json_file(self, pdf_path: str) -> None:
        """
        Delete the JSON annotation file for a PDF, if any.

        Raises:
            AnnotationStoreError: If the file exists but cannot be removed
        """
        file_path = self.get_json_path(pdf_path)
        if not file_path.exists():
            return

        try:
            os.remove(file_path)
        except OSError as e:
            raise AnnotationStoreError(
                f"Failed to delete annotation file: {e}", store_path=str(file_path)
            ) from e

    def has_saved_annotations(self, pdf_path: str) -> bool:
        """Check if saved annotations exist for a PDF."""
        return self.get_json_path(pdf_path).exists()
