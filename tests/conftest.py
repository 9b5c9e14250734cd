"""
Shared test fixtures.

Qt widgets are never shown; the offscreen platform lets QPixmap work
without a display.
"""
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt5.QtWidgets import QApplication

from tests.helpers import FakeEngine, make_annotation
from waypoint.core.annotations import AnnotationManager, AnnotationPersistence


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication for the whole test session."""
    app = QApplication.instance() or QApplication(["waypoint-tests"])
    yield app


@pytest.fixture
def three_annotations():
    """Three annotations supplied out of reading order: c, a, b."""
    return [
        make_annotation(2, 50, 10, "c"),
        make_annotation(1, 10, 10, "a"),
        make_annotation(1, 80, 10, "b"),
    ]


@pytest.fixture
def engine(qapp, three_annotations):
    return FakeEngine(three_annotations)


@pytest.fixture
def persistence(tmp_path):
    return AnnotationPersistence(tmp_path / "annotations")


@pytest.fixture
def manager(persistence):
    manager = AnnotationManager(persistence, autosave=False)
    manager.set_pdf_path("/docs/sample.pdf")
    return manager
