"""Shared fixtures. Qt runs headless for the whole session."""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from plasmoire.model.field import FieldParameters, Viewport


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def default_parameters() -> FieldParameters:
    return FieldParameters(first_pole_distance=100, distortion=1.3)


@pytest.fixture
def small_viewport() -> Viewport:
    return Viewport(start_x=-17, start_y=-9, width=40, height=24)
