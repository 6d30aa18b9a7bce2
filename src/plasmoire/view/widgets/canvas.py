"""
Plasma Canvas
=============
The on-screen blit of the field. Renders a raster the size of the widget,
anchored at the store's current origin, and turns mouse drags into pans.

Zooming is deliberately absent: the pattern only exists at integer sample
points, so any interpolation between them would destroy the moire.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QPoint, Qt
from PySide6.QtGui import QImage, QMouseEvent, QPainter, QPaintEvent
from PySide6.QtWidgets import QSizePolicy, QWidget

from plasmoire.controller.store import ViewStore
from plasmoire.model.field import InvalidParameter, generate
from plasmoire.model.io import raster_to_qimage
from plasmoire.model.state import ViewState

logger = logging.getLogger(__name__)


class PlasmaCanvas(QWidget):
    def __init__(self, store: ViewStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setCursor(Qt.OpenHandCursor)

        self._last_pos: Optional[QPoint] = None
        # (state, width, height) of the cached image
        self._cache_key: Optional[tuple[ViewState, int, int]] = None
        self._cache_image: Optional[QImage] = None

        self.store.state_changed.connect(lambda _state: self.update())

    # --- RENDERING ---

    def render_image(self) -> Optional[QImage]:
        """Image for the current state and widget size, or None if there is nothing to draw."""
        width, height = self.width(), self.height()
        if width <= 0 or height <= 0:
            return None

        key = (self.store.state, width, height)
        if key == self._cache_key:
            return self._cache_image

        state = self.store.state
        raster = generate(state.viewport(width, height), state.parameters())
        self._cache_key = key
        self._cache_image = raster_to_qimage(raster)
        return self._cache_image

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            image = self.render_image()
            if image is not None:
                painter.drawImage(0, 0, image)
        except InvalidParameter as e:
            logger.error(f"Cannot render view: {e}")
            painter.fillRect(self.rect(), Qt.black)
        finally:
            painter.end()

    # --- DRAG TO PAN ---

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.LeftButton:
            self._last_pos = event.position().toPoint()
            self.setCursor(Qt.ClosedHandCursor)
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._last_pos is not None and event.buttons() & Qt.LeftButton:
            pos = event.position().toPoint()
            diff = pos - self._last_pos
            self._last_pos = pos
            self.store.pan(diff.x(), diff.y())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.LeftButton:
            self._last_pos = None
            self.setCursor(Qt.OpenHandCursor)
        super().mouseReleaseEvent(event)
