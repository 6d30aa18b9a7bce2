from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from plasmoire.model.state import ViewState

logger = logging.getLogger(__name__)


class ViewStore(QObject):
    """Owns the current ViewState and notifies views whenever it is replaced."""
    state_changed = Signal(object)

    def __init__(self, state: ViewState | None = None) -> None:
        super().__init__()
        self._state = state or ViewState.initial()

    @property
    def state(self) -> ViewState:
        return self._state

    def set_state(self, state: ViewState) -> None:
        if state == self._state:
            return
        self._state = state
        self.state_changed.emit(self._state)

    def pan(self, dx: int, dy: int) -> None:
        if dx or dy:
            self.set_state(self._state.pan(dx, dy))

    def set_first_pole_distance(self, value: float) -> None:
        logger.debug(f"Pole distance -> {value}")
        self.set_state(self._state.with_first_pole_distance(value))

    def set_distortion(self, value: float) -> None:
        logger.debug(f"Distortion -> {value}")
        self.set_state(self._state.with_distortion(value))

    def set_export_size(self, width: int, height: int) -> None:
        self.set_state(self._state.with_export_size(width, height))
