"""
Sidebar Control Panel
Field parameters (pole distance, distortion) and the "Draw to file" export.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QFormLayout, QGroupBox, QSpinBox, QDoubleSpinBox,
    QPushButton, QLabel, QProgressBar, QFileDialog, QMessageBox
)

from plasmoire import config
from plasmoire.controller.store import ViewStore
from plasmoire.controller.workers import ExportWorker
from plasmoire.model.state import ViewState

logger = logging.getLogger(__name__)


class ControlPanel(QWidget):
    # Emitted with the written file path
    export_done = Signal(str)
    # True while an export worker is alive
    export_running = Signal(bool)

    def __init__(self, store: ViewStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        self.worker: Optional[ExportWorker] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(config.MARGIN)

        # --- Field Group ---
        grp_field = QGroupBox("Pattern")
        form_field = QFormLayout(grp_field)

        self.spin_pole = QSpinBox()
        self.spin_pole.setRange(config.POLE_DISTANCE_MIN, config.POLE_DISTANCE_MAX)
        self.spin_pole.setSingleStep(config.POLE_DISTANCE_STEP)
        self.spin_pole.setSuffix(" px")
        form_field.addRow("Pole distance:", self.spin_pole)

        self.spin_distortion = QDoubleSpinBox()
        self.spin_distortion.setRange(config.DISTORTION_MIN, config.DISTORTION_MAX)
        self.spin_distortion.setSingleStep(config.DISTORTION_STEP)
        self.spin_distortion.setDecimals(config.DISTORTION_DECIMALS)
        form_field.addRow("Distortion:", self.spin_distortion)

        layout.addWidget(grp_field)

        # --- Export Group ---
        grp_export = QGroupBox("Export")
        form_export = QFormLayout(grp_export)

        self.spin_file_width = QSpinBox()
        self.spin_file_width.setRange(config.EXPORT_WIDTH_MIN, config.EXPORT_SIZE_MAX)
        self.spin_file_width.setSuffix(" px")
        form_export.addRow("File width:", self.spin_file_width)

        self.spin_file_height = QSpinBox()
        self.spin_file_height.setRange(config.EXPORT_HEIGHT_MIN, config.EXPORT_SIZE_MAX)
        self.spin_file_height.setSuffix(" px")
        form_export.addRow("File height:", self.spin_file_height)

        self.btn_export = QPushButton("Draw to file")
        self.btn_export.setMinimumHeight(32)
        self.btn_export.clicked.connect(self.on_export_clicked)
        form_export.addRow(self.btn_export)

        self.progress = QProgressBar()
        self.progress.setRange(0, 100)
        self.progress.setVisible(False)
        form_export.addRow(self.progress)

        self.btn_cancel = QPushButton("Cancel")
        self.btn_cancel.setVisible(False)
        self.btn_cancel.clicked.connect(self.on_cancel_clicked)
        form_export.addRow(self.btn_cancel)

        self.lbl_status = QLabel("")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        self.lbl_status.setStyleSheet("color: gray;")
        self.lbl_status.setWordWrap(True)
        form_export.addRow(self.lbl_status)

        layout.addWidget(grp_export)
        layout.addStretch()

        self.refresh_from_state(self.store.state)

        # Connect after the initial fill so it doesn't echo back into the store
        self.spin_pole.valueChanged.connect(self.store.set_first_pole_distance)
        self.spin_distortion.valueChanged.connect(self.store.set_distortion)
        self.spin_file_width.valueChanged.connect(self.on_export_size_changed)
        self.spin_file_height.valueChanged.connect(self.on_export_size_changed)
        self.store.state_changed.connect(self.refresh_from_state)

    # --- SLOTS ---

    def refresh_from_state(self, state: ViewState) -> None:
        """Sync spinners with the store without re-triggering their signals."""
        for spin, value in (
            (self.spin_pole, int(state.first_pole_distance)),
            (self.spin_distortion, float(state.distortion)),
            (self.spin_file_width, state.export_width),
            (self.spin_file_height, state.export_height),
        ):
            if spin.value() != value:
                spin.blockSignals(True)
                spin.setValue(value)
                spin.blockSignals(False)

    def on_export_size_changed(self) -> None:
        self.store.set_export_size(self.spin_file_width.value(), self.spin_file_height.value())

    def on_export_clicked(self) -> None:
        if self.is_exporting():
            return

        fname, _ = QFileDialog.getSaveFileName(
            self, "Save Plasmoire to file", "", "PNG Images (*.png)"
        )
        if not fname:
            return

        if os.path.exists(fname):
            QMessageBox.critical(
                self, "Plasmoire: couldn't write", "Don't want to overwrite existing file."
            )
            return

        self.start_export(fname)

    def start_export(self, filepath: str) -> None:
        if self.is_exporting():
            logger.warning(f"Export already running, ignoring request for: {filepath}")
            return

        self.btn_export.setEnabled(False)
        self.btn_cancel.setVisible(True)
        self.progress.setValue(0)
        self.progress.setVisible(True)

        self.worker = ExportWorker(self.store.state, filepath)
        self.worker.progress_updated.connect(self.on_progress)
        self.worker.export_finished.connect(self.on_export_finished)
        self.worker.export_cancelled.connect(self.on_export_cancelled)
        self.worker.error_occurred.connect(self.on_export_error)
        self.worker.finished.connect(self._reset_export_ui)
        self.worker.start()
        self.export_running.emit(True)

    def is_exporting(self) -> bool:
        return self.worker is not None

    def on_cancel_clicked(self) -> None:
        if self.worker is not None:
            self.worker.stop()
            self.lbl_status.setText("Cancelling...")

    def on_progress(self, percentage: int, message: str) -> None:
        self.progress.setValue(percentage)
        self.lbl_status.setText(message)

    def on_export_finished(self, filepath: str) -> None:
        self.lbl_status.setText(f"Saved to {os.path.basename(filepath)} ✓")
        self.export_done.emit(filepath)

    def on_export_cancelled(self) -> None:
        self.lbl_status.setText("Export cancelled.")

    def on_export_error(self, message: str) -> None:
        self.lbl_status.setText("Export failed.")
        QMessageBox.critical(self, "Plasmoire: couldn't write", f"Some write error occurred:\n{message}")

    def _reset_export_ui(self) -> None:
        self.btn_export.setEnabled(True)
        self.btn_cancel.setVisible(False)
        self.progress.setVisible(False)
        self.worker = None
        self.export_running.emit(False)
