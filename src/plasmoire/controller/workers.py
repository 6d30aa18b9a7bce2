"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for handling long-running tasks.

Why is this file needed?
------------------------
1. Responsiveness: An export of up to 9999 x 9999 pixels takes a while. Running
   it on the main thread would freeze the GUI, so it is pushed to a background
   thread.
2. Signals: They provide a safe way to update the GUI (progress bar, errors)
   from the background thread using Qt Signals.

Classes:
    ExportWorker: Renders the export crop and writes it to disk.
"""
from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QThread, Signal

from plasmoire.model.field import RenderCancelled, generate
from plasmoire.model.io import IOManager
from plasmoire.model.state import ViewState

logger = logging.getLogger(__name__)


class ExportWorker(QThread):
    # Signals to update the UI from the background
    progress_updated = Signal(int, str)  # e.g., (40, "Rendering... 40%")
    export_finished = Signal(str)
    export_cancelled = Signal()
    error_occurred = Signal(str)

    def __init__(self, state: ViewState, filepath: str | Path) -> None:
        super().__init__()
        # Snapshot: later pans or parameter changes don't affect this export
        self.state = state
        self.filepath = Path(filepath)
        self.is_running = True

    def run(self) -> None:
        try:
            logger.info(f"Starting export of {self.state.export_width}x{self.state.export_height} in background thread...")
            self.progress_updated.emit(0, "Rendering...")

            def progress_callback(percentage: int) -> None:
                # Cap below 100 until the file is written
                percentage = min(percentage, 95)
                self.progress_updated.emit(percentage, f"Rendering... {percentage}%")

            raster = generate(
                self.state.export_viewport(),
                self.state.parameters(),
                should_abort=lambda: not self.is_running,
                progress=progress_callback,
            )

            self.progress_updated.emit(97, "Writing file...")
            target = IOManager.save_raster(raster, self.filepath)

            self.progress_updated.emit(100, "Done.")
            self.export_finished.emit(str(target))

        except RenderCancelled:
            logger.info("Export cancelled by user.")
            self.export_cancelled.emit()

        except Exception as e:
            logger.error(f"Error in ExportWorker: {e}")
            self.error_occurred.emit(str(e))

    def stop(self) -> None:
        self.is_running = False
