"""
Main Application Window
=======================
The primary GUI container: the plasma canvas on the left, the sidebar with
parameters and export controls on the right.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (File -> Draw to file, View -> Reset)
   to the store and the sidebar.
"""
from PySide6.QtCore import QSize
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QWidget, QHBoxLayout

from plasmoire import config
from plasmoire.controller.store import ViewStore
from plasmoire.model.state import ViewState
from plasmoire.view.control_panel import ControlPanel
from plasmoire.view.widgets.canvas import PlasmaCanvas


VISIBLE_APP_NAME = "Plasmoire - parameterized plasma"


class MainWindow(QMainWindow):
    def __init__(self, store: ViewStore) -> None:
        super().__init__()
        self.store = store

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.setMinimumSize(QSize(*config.WINDOW_MIN_SIZE))
        self.resize(*config.WINDOW_PREFERRED_SIZE)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        main_layout = QHBoxLayout(main_widget)
        main_layout.setContentsMargins(config.MARGIN, config.MARGIN, config.MARGIN, config.MARGIN)
        main_layout.setSpacing(config.MARGIN)

        # --- LEFT: Canvas ---
        self.canvas = PlasmaCanvas(self.store)
        main_layout.addWidget(self.canvas, stretch=1)

        # --- RIGHT: Sidebar ---
        self.panel = ControlPanel(self.store)
        main_layout.addWidget(self.panel)

        self.panel.export_done.connect(self.on_export_done)
        self.panel.export_running.connect(self.on_export_running)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

    def _create_actions(self) -> None:
        self.act_export = QAction("Draw to file...", self)
        self.act_export.setShortcut("Ctrl+S")
        self.act_export.triggered.connect(self.panel.on_export_clicked)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        self.act_reset_view = QAction("Reset view", self)
        self.act_reset_view.setShortcut("Ctrl+R")
        self.act_reset_view.triggered.connect(self.on_reset_view)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_export)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.act_reset_view)

    # --- SLOTS ---

    def on_reset_view(self) -> None:
        """Back to the initial origin and parameters; the export size is kept."""
        state = self.store.state
        self.store.set_state(
            ViewState.initial().with_export_size(state.export_width, state.export_height)
        )

    def on_export_running(self, running: bool) -> None:
        self.act_export.setEnabled(not running)

    def on_export_done(self, filepath: str) -> None:
        self.statusBar().showMessage(f"Saved {filepath}", 5000)

    def closeEvent(self, event) -> None:
        worker = self.panel.worker
        if worker is not None and worker.isRunning():
            worker.stop()
            worker.wait()
        super().closeEvent(event)
