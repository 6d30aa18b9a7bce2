"""Tests for the view store and the background export worker.

The worker's run() is called on the test thread so its signals are delivered
synchronously.
"""
import pytest

from plasmoire.config import RENDER_BAND_ROWS
from plasmoire.controller.store import ViewStore
from plasmoire.controller.workers import ExportWorker
from plasmoire.model.field import FieldParameters, generate
from plasmoire.model.io import IOManager
from plasmoire.model.state import ViewState


class TestViewStore:

    def test_pan_emits_new_state(self, qapp):
        store = ViewStore(ViewState(start_x=0, start_y=0))
        received = []
        store.state_changed.connect(received.append)

        store.pan(3, 4)

        assert len(received) == 1
        assert (received[0].start_x, received[0].start_y) == (-3, -4)
        assert store.state is received[0]

    def test_zero_pan_is_silent(self, qapp):
        store = ViewStore()
        received = []
        store.state_changed.connect(received.append)
        store.pan(0, 0)
        store.set_state(ViewState.initial())
        assert received == []

    def test_parameter_setters(self, qapp):
        store = ViewStore()
        store.set_first_pole_distance(300)
        store.set_distortion(0.9)
        store.set_export_size(640, 400)
        assert store.state.parameters() == FieldParameters(300, 0.9)
        assert (store.state.export_width, store.state.export_height) == (640, 400)


class TestExportWorker:

    @pytest.fixture
    def state(self):
        return ViewState(start_x=-50, start_y=-40).with_export_size(64, 48)

    def _collect(self, worker):
        events = {"progress": [], "finished": [], "cancelled": [], "error": []}
        worker.progress_updated.connect(lambda p, msg: events["progress"].append(p))
        worker.export_finished.connect(events["finished"].append)
        worker.export_cancelled.connect(lambda: events["cancelled"].append(True))
        worker.error_occurred.connect(events["error"].append)
        return events

    def test_writes_export_crop(self, qapp, state, tmp_path):
        target = tmp_path / "crop.png"
        worker = ExportWorker(state, target)
        events = self._collect(worker)

        worker.run()

        assert events["error"] == []
        assert events["finished"] == [str(target)]
        assert events["progress"][-1] == 100
        loaded = IOManager.load_grey(target)
        assert (loaded.width(), loaded.height()) == (64, 48)

        expected = generate(state.export_viewport(), state.parameters())
        assert loaded.pixelColor(10, 5).red() == expected.pixels[5, 10]

    def test_cancelled_before_start(self, qapp, state, tmp_path):
        target = tmp_path / "never.png"
        worker = ExportWorker(state, target)
        events = self._collect(worker)

        worker.stop()
        worker.run()

        assert events["cancelled"] == [True]
        assert events["finished"] == []
        assert not target.exists()

    def test_stop_during_render_writes_nothing(self, qapp, tmp_path):
        # Three bands of rows, stop requested after the first one
        state = ViewState(start_x=-50, start_y=-40).with_export_size(64, 3 * RENDER_BAND_ROWS)
        target = tmp_path / "interrupted.png"
        worker = ExportWorker(state, target)
        events = self._collect(worker)
        worker.progress_updated.connect(lambda p, msg: worker.stop() if p > 0 else None)

        worker.run()

        assert events["cancelled"] == [True]
        assert events["finished"] == []
        assert events["error"] == []
        assert 0 < max(events["progress"]) < 100
        assert not target.exists()

    def test_existing_file_reports_error(self, qapp, state, tmp_path):
        target = tmp_path / "taken.png"
        target.write_bytes(b"")
        worker = ExportWorker(state, target)
        events = self._collect(worker)

        worker.run()

        assert len(events["error"]) == 1
        assert "overwrite" in events["error"][0]
        assert events["finished"] == []

    def test_invalid_state_reports_error(self, qapp, tmp_path):
        worker = ExportWorker(ViewState().with_distortion(0), tmp_path / "bad.png")
        events = self._collect(worker)
        worker.run()
        assert len(events["error"]) == 1
        assert not (tmp_path / "bad.png").exists()
