"""Tests for the immutable view state and its transformations."""
import dataclasses

import pytest

from plasmoire import config
from plasmoire.model.field import FieldParameters, Viewport
from plasmoire.model.state import ViewState


class TestViewState:

    def test_initial_values(self):
        state = ViewState.initial()
        assert state.start_x == state.start_y == -2 * config.INIT_POLE_DISTANCE
        assert state.first_pole_distance == config.INIT_POLE_DISTANCE
        assert state.distortion == config.INIT_DISTORTION
        assert (state.export_width, state.export_height) == (1920, 1080)

    def test_frozen(self):
        state = ViewState.initial()
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.start_x = 0

    def test_pan_moves_origin_against_drag(self):
        state = ViewState(start_x=0, start_y=0)
        moved = state.pan(10, -4)
        assert (moved.start_x, moved.start_y) == (-10, 4)
        # original untouched
        assert (state.start_x, state.start_y) == (0, 0)

    def test_pan_round_trip(self):
        state = ViewState.initial()
        assert state.pan(37, 12).pan(-37, -12) == state

    def test_parameter_updates_keep_origin(self):
        state = ViewState.initial().pan(5, 5)
        updated = state.with_first_pole_distance(250).with_distortion(2.1)
        assert updated.parameters() == FieldParameters(first_pole_distance=250, distortion=2.1)
        assert (updated.start_x, updated.start_y) == (state.start_x, state.start_y)

    def test_viewport_anchored_at_origin(self):
        state = ViewState(start_x=-3, start_y=8)
        assert state.viewport(640, 480) == Viewport(-3, 8, 640, 480)

    def test_export_viewport_uses_export_size(self):
        state = ViewState(start_x=-3, start_y=8).with_export_size(800, 600)
        assert state.export_viewport() == Viewport(-3, 8, 800, 600)
