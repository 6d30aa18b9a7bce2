"""
View State (Data Model)
=======================
This module defines the single value that describes what the viewer shows.

Why is this file needed?
------------------------
1. Immutability: The pan position and the field parameters live in one frozen
   dataclass. UI events never mutate it; they produce a new value via the
   `pan()` / `with_*()` transformations below.
2. Decoupling: The Qt layer stores the current `ViewState` and hands the
   derived `Viewport` / `FieldParameters` to the generator on every render.

Classes:
    ViewState: Pan origin, field parameters and export size.
"""
from __future__ import annotations

from dataclasses import dataclass, replace

from plasmoire import config
from plasmoire.model.field import FieldParameters, Viewport


@dataclass(frozen=True)
class ViewState:
    start_x: int = config.INIT_START_X
    start_y: int = config.INIT_START_Y
    first_pole_distance: float = config.INIT_POLE_DISTANCE
    distortion: float = config.INIT_DISTORTION
    export_width: int = config.INIT_EXPORT_WIDTH
    export_height: int = config.INIT_EXPORT_HEIGHT

    @classmethod
    def initial(cls) -> ViewState:
        return cls()

    def pan(self, dx: int, dy: int) -> ViewState:
        """
        Move the view by a drag of (dx, dy) screen pixels.

        Dragging the content right reveals what lies to the left, so the origin
        moves by the negated delta.
        """
        return replace(self, start_x=self.start_x - dx, start_y=self.start_y - dy)

    def with_first_pole_distance(self, value: float) -> ViewState:
        return replace(self, first_pole_distance=value)

    def with_distortion(self, value: float) -> ViewState:
        return replace(self, distortion=value)

    def with_export_size(self, width: int, height: int) -> ViewState:
        return replace(self, export_width=width, export_height=height)

    def parameters(self) -> FieldParameters:
        return FieldParameters(
            first_pole_distance=self.first_pole_distance,
            distortion=self.distortion,
        )

    def viewport(self, width: int, height: int) -> Viewport:
        """Viewport anchored at the current origin with the given on-screen size."""
        return Viewport(self.start_x, self.start_y, width, height)

    def export_viewport(self) -> Viewport:
        """Same upper left corner as the screen, sized for the file export."""
        return self.viewport(self.export_width, self.export_height)
