"""Plasmoire: a viewer for phase-aligned plasma/moire images."""
from plasmoire.model.field import (
    FieldParameters,
    InvalidParameter,
    Raster,
    RenderCancelled,
    Viewport,
    generate,
)

__all__ = [
    "FieldParameters",
    "InvalidParameter",
    "Raster",
    "RenderCancelled",
    "Viewport",
    "generate",
]
