"""
Pixel Field Generator
=====================
The pure function at the heart of Plasmoire: it maps a viewport on the infinite
integer plane plus two numeric parameters onto a greyscale raster.

Why is this file needed?
------------------------
1. Isolation: Everything else in the package (widgets, workers, PNG export) is
   plumbing that calls `generate()` with concrete values.
2. Determinism: Each pixel depends only on its absolute plane coordinate and
   the two parameters, so any two renders agree wherever they overlap.

The field
---------
Per pixel at absolute coordinate (x, y):

    dist   = x*x + y*y - x/PHI - 2*y*PHI + 1
    signal = sin(dist ** distortion * calibration)
    value  = clamp(round((signal + 1) * 128), 0, 255)

`dist` is a squared distance that has been skewed with the golden ratio so the
pattern has no true symmetry, even though it looks highly regular.
`calibration` is chosen so that the derivative of the `pow` term (with respect
to the radius) is exactly 2*pi at `first_pole_distance`. A one-pixel step at
that radius then leaves the sine unchanged, which produces the ring of
apparent regularity ("the pole").

Classes:
    Viewport: Rectangle on the integer plane.
    FieldParameters: Pole distance and distortion exponent.
    Raster: Immutable row-major grey image produced by one call.
"""
from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Callable, Optional, TYPE_CHECKING

import numpy as np

from plasmoire.config import RENDER_BAND_ROWS

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Golden ratio, the number that "looks the least like a pattern".
PHI: float = (1.0 + math.sqrt(5.0)) / 2.0


class InvalidParameter(ValueError):
    """Raised when a viewport or parameter set cannot be rendered."""


class RenderCancelled(Exception):
    """Raised when a render is aborted before it completed."""


def _is_integer(value: object) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_positive_real(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class Viewport:
    """Top-left anchored rectangle on the integer plane. The anchor may be negative."""
    start_x: int
    start_y: int
    width: int
    height: int

    def validate(self) -> None:
        for name in ("start_x", "start_y", "width", "height"):
            if not _is_integer(getattr(self, name)):
                raise InvalidParameter(f"Viewport.{name} must be an integer, got {getattr(self, name)!r}.")
        if self.width <= 0:
            raise InvalidParameter(f"Viewport width must be positive, got {self.width}.")
        if self.height <= 0:
            raise InvalidParameter(f"Viewport height must be positive, got {self.height}.")

    def contains(self, x: int, y: int) -> bool:
        return (self.start_x <= x < self.start_x + self.width
                and self.start_y <= y < self.start_y + self.height)


@dataclass(frozen=True)
class FieldParameters:
    first_pole_distance: float
    distortion: float

    def validate(self) -> None:
        if not _is_positive_real(self.first_pole_distance):
            raise InvalidParameter(
                f"first_pole_distance must be a positive finite number, got {self.first_pole_distance!r}."
            )
        if not _is_positive_real(self.distortion):
            raise InvalidParameter(
                f"distortion must be a positive finite number, got {self.distortion!r}."
            )


@dataclass(frozen=True, eq=False)
class Raster:
    """
    The row-major grey image of one `generate()` call.

    `pixels[row, col]` belongs to plane coordinate
    `(viewport.start_x + col, viewport.start_y + row)`. The array is read-only.
    """
    viewport: Viewport
    pixels: npt.NDArray[np.uint8]

    @property
    def width(self) -> int:
        return self.viewport.width

    @property
    def height(self) -> int:
        return self.viewport.height

    def value_at(self, x: int, y: int) -> int:
        """Grey value at absolute plane coordinate (x, y)."""
        if not self.viewport.contains(x, y):
            raise IndexError(f"({x}, {y}) lies outside {self.viewport}.")
        return int(self.pixels[y - self.viewport.start_y, x - self.viewport.start_x])

    def tobytes(self) -> bytes:
        """Raw buffer, one byte per pixel, index `row * width + col`."""
        return self.pixels.tobytes()

    def to_rgb(self) -> npt.NDArray[np.uint8]:
        """Grey replicated into R, G and B, shape (height, width, 3)."""
        return np.repeat(self.pixels[:, :, np.newaxis], 3, axis=2)


def calibration_constant(first_pole_distance: float, distortion: float) -> float:
    """Factor that makes d/dr (r^2)^distortion equal 2*pi at r = first_pole_distance."""
    return math.pi / (distortion * math.pow(first_pole_distance, 2.0 * distortion - 1.0))


def pseudo_distance(x: npt.ArrayLike, y: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Skewed squared distance, broadcast over `x` and `y`.

    Evaluated strictly left to right so every pixel gets the same float64
    result no matter which viewport it was rendered in.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    return x * x + y * y - x / PHI - 2.0 * y * PHI + 1.0


def intensity(dist: npt.ArrayLike, calibration: float, distortion: float) -> npt.NDArray[np.uint8]:
    """
    Map pseudo-distances to grey values.

    `pow` follows IEEE semantics: a negative base with a non-integer exponent
    yields NaN, and NaN samples become 0.
    """
    dist = np.asarray(dist, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        signal = np.sin(np.power(dist, distortion) * calibration)
        raw = np.floor((signal + 1.0) * 128.0 + 0.5)
    raw = np.nan_to_num(raw, nan=0.0)
    return np.clip(raw, 0, 255).astype(np.uint8)


def generate(
    viewport: Viewport,
    parameters: FieldParameters,
    should_abort: Optional[Callable[[], bool]] = None,
    progress: Optional[Callable[[int], None]] = None,
    band_rows: int = RENDER_BAND_ROWS,
) -> Raster:
    """
    Render `viewport` of the field described by `parameters`.

    Args:
        viewport: Rectangle to render. Width and height must be positive.
        parameters: Pole distance and distortion, both positive.
        should_abort: Polled between row bands. Returning True raises
            `RenderCancelled` and discards everything computed so far.
        progress: Called with a percentage (0-100) after every band.
        band_rows: Rows computed per band; bounds temporary float memory.

    Raises:
        InvalidParameter: Before any work, if the inputs are not renderable.
        RenderCancelled: If `should_abort` asked to stop.
    """
    viewport.validate()
    parameters.validate()
    if not _is_integer(band_rows) or band_rows <= 0:
        raise InvalidParameter(f"band_rows must be a positive integer, got {band_rows!r}.")

    distortion = float(parameters.distortion)
    try:
        calibration = calibration_constant(float(parameters.first_pole_distance), distortion)
    except (OverflowError, ZeroDivisionError) as e:
        raise InvalidParameter(f"No usable calibration for {parameters}: {e}") from e
    if not math.isfinite(calibration) or calibration <= 0:
        raise InvalidParameter(f"No usable calibration for {parameters}: got {calibration!r}.")

    xs = np.arange(viewport.start_x, viewport.start_x + viewport.width, dtype=np.float64)
    pixels = np.empty((viewport.height, viewport.width), dtype=np.uint8)

    n_bands = -(-viewport.height // band_rows)
    logger.debug(
        f"Rendering {viewport.width}x{viewport.height} at ({viewport.start_x}, {viewport.start_y}) "
        f"in {n_bands} band(s), calibration={calibration:.6g}"
    )

    for band in range(n_bands):
        if should_abort is not None and should_abort():
            logger.info(f"Render aborted after {band}/{n_bands} bands.")
            raise RenderCancelled("Render was cancelled.")

        row0 = band * band_rows
        row1 = min(row0 + band_rows, viewport.height)
        ys = np.arange(viewport.start_y + row0, viewport.start_y + row1, dtype=np.float64)

        dist = pseudo_distance(xs[np.newaxis, :], ys[:, np.newaxis])
        pixels[row0:row1] = intensity(dist, calibration, distortion)

        if progress is not None:
            progress(int(100 * (band + 1) / n_bands))

    pixels.flags.writeable = False
    return Raster(viewport=viewport, pixels=pixels)
