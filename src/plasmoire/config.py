"""
Configuration & Global Constants
================================
This module serves as the central registry for default values and input
bounds used across the application.

Why is this file needed?
------------------------
1. Single source: The spinner ranges, initial view and export sizes are read
   by both the state model and the widgets; defining them once keeps the two
   in agreement.
2. Core independence: The field generator only imports `RENDER_BAND_ROWS`.
   Everything else here is a concern of the viewer.

Exports:
    INIT_POLE_DISTANCE (int): Initial radius of the first pole, in pixels.
    INIT_DISTORTION (float): Initial distortion exponent.
    INIT_START_X, INIT_START_Y (int): Initial top-left corner of the view.
"""

# Field parameters
INIT_POLE_DISTANCE: int = 100
POLE_DISTANCE_MIN: int = 10
POLE_DISTANCE_MAX: int = 1000
POLE_DISTANCE_STEP: int = 10

INIT_DISTORTION: float = 1.3
DISTORTION_MIN: float = 0.7
DISTORTION_MAX: float = 2.5
DISTORTION_STEP: float = 0.1
DISTORTION_DECIMALS: int = 1

# Start two pole distances up and left, so the first pole is in view
INIT_START_X: int = -2 * INIT_POLE_DISTANCE
INIT_START_Y: int = -2 * INIT_POLE_DISTANCE

# Export ("Draw to file")
INIT_EXPORT_WIDTH: int = 1920
INIT_EXPORT_HEIGHT: int = 1080
EXPORT_WIDTH_MIN: int = 320
EXPORT_HEIGHT_MIN: int = 200
EXPORT_SIZE_MAX: int = 9999
EXPORT_FORMAT: str = "PNG"

# Window layout
MARGIN: int = 10
WINDOW_MIN_SIZE: tuple[int, int] = (300, 200)
WINDOW_PREFERRED_SIZE: tuple[int, int] = (800, 600)

# Rows computed per numpy pass. 256 rows of a 9999 px wide export keep the
# float64 temporaries around 20 MB.
RENDER_BAND_ROWS: int = 256
