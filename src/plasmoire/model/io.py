"""
Input/Output Manager (Image Export)
Encodes rasters produced by the field generator into image files.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

from PySide6.QtCore import QFile, QIODevice
from PySide6.QtGui import QImage

from plasmoire.config import EXPORT_FORMAT
from plasmoire.model.field import Raster

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class ExportError(OSError):
    """Raised when a raster could not be written to disk."""


def raster_to_qimage(raster: Raster) -> QImage:
    """Wrap the raster in an 8-bit greyscale QImage that owns its own copy of the pixels."""
    buffer = raster.tobytes()
    image = QImage(buffer, raster.width, raster.height, raster.width, QImage.Format.Format_Grayscale8)
    # QImage does not keep `buffer` alive; detach before it goes out of scope
    return image.copy()


class IOManager:

    @staticmethod
    def check_target(filepath: PathLike) -> Path:
        """Refuse existing files. Returns the target as a Path."""
        target = Path(filepath)
        if target.exists():
            raise ExportError(f"Don't want to overwrite existing file: {target}")
        return target

    @staticmethod
    def save_raster(raster: Raster, filepath: PathLike, fmt: str = EXPORT_FORMAT) -> Path:
        """
        Write `raster` as a greyscale image.

        The target must not exist yet. Raises ExportError if it does, or if the
        encoder fails (missing directory, permissions, unknown format). The file
        is created exclusively, so one that appears after the check is not
        overwritten either.
        """
        target = IOManager.check_target(filepath)
        logger.info(f"Exporting {raster.width}x{raster.height} raster to: {target}")

        image = raster_to_qimage(raster)
        device = QFile(str(target))
        if not device.open(QIODevice.OpenModeFlag.WriteOnly | QIODevice.OpenModeFlag.NewOnly):
            if target.exists():
                raise ExportError(f"Don't want to overwrite existing file: {target}")
            logger.error(f"Opening '{target}' failed: {device.errorString()}")
            raise ExportError(f"Some write error occurred while saving '{target}': {device.errorString()}")

        try:
            ok = image.save(device, fmt)
        finally:
            device.close()
        if not ok:
            device.remove()
            logger.error(f"Writing '{target}' failed.")
            raise ExportError(f"Some write error occurred while saving '{target}'.")

        logger.info("Export finished.")
        return target

    @staticmethod
    def load_grey(filepath: PathLike) -> QImage:
        """Read an exported image back as 8-bit greyscale."""
        image = QImage(str(filepath))
        if image.isNull():
            raise ExportError(f"Could not read image '{filepath}'.")
        return image.convertToFormat(QImage.Format.Format_Grayscale8)
