"""
Color mode data structure.
"""

import logging
from typing import Any, TypeVar

import numpy as np
from attrs import define

from psd_raster.exceptions import UnsupportedFormat
from psd_raster.psd.base import BaseElement
from psd_raster.psd.bin_utils import Cursor, read_length_block

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="ColorModeData")

#: Number of entries of each band in the indexed color table.
PALETTE_SIZE = 256


@define(repr=False)
class ColorModeData(BaseElement):
    """
    Color mode data section of the PSD file.

    For indexed color images the data is the color table for the image in a
    non-interleaved order: 256 red values, then 256 green, then 256 blue.

    Duotone images also have this data, but the data format is undocumented.
    """

    value: bytes = b""

    @classmethod
    def read(cls: type[T], reader: Cursor, **kwargs: Any) -> T:
        value = read_length_block(reader)
        logger.debug("reading color mode data, len=%d" % (len(value)))
        return cls(value)

    def __repr__(self) -> str:
        return "ColorModeData(len=%d)" % len(self.value)

    def _check_palette(self) -> None:
        if len(self.value) < 3 * PALETTE_SIZE:
            raise UnsupportedFormat(
                "Indexed color table needs %d bytes, got %d"
                % (3 * PALETTE_SIZE, len(self.value))
            )

    def lookup(self, index: int) -> tuple[int, int, int]:
        """
        Returns the (R, G, B) triple of the color table entry at ``index``.
        """
        self._check_palette()
        return (
            self.value[index],
            self.value[index + PALETTE_SIZE],
            self.value[index + 2 * PALETTE_SIZE],
        )

    def bands(self) -> np.ndarray:
        """
        Returns the color table as a ``(256, 3)`` uint8 lookup table.
        """
        self._check_palette()
        table = np.frombuffer(self.value, np.uint8, count=3 * PALETTE_SIZE)
        return table.reshape((3, PALETTE_SIZE)).transpose()
