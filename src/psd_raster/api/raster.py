"""
Output raster.

:py:class:`Raster` owns the decoded pixels: a row-major buffer whose rows are
``stride`` bytes apart, holding B, G, R[, A] bytes per pixel. Pixels are
written through a :py:class:`RasterWriter` obtained from
:py:meth:`Raster.lock`::

    raster = Raster.new(width, height, PixelFormat.RGB24)
    with raster.lock() as writer:
        writer.write(rgba)

    image = raster.topil()
"""

import contextlib
import logging
from typing import Any, Iterator, Optional

import numpy as np
from attrs import define, field
from PIL import Image

from psd_raster.constants import PixelFormat

logger = logging.getLogger(__name__)

#: Row alignment used when no stride is given.
ROW_ALIGNMENT = 4


def _clamp(value: Any) -> int:
    return min(255, max(0, int(value)))


@define(repr=False, eq=False)
class Raster:
    """
    Decoded pixel buffer.

    .. py:attribute:: width
    .. py:attribute:: height
    .. py:attribute:: pixel_format

        See :py:class:`~psd_raster.constants.PixelFormat`.

    .. py:attribute:: stride

        Bytes between the starts of consecutive rows.

    .. py:attribute:: buffer

        `bytearray` of ``stride * height`` bytes, `None` once disposed.

    .. py:attribute:: dpi

        Horizontal and vertical resolution.
    """

    width: int
    height: int
    pixel_format: PixelFormat = field(converter=PixelFormat)
    stride: int
    buffer: Optional[bytearray]
    dpi: tuple[int, int] = (72, 72)

    @classmethod
    def new(
        cls,
        width: int,
        height: int,
        pixel_format: PixelFormat,
        stride: Optional[int] = None,
        dpi: tuple[int, int] = (72, 72),
    ) -> "Raster":
        """
        Allocate a zero-filled raster.

        :param stride: bytes per row. Defaults to the row size rounded up to
            4 bytes. Must not be smaller than ``width * bytes_per_pixel``.
            Pixels of both formats are addressed as
            ``row * stride + col * bytes_per_pixel``, so a padded stride also
            leaves a gap after each row of RGBA32 pixels instead of packing
            them at ``index * 4``.
        """
        pixel_format = PixelFormat(pixel_format)
        row_size = width * pixel_format.bytes_per_pixel
        if stride is None:
            stride = -(-row_size // ROW_ALIGNMENT) * ROW_ALIGNMENT
        elif stride < row_size:
            raise ValueError("Stride %d is smaller than row size %d" % (stride, row_size))
        logger.debug(
            "allocating %s raster %dx%d, stride=%d"
            % (pixel_format.name, width, height, stride)
        )
        return cls(width, height, pixel_format, stride, bytearray(stride * height), dpi)

    def __repr__(self) -> str:
        return "Raster(size=%dx%d, pixel_format=%s, stride=%d%s)" % (
            self.width,
            self.height,
            self.pixel_format.name,
            self.stride,
            "" if self.buffer is not None else ", disposed",
        )

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def has_alpha(self) -> bool:
        return self.pixel_format.has_alpha

    def _check(self) -> bytearray:
        if self.buffer is None:
            raise ValueError("Raster has been disposed")
        return self.buffer

    @contextlib.contextmanager
    def lock(self) -> Iterator["RasterWriter"]:
        """
        Open the pixel buffer for writing.

        The writer is closed on exit, whether the block succeeds or not.
        """
        writer = RasterWriter(self)
        try:
            yield writer
        finally:
            writer.close()

    def dispose(self) -> None:
        """Drop the pixel buffer."""
        self.buffer = None

    def numpy(self) -> np.ndarray:
        """
        Get the pixels as a ``(height, width, 3 or 4)`` uint8 array in
        R, G, B[, A] order.
        """
        bpp = self.pixel_format.bytes_per_pixel
        rows = np.frombuffer(self._check(), np.uint8).reshape((self.height, self.stride))
        pixels = rows[:, : self.width * bpp].reshape((self.height, self.width, bpp))
        order = [2, 1, 0, 3][:bpp]
        return pixels[:, :, order]

    def topil(self) -> Image.Image:
        """
        Get PIL Image in RGB or RGBA mode, with the resolution in
        ``info['dpi']``.
        """
        rawmode = "BGRA" if self.has_alpha else "BGR"
        image = Image.frombytes(
            self.pixel_format.pil_mode,
            self.size,
            bytes(self._check()),
            "raw",
            rawmode,
            self.stride,
            1,
        )
        image.info["dpi"] = self.dpi
        return image


class RasterWriter:
    """
    Index based pixel writer over a locked :py:class:`Raster`.

    Pixel ``index`` is stored at ``row * stride + col * bytes_per_pixel``
    where ``row, col = divmod(index, width)``.
    """

    def __init__(self, raster: Raster):
        self._raster = raster
        self._bpp = raster.pixel_format.bytes_per_pixel
        self._rows: Optional[np.ndarray] = np.frombuffer(
            raster._check(), np.uint8
        ).reshape((raster.height, raster.stride))

    @property
    def closed(self) -> bool:
        return self._rows is None

    def _get_rows(self) -> np.ndarray:
        if self._rows is None:
            raise ValueError("Raster writer is closed")
        return self._rows

    def set_pixel(self, index: int, r: int, g: int, b: int, a: int = 255) -> None:
        """Write one pixel. Components are clamped to [0, 255]."""
        rows = self._get_rows()
        row, col = divmod(index, self._raster.width)
        if not (0 <= row < self._raster.height):
            raise IndexError("Pixel index %d out of range" % index)
        offset = col * self._bpp
        values = (_clamp(b), _clamp(g), _clamp(r), _clamp(a))
        rows[row, offset : offset + self._bpp] = values[: self._bpp]

    def write(self, rgba: np.ndarray) -> None:
        """
        Write all pixels from a ``(pixels, 4)`` array of R, G, B, A values.
        Components are clamped to [0, 255].
        """
        rows = self._get_rows()
        width, height = self._raster.size
        rgba = np.asarray(rgba)
        if rgba.shape != (width * height, 4):
            raise ValueError(
                "Expected %d pixels of 4 components, got shape %r"
                % (width * height, rgba.shape)
            )
        order = [2, 1, 0, 3][: self._bpp]
        pixels = np.clip(rgba[:, order], 0, 255).astype(np.uint8)
        rows[:, : width * self._bpp] = pixels.reshape((height, width * self._bpp))

    def close(self) -> None:
        self._rows = None
