"""
PSD Image module.

:py:class:`PSDImage` is the entry point of psd-raster. It reads the sections
of a PSD file and turns the merged image into a
:py:class:`~psd_raster.api.raster.Raster`.

Example usage::

    from psd_raster import PSDImage

    psd = PSDImage.open('document.psd')
    print(f"Size: {psd.width}x{psd.height}")
    print(f"Color mode: {psd.color_mode}")

    raster = psd.toraster()
    psd.topil().save('output.png')
"""

import logging
import os
from typing import Any, BinaryIO, Optional, Union

import numpy as np
from PIL import Image

from psd_raster.api.color import Reconstructor, get_reconstructor
from psd_raster.api.raster import Raster
from psd_raster.constants import ColorMode, Compression, PixelFormat
from psd_raster.psd.document import PSD

logger = logging.getLogger(__name__)

PathOrFile = Union[BinaryIO, str, bytes, os.PathLike]


class PSDImage:
    """
    Photoshop PSD document.

    The low-level data structure is accessible at :py:attr:`PSDImage._record`.

    Example::

        from psd_raster import PSDImage

        psdimage = PSDImage.open('example.psd')
        image = psdimage.topil()
    """

    def __init__(self, data: PSD):
        if not isinstance(data, PSD):
            raise TypeError(f"Expected PSD instance, got {type(data).__name__}")
        self._record = data

    @classmethod
    def open(cls, fp: PathOrFile, **kwargs: Any) -> "PSDImage":
        """
        Open a PSD document.

        :param fp: filename or file-like object. Seekable streams are read
            from offset 0.
        :return: A :py:class:`~psd_raster.api.psd_image.PSDImage` object.
        """
        if isinstance(fp, (str, bytes, os.PathLike)):
            with open(fp, "rb") as f:
                return cls(PSD.open(f, **kwargs))
        return cls(PSD.open(fp, **kwargs))

    def __repr__(self) -> str:
        return "%s(size=%dx%d, color_mode=%s, depth=%d, channels=%d)" % (
            self.__class__.__name__,
            self.width,
            self.height,
            self.color_mode.name,
            self.depth,
            self.channels,
        )

    @property
    def width(self) -> int:
        return self._record.header.width

    @property
    def height(self) -> int:
        return self._record.header.height

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def channels(self) -> int:
        """Number of channels, including alpha."""
        return self._record.header.channels

    @property
    def depth(self) -> int:
        """Bits per channel."""
        return self._record.header.depth

    @property
    def color_mode(self) -> ColorMode:
        return self._record.header.color_mode

    @property
    def compression(self) -> Compression:
        return self._record.image_data.compression

    @property
    def dpi(self) -> tuple[int, int]:
        return self._record.image_resources.dpi

    @property
    def transparency_index(self) -> int:
        """Transparent color table entry of indexed images, -1 when unset."""
        return self._record.image_resources.transparency_index

    def reconstructor(self) -> Reconstructor:
        return get_reconstructor(
            self._record.header,
            self._record.color_mode_data,
            self._record.image_resources,
        )

    @property
    def pixel_format(self) -> PixelFormat:
        """Pixel format of the raster :py:meth:`toraster` produces."""
        if self.reconstructor().has_alpha:
            return PixelFormat.RGBA32
        return PixelFormat.RGB24

    def toraster(self, stride: Optional[int] = None) -> Raster:
        """
        Decode the merged image.

        :param stride: bytes per row of the output, see
            :py:meth:`~psd_raster.api.raster.Raster.new`.
        :return: :py:class:`~psd_raster.api.raster.Raster`.
        """
        reconstructor = self.reconstructor()
        pixel_format = PixelFormat.RGBA32 if reconstructor.has_alpha else PixelFormat.RGB24
        raster = Raster.new(self.width, self.height, pixel_format, stride, self.dpi)
        try:
            with raster.lock() as writer:
                writer.write(reconstructor.convert(self._record.image_data.channels))
        except Exception:
            raster.dispose()
            raise
        return raster

    def topil(self) -> Image.Image:
        """
        Get PIL Image of the merged image, RGB or RGBA.

        :return: :py:class:`PIL.Image`.
        """
        return self.toraster().topil()

    def numpy(self) -> np.ndarray:
        """
        Get NumPy array of the merged image.

        :return: ``(height, width, 3 or 4)`` uint8 :py:class:`numpy.ndarray`.
        """
        return self.toraster().numpy()


def load(fp: PathOrFile, stride: Optional[int] = None) -> Raster:
    """
    Decode a PSD file into a :py:class:`~psd_raster.api.raster.Raster`.

    :param fp: filename or seekable file-like object.
    :param stride: optional bytes per row of the output.
    """
    return PSDImage.open(fp).toraster(stride=stride)
