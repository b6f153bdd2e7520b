"""
File header structure.
"""

import logging
from typing import Any, TypeVar

from attrs import define, field

from psd_raster.constants import ColorMode
from psd_raster.exceptions import UnsupportedFormat
from psd_raster.psd.base import BaseElement
from psd_raster.psd.bin_utils import Cursor
from psd_raster.validators import in_, not_in, range_

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="FileHeader")

SIGNATURE = b"8BPS"


def _to_color_mode(value: Any) -> ColorMode:
    try:
        return ColorMode(value)
    except ValueError:
        raise UnsupportedFormat("Unknown color mode %r" % (value,))


@define(repr=True)
class FileHeader(BaseElement):
    """
    Header section of the PSD file.

    Example::

        from psd_raster.psd.header import FileHeader
        from psd_raster.constants import ColorMode

        header = FileHeader(channels=2, height=359, width=400, depth=8,
                            color_mode=ColorMode.GRAYSCALE)

    .. py:attribute:: signature

        Signature: always equal to ``b'8BPS'``.

    .. py:attribute:: version

        Version number. Only PSD version 1 is decoded.

    .. py:attribute:: channels

        The number of channels in the image, including any alpha channel.

    .. py:attribute:: height

        The height of the image in pixels.

    .. py:attribute:: width

        The width of the image in pixels.

    .. py:attribute:: depth

        The number of bits per channel: 8, 16 or 32.

    .. py:attribute:: color_mode

        The color mode of the file. See
        :py:class:`~psd_raster.constants.ColorMode`. Bitmap is rejected.
    """

    signature: bytes = field(default=SIGNATURE, repr=False)
    version: int = field(default=1, validator=in_((1,)))
    channels: int = field(default=4, validator=range_(1, 56))
    height: int = field(default=64, validator=range_(1, 30000))
    width: int = field(default=64, validator=range_(1, 30000))
    depth: int = field(default=8, validator=in_((8, 16, 32)))
    color_mode: ColorMode = field(
        default=ColorMode.RGB,
        converter=_to_color_mode,
        validator=not_in((ColorMode.BITMAP,)),
    )

    @signature.validator
    def _validate_signature(self, attribute: Any, value: bytes) -> None:
        if value != SIGNATURE:
            raise UnsupportedFormat("This is not a PSD file: %r" % (value,))

    @classmethod
    def read(cls: type[T], reader: Cursor, **kwargs: Any) -> T:
        signature = reader.read_bytes(4)
        if signature != SIGNATURE:
            raise UnsupportedFormat("This is not a PSD file: %r" % (signature,))
        version = reader.read_int16()
        reader.skip(6)  # Reserved.
        channels = reader.read_int16()
        height = reader.read_int32()
        width = reader.read_int32()
        depth = reader.read_int16()
        color_mode = reader.read_int16()
        return cls(signature, version, channels, height, width, depth, color_mode)

    @property
    def bit_depth_bytes(self) -> int:
        """Bytes per channel sample: 1, 2 or 4."""
        return self.depth // 8

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def channel_size(self) -> int:
        """Byte length of one decompressed channel."""
        return self.pixel_count * self.bit_depth_bytes
