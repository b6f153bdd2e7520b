"""
Image data section structure.

:py:class:`ImageData` corresponds to the last section of the PSD file where
the merged image is stored, one plane per channel.
"""

import logging
from typing import Any, TypeVar

from attrs import define, field

from psd_raster.compression import decompress
from psd_raster.constants import Compression
from psd_raster.exceptions import UnsupportedCompression
from psd_raster.psd.base import BaseElement
from psd_raster.psd.bin_utils import Cursor
from psd_raster.psd.header import FileHeader

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="ImageData")


def _to_compression(value: Any) -> Compression:
    try:
        return Compression(value)
    except ValueError:
        raise UnsupportedCompression("Unknown compression %r" % (value,))


@define(repr=False)
class ImageData(BaseElement):
    """
    Merged channel image data.

    .. py:attribute:: compression

        See :py:class:`~psd_raster.constants.Compression`.

    .. py:attribute:: channels

        `list` of decompressed bytes, one per channel, each
        ``width * height * depth // 8`` bytes long.
    """

    compression: Compression = field(
        default=Compression.RAW, converter=_to_compression
    )
    channels: list = field(factory=list)

    @classmethod
    def read(cls: type[T], reader: Cursor, header: FileHeader, **kwargs: Any) -> T:
        start_pos = reader.tell()
        compression = _to_compression(reader.read_int16())
        logger.debug(
            "reading image data, compression=%s, offset=%d"
            % (compression.name, start_pos)
        )
        channels = decompress(
            reader,
            compression,
            header.width,
            header.height,
            header.depth,
            header.channels,
        )
        logger.debug("  read image data, len=%d" % (reader.tell() - start_pos))
        return cls(compression, channels)

    def __repr__(self) -> str:
        return "ImageData(compression=%s, channels=%d)" % (
            self.compression.name,
            len(self.channels),
        )
