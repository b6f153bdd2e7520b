"""
Channel data decompression.

The merged image data of a PSD file is stored either raw or PackBits (RLE)
compressed. ZIP compression, with or without prediction, is not supported and
raises :py:exc:`~psd_raster.exceptions.UnsupportedCompression`.

Example usage::

    from psd_raster.compression import decompress
    from psd_raster.constants import Compression

    channels = decompress(
        reader,
        compression=Compression.RLE,
        width=100,
        height=100,
        depth=8,
        channels=3,
    )
"""

import logging

from psd_raster.compression import rle
from psd_raster.constants import Compression
from psd_raster.exceptions import UnsupportedCompression
from psd_raster.psd.bin_utils import Cursor

logger = logging.getLogger(__name__)


def decompress(
    reader: Cursor,
    compression: Compression,
    width: int,
    height: int,
    depth: int,
    channels: int,
) -> list[bytes]:
    """Read and decompress channel data.

    :param reader: cursor positioned right after the compression code.
    :param compression: compression type,
            see :py:class:`~psd_raster.constants.Compression`.
    :param width: width.
    :param height: height.
    :param depth: bit depth of the pixel.
    :param channels: number of channels.
    :return: `list` of decompressed bytes, one per channel.
    """
    size = width * height * max(1, depth // 8)

    if compression == Compression.RAW:
        return [reader.read_bytes(size) for _ in range(channels)]
    elif compression == Compression.RLE:
        return decode_rle(reader, size, height, channels)
    raise UnsupportedCompression(
        "Unsupported compression %s" % getattr(compression, "name", compression)
    )


def decode_rle(reader: Cursor, size: int, height: int, channels: int) -> list[bytes]:
    # The per-row byte counts are not needed to decode.
    reader.skip(height * channels * 2)
    result = []
    for index in range(channels):
        start_pos = reader.tell()
        result.append(rle.read(reader, size))
        logger.debug(
            "  decoded RLE channel %d, len=%d" % (index, reader.tell() - start_pos)
        )
    return result
