"""
Builders for synthetic PSD files.
"""

import logging
import struct
from typing import Sequence

from psd_raster.compression import rle
from psd_raster.constants import ColorMode, Compression, Resource

logging.basicConfig(level=logging.DEBUG)


def make_header(
    width: int,
    height: int,
    channels: int,
    depth: int = 8,
    color_mode: int = ColorMode.RGB,
    version: int = 1,
    signature: bytes = b"8BPS",
) -> bytes:
    return struct.pack(
        ">4sH6xHIIHH", signature, version, channels, height, width, depth, color_mode
    )


def make_length_block(data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + data


def make_resource(key: int, data: bytes, name: bytes = b"") -> bytes:
    """Image resource block with an even length name."""
    assert len(name) % 2 == 0
    block = b"8BIM" + struct.pack(">H", key)
    block += bytes((len(name),)) + name + b"\x00"
    block += struct.pack(">I", len(data)) + data
    if len(data) % 2:
        block += b"\x00"
    return block


def make_resolution_info(dpi_x: int, dpi_y: int) -> bytes:
    data = struct.pack(">HHHHHHHH", dpi_x, 0, 1, 1, dpi_y, 0, 1, 1)
    return make_resource(Resource.RESOLUTION_INFO, data)


def make_transparency_index(index: int) -> bytes:
    return make_resource(Resource.TRANSPARENCY_INDEX, struct.pack(">h", index))


def make_image_data(
    channels: Sequence[bytes],
    width: int,
    height: int,
    depth: int = 8,
    compression: int = Compression.RAW,
) -> bytes:
    if compression != Compression.RLE:
        return struct.pack(">H", compression) + b"".join(channels)

    row_size = width * depth // 8
    rows = [
        rle.encode(data[offset : offset + row_size])
        for data in channels
        for offset in range(0, len(data), row_size)
    ]
    counts = struct.pack(">%dH" % len(rows), *map(len, rows))
    return struct.pack(">H", compression) + counts + b"".join(rows)


def make_psd(
    channels: Sequence[bytes],
    width: int,
    height: int,
    depth: int = 8,
    color_mode: int = ColorMode.RGB,
    compression: int = Compression.RAW,
    color_mode_data: bytes = b"",
    resources: bytes = b"",
    layer_and_mask: bytes = b"",
) -> bytes:
    return b"".join(
        [
            make_header(width, height, len(channels), depth, color_mode),
            make_length_block(color_mode_data),
            make_length_block(resources),
            make_length_block(layer_and_mask),
            make_image_data(channels, width, height, depth, compression),
        ]
    )


def make_palette() -> bytes:
    """Color table where entry ``i`` is ``(i, 255 - i, i // 2)``."""
    red = bytes(range(256))
    green = bytes(255 - i for i in range(256))
    blue = bytes(i // 2 for i in range(256))
    return red + green + blue


def u16(*values: int) -> bytes:
    return struct.pack(">%dH" % len(values), *values)


def f32(*values: float) -> bytes:
    return struct.pack(">%df" % len(values), *values)
