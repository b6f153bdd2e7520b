import struct

import pytest

from psd_raster.constants import Resource
from psd_raster.exceptions import TruncatedInput, UnsupportedFormat
from psd_raster.psd.bin_utils import Cursor
from psd_raster.psd.image_resources import (
    DEFAULT_DPI,
    ImageResources,
    ResolutionInfo,
    TransparencyIndex,
)

from ..utils import (
    make_length_block,
    make_resolution_info,
    make_resource,
    make_transparency_index,
)


def read_section(blocks: bytes, trailer: bytes = b"") -> tuple[ImageResources, Cursor]:
    reader = Cursor.frombytes(make_length_block(blocks) + trailer)
    return ImageResources.read(reader), reader


def test_image_resources_empty() -> None:
    resources, reader = read_section(b"", b"\x12\x34")
    assert resources.dpi == (DEFAULT_DPI, DEFAULT_DPI)
    assert resources.transparency_index == -1
    assert reader.tell() == 4


def test_image_resources_resolution() -> None:
    resources, reader = read_section(make_resolution_info(300, 150))
    assert Resource.RESOLUTION_INFO in resources
    assert resources.dpi == (300, 150)
    assert isinstance(resources.get_data(Resource.RESOLUTION_INFO), ResolutionInfo)


def test_image_resources_transparency_index() -> None:
    resources, _ = read_section(make_transparency_index(7))
    assert resources.transparency_index == 7
    assert resources.get_data(Resource.TRANSPARENCY_INDEX) == TransparencyIndex(7)


def test_image_resources_skip_unknown() -> None:
    blocks = (
        make_resource(1039, b"icc-profile")  # Odd length, padded.
        + make_resource(1036, b"\x00" * 20, name=b"th")
        + make_transparency_index(3)
        + make_resolution_info(72, 96)
    )
    resources, reader = read_section(blocks, b"\xff")
    assert resources.transparency_index == 3
    assert resources.dpi == (72, 96)
    assert 1039 not in resources
    assert reader.tell() == 4 + len(blocks)
    assert reader.read_byte() == 0xFF


def test_image_resources_odd_name_length() -> None:
    # An odd name length byte is followed by the length actually skipped.
    block = (
        b"8BIM"
        + struct.pack(">H", Resource.TRANSPARENCY_INDEX)
        + b"\x03\x02ab\x00"
        + struct.pack(">I", 2)
        + struct.pack(">h", 9)
    )
    resources, reader = read_section(block)
    assert resources.transparency_index == 9
    assert reader.tell() == 4 + len(block)


def test_image_resources_skips_unread_data() -> None:
    block = (
        b"8BIM"
        + struct.pack(">H", Resource.TRANSPARENCY_INDEX)
        + b"\x00\x00"
        + struct.pack(">I", 4)
        + struct.pack(">h", 5)
        + b"\xff\xff"
    )
    resources, reader = read_section(block, b"\xab")
    assert resources.transparency_index == 5
    assert reader.read_byte() == 0xAB


def test_image_resources_bad_signature() -> None:
    block = b"MeSa" + make_transparency_index(1)[4:]
    with pytest.raises(UnsupportedFormat):
        read_section(block)


def test_image_resources_truncated() -> None:
    blocks = make_resolution_info(300, 300)
    with pytest.raises(TruncatedInput):
        ImageResources.frombytes(make_length_block(blocks)[:-10])
