import logging
import random

import pytest

import psd_raster.compression.rle as rle
from psd_raster.exceptions import InvalidRLEData, TruncatedInput
from psd_raster.psd.bin_utils import Cursor

logger = logging.getLogger(__name__)

RAW_IMAGE_3x3_8bit = b"\x00\x01\x02\x01\x01\x01\x01\x00\x00"
EDGE_CASE_1 = bytes(random.Random(1).randrange(256) for _ in range(300))


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\x07",
        RAW_IMAGE_3x3_8bit,
        b"\x00" * 1000,
        bytes(range(256)) * 3,
        b"ab" * 200,
        EDGE_CASE_1,
        b"\x01\x01" + bytes(range(130)) + b"\x02" * 129 + b"\x03",
    ],
)
def test_encode_decode(data: bytes) -> None:
    encoded = rle.encode(data)
    assert rle.decode(encoded, len(data)) == data


@pytest.mark.parametrize("count", [1, 2, 64, 127, 128])
def test_literal_run(count: int) -> None:
    literal = bytes(range(count))
    assert rle.decode(bytes((count - 1,)) + literal, count) == literal


@pytest.mark.parametrize("count", [2, 3, 64, 127, 128])
def test_repeat_run(count: int) -> None:
    assert rle.decode(bytes((257 - count, 0x5A)), count) == b"\x5a" * count


def test_noop_control_byte() -> None:
    assert rle.decode(b"\x80\x01\x0a\x0b\x80\xfe\x0c", 5) == b"\x0a\x0b\x0c\x0c\x0c"


def test_encode_reference() -> None:
    assert rle.encode(b"AAABCCCC") == b"\xfeA\x00B\xfdC"


def test_read_stops_at_size() -> None:
    reader = Cursor.frombytes(b"\xfd\x01\x00\x02rest")
    assert rle.read(reader, 4) == b"\x01" * 4
    assert reader.read_bytes(2) == b"\x00\x02"


def test_read_consecutive_channels() -> None:
    data = rle.encode(b"\x00" * 10) + rle.encode(bytes(range(10)))
    reader = Cursor.frombytes(data)
    assert rle.read(reader, 10) == b"\x00" * 10
    assert rle.read(reader, 10) == bytes(range(10))


@pytest.mark.parametrize(
    "data, size",
    [
        # b'\x01\x01\x01\x01'
        (b"\xfd\x01", 3),
        # b'\x01\x02\x03'
        (b"\x02\x01\x02\x03", 2),
    ],
)
def test_malicious(data: bytes, size: int) -> None:
    with pytest.raises(InvalidRLEData):
        rle.decode(data, size)


@pytest.mark.parametrize(
    "data, size",
    [
        (b"\xfd\x01", 5),
        (b"\x02\x01\x02\x03", 4),
        (b"\x02\x01", 3),
        (b"\x80", 1),
    ],
)
def test_truncated(data: bytes, size: int) -> None:
    with pytest.raises(TruncatedInput):
        rle.decode(data, size)
