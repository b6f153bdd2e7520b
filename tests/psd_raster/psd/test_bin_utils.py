import struct

import pytest

from psd_raster.exceptions import TruncatedInput
from psd_raster.psd.bin_utils import (
    Cursor,
    bytes_to_float32,
    bytes_to_uint,
    pad,
    read_length_block,
)


def test_cursor_reads() -> None:
    reader = Cursor.frombytes(b"\x01\xff\xfe\xff\xff\xff\xff\x00\x00\x01\x00xyz")
    assert reader.read_byte() == 1
    assert reader.read_int16() == -2
    assert reader.read_int32() == 0xFFFFFFFF
    assert reader.read_int32() == 256
    assert reader.position() == 11
    assert reader.read_bytes(3) == b"xyz"
    assert reader.tell() == 14


def test_cursor_seek_skip() -> None:
    reader = Cursor.frombytes(b"abcdef")
    reader.skip(2)
    assert reader.read_bytes(1) == b"c"
    reader.seek(0)
    assert reader.read_bytes(2) == b"ab"


def test_cursor_read_zero() -> None:
    reader = Cursor.frombytes(b"")
    assert reader.read_bytes(0) == b""


@pytest.mark.parametrize(
    "data, method",
    [
        (b"", "read_byte"),
        (b"\x00", "read_int16"),
        (b"\x00\x00\x00", "read_int32"),
    ],
)
def test_cursor_truncated(data: bytes, method: str) -> None:
    reader = Cursor.frombytes(data)
    with pytest.raises(TruncatedInput):
        getattr(reader, method)()


def test_read_bytes_truncated() -> None:
    reader = Cursor.frombytes(b"abc")
    with pytest.raises(TruncatedInput):
        reader.read_bytes(4)


def test_read_length_block() -> None:
    reader = Cursor.frombytes(b"\x00\x00\x00\x03abcd")
    assert read_length_block(reader) == b"abc"
    with pytest.raises(TruncatedInput):
        read_length_block(Cursor.frombytes(b"\x00\x00\x00\x05abcd"))


@pytest.mark.parametrize(
    "data, offset, length, expected",
    [
        (b"\x12", 0, 1, 0x12),
        (b"\x00\x12\x34", 1, 2, 0x1234),
        (b"\xff\xff\xff\xff", 0, 4, 0xFFFFFFFF),
        (b"\x80\x00", 0, 2, 0x8000),
    ],
)
def test_bytes_to_uint(data: bytes, offset: int, length: int, expected: int) -> None:
    assert bytes_to_uint(data, offset, length) == expected


@pytest.mark.parametrize("value", [0.0, 1.0, 0.5, -2.25, 1e-3])
def test_bytes_to_float32(value: float) -> None:
    data = b"\xaa" + struct.pack(">f", value)
    assert bytes_to_float32(data, 1) == struct.unpack(">f", struct.pack(">f", value))[0]


def test_bytes_to_float32_truncated() -> None:
    with pytest.raises(TruncatedInput):
        bytes_to_float32(b"\x00\x00\x00", 0)


@pytest.mark.parametrize(
    "number, divisor, expected", [(0, 2, 0), (1, 2, 2), (2, 2, 2), (5, 4, 8)]
)
def test_pad(number: int, divisor: int, expected: int) -> None:
    assert pad(number, divisor) == expected
