"""
Binary reading utilities.

:py:class:`Cursor` is the sequential big-endian reader every section parser
consumes. The module level functions are pure conversions over byte strings.
"""

import io
import logging
import struct
from typing import BinaryIO, Union

from psd_raster.exceptions import TruncatedInput

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


class Cursor:
    """
    Big-endian reader over a seekable binary stream.

    Example::

        with open("example.psd", "rb") as f:
            reader = Cursor(f)
            signature = reader.read_bytes(4)
            version = reader.read_int16()

    Every read raises :py:exc:`~psd_raster.exceptions.TruncatedInput` when the
    stream ends before the requested number of bytes.
    """

    def __init__(self, fp: BinaryIO):
        self._fp = fp

    @classmethod
    def frombytes(cls, data: BytesLike) -> "Cursor":
        return cls(io.BytesIO(data))

    def read_bytes(self, size: int) -> bytes:
        if size < 0:
            raise ValueError("Negative read size %d" % size)
        if size == 0:
            return b""
        data = self._fp.read(size)
        if len(data) != size:
            raise TruncatedInput(
                "Expected %d bytes at offset %d but got %d"
                % (size, self.tell() - len(data), len(data))
            )
        return data

    def read_byte(self) -> int:
        return self.read_bytes(1)[0]

    def read_int16(self) -> int:
        """Signed 16-bit big-endian integer."""
        return self.read_fmt("h")[0]

    def read_int32(self) -> int:
        """32-bit big-endian integer, without sign extension."""
        return bytes_to_uint(self.read_bytes(4), 0, 4)

    def read_fmt(self, fmt: str) -> tuple:
        """
        Reads data according to the big-endian struct format ``fmt``.
        """
        fmt = ">" + fmt
        return struct.unpack(fmt, self.read_bytes(struct.calcsize(fmt)))

    def seek(self, position: int) -> int:
        return self._fp.seek(position, io.SEEK_SET)

    def skip(self, size: int) -> int:
        return self._fp.seek(size, io.SEEK_CUR)

    def tell(self) -> int:
        return self._fp.tell()

    position = tell


def read_length_block(reader: Cursor) -> bytes:
    """
    Read a block of data prefixed by its 4-byte length.
    """
    length = reader.read_int32()
    return reader.read_bytes(length)


def bytes_to_uint(data: BytesLike, offset: int, length: int) -> int:
    """
    Big-endian unsigned integer of ``length`` bytes starting at ``offset``.
    """
    value = 0
    for index in range(offset, offset + length):
        value = (value << 8) | data[index]
    return value


def bytes_to_float32(data: BytesLike, offset: int = 0) -> float:
    """
    32-bit float stored at ``offset``.

    The four bytes are reversed and read as a little-endian float, which is
    the big-endian float as stored in the file.
    """
    chunk = bytes(data[offset : offset + 4])
    if len(chunk) != 4:
        raise TruncatedInput("Expected 4 bytes at offset %d" % offset)
    return struct.unpack("<f", chunk[::-1])[0]


def pad(number: int, divisor: int) -> int:
    if number % divisor:
        number = (number // divisor + 1) * divisor
    return number

