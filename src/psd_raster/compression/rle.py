"""
Apple PackBits RLE codec.

PackBits is the byte-oriented run-length scheme used for RLE compressed
channel data. A signed header byte selects the run type:

- 0 to 127: copy the next (n + 1) literal bytes
- -127 to -1 (129 to 255 unsigned): repeat the next byte (1 - n) times
- -128 (128 unsigned): no-op

Example::

    Input:  [A, A, A, B, C, C, C, C]
    Output: [254, A, 0, B, 253, C]
            (repeat A 3x, copy B 1x, repeat C 4x)

Functions:

- :py:func:`read`: decode from a :py:class:`~psd_raster.psd.bin_utils.Cursor`
- :py:func:`decode`: decode a byte string
- :py:func:`encode`: reference encoder, the inverse of :py:func:`decode`
"""

import logging

from psd_raster.exceptions import InvalidRLEData
from psd_raster.psd.bin_utils import BytesLike, Cursor

logger = logging.getLogger(__name__)

MAX_RUN = 128
NOOP = 128


def read(reader: Cursor, size: int) -> bytes:
    """read(reader, size) -> bytes

    Decode PackBits data from ``reader`` until ``size`` bytes are produced.
    Input after the last run is left unread.
    """
    result = bytearray(size)
    j = 0
    while j < size:
        bit = reader.read_byte()
        if bit < NOOP:
            count = bit + 1
            if j + count > size:
                raise InvalidRLEData(
                    "Invalid RLE compression: literal run of %d at %d overflows %d"
                    % (count, j, size)
                )
            result[j : j + count] = reader.read_bytes(count)
            j += count
        elif bit > NOOP:
            count = (bit ^ 0xFF) + 2
            if j + count > size:
                raise InvalidRLEData(
                    "Invalid RLE compression: repeat run of %d at %d overflows %d"
                    % (count, j, size)
                )
            result[j : j + count] = reader.read_bytes(1) * count
            j += count
    return bytes(result)


def decode(data: BytesLike, size: int) -> bytes:
    """decode(data, size) -> bytes

    Apple PackBits RLE decoder.
    """
    return read(Cursor.frombytes(data), size)


def encode(data: BytesLike) -> bytes:
    """encode(data) -> bytes

    Apple PackBits RLE encoder. Repeats of two or more bytes become repeat
    runs, everything else literal runs.
    """
    data = bytes(data)
    length = len(data)
    result = bytearray()
    i = 0
    while i < length:
        run = 1
        while i + run < length and run < MAX_RUN and data[i + run] == data[i]:
            run += 1
        if run > 1:
            result.extend((257 - run, data[i]))
            i += run
            continue

        start = i
        i += 1
        while i < length and i - start < MAX_RUN:
            if i + 1 < length and data[i] == data[i + 1]:
                break
            i += 1
        result.append(i - start - 1)
        result.extend(data[start:i])
    return bytes(result)
